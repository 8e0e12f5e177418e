"""Per-role detail page content.

Fit Assessment, Notes and Job Description tabs are always present (with a
hint when their source is missing). Tasks & Contacts, Resume Changes and
Research Packet only exist when they have something to show.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable

from trackboard.models import AnalysisResult, Contact, Role, RoleDocuments, Task
from trackboard.rendering.fragments import render_task_rows, sort_pending
from trackboard.rendering.markup import (
    badge,
    escape_html,
    format_date,
    format_fit_score,
    link,
    render_markdown,
)


@dataclass(frozen=True)
class Tab:
    id: str
    label: str
    html: str


def _hint(message: str) -> str:
    return f'<p class="empty-hint">{message}</p>'


def _list(items: Iterable[str], tag: str = "ul", css: str = "") -> str:
    cls = f' class="{css}"' if css else ""
    body = "".join(f"<li>{escape_html(item)}</li>" for item in items)
    return f"<{tag}{cls}>{body}</{tag}>"


def _document_or_hint(text: str | None, hint: str) -> str:
    if text and text.strip():
        return f'<div class="markdown-body">{render_markdown(text)}</div>'
    return _hint(hint)


# ---- tabs ----


def render_fit_tab(analysis: AnalysisResult, analysis_filename: str) -> str:
    if not analysis.has_fit_data:
        return _hint(
            f"No fit assessment yet. Add <code>{escape_html(analysis_filename)}</code> "
            "to this role's folder."
        )
    parts = ['<div class="fit-summary">', format_fit_score(analysis.overall_score)]
    if analysis.overall_label:
        parts.append(f'<span class="fit-label">{escape_html(analysis.overall_label)}</span>')
    parts.append("</div>")

    if analysis.dimensions:
        rows = "".join(
            "<tr>"
            f"<td>{escape_html(d.name)}</td>"
            f"<td>{format_fit_score(d.score)}</td>"
            f"<td>{escape_html(d.notes)}</td>"
            "</tr>"
            for d in analysis.dimensions
        )
        parts.append(
            '<table class="dimension-table"><thead><tr>'
            "<th>Dimension</th><th>Score</th><th>Notes</th>"
            f"</tr></thead><tbody>{rows}</tbody></table>"
        )
    if analysis.strengths:
        parts.append("<h3>Key Strengths</h3>" + _list(analysis.strengths, css="strength-list"))
    if analysis.gaps:
        parts.append("<h3>Primary Gaps</h3>" + _list(analysis.gaps, css="gap-list"))
    return "\n".join(parts)


def related_tasks(tasks: Iterable[Task], role: Role) -> list[Task]:
    return [t for t in tasks if role.job_ref in t.linked_jobs]


def related_contacts(contacts: Iterable[Contact], role: Role) -> list[Contact]:
    return [
        c for c in contacts if any(role.job_ref in i.linked_jobs for i in c.interactions)
    ]


def render_connections_tab(tasks: list[Task], contacts: list[Contact], role: Role, today: date) -> str:
    parts = []
    if tasks:
        pending = sort_pending([t for t in tasks if t.status == "pending"], today)
        done = [t for t in tasks if t.status != "pending"]
        parts.append(
            "<h3>Tasks</h3>"
            '<table class="roles-table"><thead><tr>'
            "<th>Task</th><th>Due</th><th>Linked</th><th>Created</th>"
            f"</tr></thead><tbody>{render_task_rows([*pending, *done], today)}</tbody></table>"
        )
    if contacts:
        items = []
        for contact in contacts:
            interactions = "".join(
                f'<li><span class="interaction-date">{format_date(i.date)}</span> '
                f"{badge(i.type)} {escape_html(i.summary)}</li>"
                for i in contact.interactions
                if role.job_ref in i.linked_jobs
            )
            title = f" · {escape_html(contact.title)}" if contact.title else ""
            items.append(
                '<div class="contact-card">'
                f'<div class="contact-name">{link(contact.linkedin, contact.name)}{title}</div>'
                f'<ul class="interaction-list">{interactions}</ul>'
                "</div>"
            )
        parts.append("<h3>Contacts</h3>" + "".join(items))
    return "\n".join(parts)


def render_resume_changes_tab(analysis: AnalysisResult) -> str:
    parts = []
    if analysis.changes:
        parts.append("<h3>Changes Made</h3>" + _list(analysis.changes, css="change-list"))
    if analysis.removed:
        parts.append("<h3>Removed</h3>" + _list(analysis.removed, css="removed-list"))
    if analysis.flagged:
        parts.append("<h3>Flagged for Review</h3>" + _list(analysis.flagged, tag="ol", css="flagged-list"))
    return "\n".join(parts)


def select_tabs(
    role: Role,
    analysis: AnalysisResult,
    documents: RoleDocuments,
    tasks: Iterable[Task],
    contacts: Iterable[Contact],
    today: date,
    analysis_filename: str = "comparison-analysis.md",
) -> list[Tab]:
    """Tabs for one role, in display order."""
    tabs = [
        Tab("fit", "Fit Assessment", render_fit_tab(analysis, analysis_filename)),
        Tab("notes", "Notes", _document_or_hint(documents.notes, "No notes for this role yet.")),
        Tab(
            "jd",
            "Job Description",
            _document_or_hint(documents.job_description, "No job description saved for this role."),
        ),
    ]

    linked_tasks = related_tasks(tasks, role)
    linked_contacts = related_contacts(contacts, role)
    if linked_tasks or linked_contacts:
        tabs.append(
            Tab("connections", "Tasks & Contacts", render_connections_tab(linked_tasks, linked_contacts, role, today))
        )
    if analysis.has_resume_changes:
        tabs.append(Tab("resume", "Resume Changes", render_resume_changes_tab(analysis)))
    if documents.research and documents.research.strip():
        tabs.append(Tab("research", "Research Packet", _document_or_hint(documents.research, "")))
    return tabs


def render_tab_buttons(tabs: list[Tab]) -> str:
    return "\n".join(
        f'<button class="tab-btn{" active" if i == 0 else ""}" data-tab="{tab.id}">{escape_html(tab.label)}</button>'
        for i, tab in enumerate(tabs)
    )


def render_tab_contents(tabs: list[Tab]) -> str:
    return "\n".join(
        f'<div class="tab-content{" active" if i == 0 else ""}" id="tab-{tab.id}">{tab.html}</div>'
        for i, tab in enumerate(tabs)
    )


def render_status_badge(role: Role) -> str:
    parts = []
    if role.stage:
        parts.append(badge(role.stage))
    if role.outcome:
        parts.append(badge(role.outcome))
    return " ".join(parts) or "-"


def render_role_meta(role: Role) -> str:
    items = [
        ("Added", format_date(role.added)),
        ("Updated", format_date(role.updated)),
    ]
    if role.closed:
        items.append(("Closed", format_date(role.closed)))
    if role.next:
        items.append(("Next", escape_html(role.next)))
    if role.url:
        items.append(("Posting", link(role.url, "View posting")))
    return "".join(
        f'<li><span class="metric-label">{label}:</span> <span class="metric-value">{value}</span></li>'
        for label, value in items
    )
