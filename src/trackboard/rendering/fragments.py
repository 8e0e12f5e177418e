"""Dashboard HTML fragments built from metrics bundles.

Every function returns a string and touches nothing else. Free text from the
tracker always goes through :func:`escape_html`; only generated class names
and integer counts are interpolated directly.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, Mapping

from trackboard.models import (
    Contact,
    CurrentMetrics,
    HistoricalMetrics,
    KpiCard,
    NetworkMetrics,
    Role,
    Task,
    TaskMetrics,
)
from trackboard.rendering.markup import (
    badge,
    escape_html,
    format_date,
    format_fit_score,
    format_linked_items,
    link,
)
from trackboard.stages import OUTCOMES, STAGE_ORDER, stage_index, stage_to_class

_ARROW = '<span class="pipeline-arrow">→</span>'


def _empty_row(colspan: int, message: str) -> str:
    return f'<tr><td colspan="{colspan}" class="empty-state">{message}</td></tr>'


def _role_cell(role: Role, slugs: Mapping[str, str] | None, detail_prefix: str) -> str:
    slug = (slugs or {}).get(role.key)
    if not slug:
        return escape_html(role.role)
    return f'<a href="{detail_prefix}{slug}.html">{escape_html(role.role)}</a>'


# ---- KPI cards ----


def render_kpi_cards(cards: Iterable[KpiCard]) -> str:
    """Uniform markup for every KPI group; the dashboard script relies on it."""
    return "\n".join(
        f'<div class="kpi-card{" kpi-warning" if card.warning else ""}">'
        f'<div class="kpi-value">{int(card.value)}</div>'
        f'<div class="kpi-label">{escape_html(card.label)}</div>'
        f"</div>"
        for card in cards
    )


def application_kpis(metrics: CurrentMetrics) -> list[KpiCard]:
    return [
        KpiCard(metrics.active_count, "Active Roles"),
        KpiCard(metrics.applied_count, "Applied"),
        KpiCard(metrics.updated_this_week, "Updated This Week"),
        KpiCard(metrics.interviewing_count, "Interviewing"),
    ]


def task_kpis(metrics: TaskMetrics) -> list[KpiCard]:
    return [
        KpiCard(metrics.pending_count, "Pending Tasks"),
        KpiCard(metrics.overdue_count, "Overdue", warning=metrics.overdue_count > 0),
        KpiCard(metrics.due_soon_count, "Due Soon"),
        KpiCard(metrics.completed_count, "Completed"),
    ]


def network_kpis(metrics: NetworkMetrics) -> list[KpiCard]:
    return [
        KpiCard(metrics.contact_count, "Contacts"),
        KpiCard(metrics.total_interactions, "Total Interactions"),
        KpiCard(metrics.recent_interaction_count, "This Week"),
        KpiCard(metrics.contacts_with_jobs_count, "Linked to Jobs"),
    ]


# ---- pipelines ----


def render_current_pipeline(metrics: CurrentMetrics) -> str:
    buttons = []
    for stage in STAGE_ORDER:
        count = metrics.current_pipeline.get(stage, 0)
        disabled = " disabled" if count == 0 else ""
        buttons.append(
            f'<button class="pipeline-stage {stage_to_class(stage)}" '
            f'data-stage="{escape_html(stage)}"{disabled}>'
            f'<span class="stage-name">{escape_html(stage)}</span>'
            f'<span class="stage-count">{count}</span>'
            f"</button>"
        )
    return _ARROW.join(buttons)


def render_historical_pipeline(metrics: HistoricalMetrics) -> str:
    cells = []
    for index, stage in enumerate(STAGE_ORDER):
        count = metrics.historical_pipeline.get(stage, 0)
        rate_html = ""
        if index > 0:
            rate_html = f'<span class="conversion-rate">{metrics.conversion_rates.get(stage, 0)}%</span>'
        cells.append(
            f'<div class="historical-stage {stage_to_class(stage)}">'
            f'<span class="stage-name">{escape_html(stage)}</span>'
            f'<span class="stage-count">{count}</span>'
            f"{rate_html}</div>"
        )
    return _ARROW.join(cells)


def render_historical_stats(metrics: HistoricalMetrics) -> str:
    rates = "".join(
        f'<li><span class="metric-label">{escape_html(stage)}:</span> '
        f'<span class="metric-value">{metrics.conversion_rates.get(stage, 0)}%</span></li>'
        for stage in STAGE_ORDER[1:]
    )
    outcomes = "".join(
        f'<li>{badge(outcome)} <span class="metric-value">{metrics.outcomes.get(outcome, 0)}</span></li>'
        for outcome in OUTCOMES
    )
    return f"""
    <div class="historical-grid">
      <div class="historical-funnel">
        <h4>All-Time Pipeline</h4>
        <div class="historical-pipeline">{render_historical_pipeline(metrics)}</div>
      </div>
      <div class="historical-metrics">
        <div class="metrics-column">
          <h4>Conversion Rates</h4>
          <ul class="conversion-list">{rates}</ul>
        </div>
        <div class="metrics-column">
          <h4>Outcomes</h4>
          <ul class="outcome-list">{outcomes}</ul>
        </div>
        <div class="metrics-column">
          <h4>Timeline</h4>
          <ul class="timeline-list">
            <li><span class="metric-label">Days active:</span> <span class="metric-value">{metrics.days_active}</span></li>
            <li><span class="metric-label">Total roles:</span> <span class="metric-value">{metrics.total_roles}</span></li>
            <li><span class="metric-label">Avg response:</span> <span class="metric-value">{metrics.avg_days_to_response} days</span></li>
          </ul>
        </div>
      </div>
    </div>
    """


# ---- role tables ----
#
# Each sort is a chain of stable sorts, least significant key first, ending in
# company/role ascending so equal rows have a fixed order.


def _by_identity(roles: Iterable[Role]) -> list[Role]:
    return sorted(roles, key=lambda r: (r.company.lower(), r.role.lower()))


def sort_active(roles: Iterable[Role]) -> list[Role]:
    """Later stage first, then most recently updated, then company/role."""
    ordered = _by_identity(roles)
    ordered.sort(key=lambda r: r.updated, reverse=True)
    ordered.sort(key=lambda r: stage_index(r.stage), reverse=True)
    return ordered


def sort_closed(roles: Iterable[Role]) -> list[Role]:
    """Most recently closed first, then company/role."""
    ordered = _by_identity(roles)
    ordered.sort(key=lambda r: r.closed, reverse=True)
    return ordered


def sort_skipped(roles: Iterable[Role]) -> list[Role]:
    """Most recently added first, then company/role."""
    ordered = _by_identity(roles)
    ordered.sort(key=lambda r: r.added, reverse=True)
    return ordered


def render_active_table(
    roles: Iterable[Role],
    fit_scores: Mapping[str, int | None] | None = None,
    slugs: Mapping[str, str] | None = None,
    detail_prefix: str = "roles/",
) -> str:
    ordered = sort_active(roles)
    if not ordered:
        return _empty_row(6, "No active roles")
    fit_scores = fit_scores or {}
    rows = []
    for role in ordered:
        score = fit_scores.get(role.key)
        stage_cell = badge(role.stage) if role.stage else "-"
        rows.append(
            f'<tr data-stage="{escape_html(role.stage)}" '
            f'data-fit="{score if score is not None else ""}" '
            f'data-updated="{escape_html(role.updated)}">'
            f'<td class="col-company">{link(role.url, role.company)}</td>'
            f'<td class="col-role">{_role_cell(role, slugs, detail_prefix)}</td>'
            f'<td class="col-fit">{format_fit_score(score)}</td>'
            f'<td class="col-stage">{stage_cell}</td>'
            f'<td class="col-next" title="{escape_html(role.next)}">{escape_html(role.next)}</td>'
            f'<td class="col-updated">{format_date(role.updated)}</td>'
            f"</tr>"
        )
    return "\n".join(rows)


def render_closed_table(
    roles: Iterable[Role],
    slugs: Mapping[str, str] | None = None,
    detail_prefix: str = "roles/",
) -> str:
    ordered = sort_closed(roles)
    if not ordered:
        return _empty_row(5, "No closed roles")
    rows = []
    for role in ordered:
        stage_cell = badge(role.stage) if role.stage else "-"
        outcome_cell = badge(role.outcome) if role.outcome else "-"
        rows.append(
            "<tr>"
            f"<td>{link(role.url, role.company)}</td>"
            f"<td>{_role_cell(role, slugs, detail_prefix)}</td>"
            f"<td>{stage_cell}</td>"
            f"<td>{outcome_cell}</td>"
            f"<td>{format_date(role.closed)}</td>"
            "</tr>"
        )
    return "\n".join(rows)


def render_skipped_table(roles: Iterable[Role]) -> str:
    ordered = sort_skipped(roles)
    if not ordered:
        return _empty_row(4, "No skipped roles")
    return "\n".join(
        "<tr>"
        f"<td>{link(role.url, role.company)}</td>"
        f"<td>{escape_html(role.role)}</td>"
        f"<td>{escape_html(role.reason)}</td>"
        f"<td>{format_date(role.added)}</td>"
        "</tr>"
        for role in ordered
    )


# ---- task tables ----


def sort_pending(tasks: Iterable[Task], today: date) -> list[Task]:
    """Overdue first, then due date ascending (undated last), then newest created."""
    today_iso = today.isoformat()
    ordered = sorted(tasks, key=lambda t: t.created, reverse=True)
    ordered.sort(key=lambda t: (not t.is_overdue(today_iso), not t.due, t.due))
    return ordered


def sort_completed(tasks: Iterable[Task], limit: int = 10) -> list[Task]:
    """Most recently completed (or created) first, truncated to *limit*."""
    ordered = sorted(tasks, key=lambda t: t.task)
    ordered.sort(key=lambda t: t.completed or t.created, reverse=True)
    return ordered[:limit]


def render_task_rows(tasks: Iterable[Task], today: date) -> str:
    today_iso = today.isoformat()
    rows = []
    for task in tasks:
        linked = format_linked_items(task.linked_contacts, task.linked_jobs)
        overdue = task.is_overdue(today_iso)
        rows.append(
            f'<tr class="{"overdue" if overdue else ""}">'
            f'<td class="col-task">{escape_html(task.task)}</td>'
            f'<td class="col-due">{format_date(task.due) if task.due else "—"}</td>'
            f'<td class="col-linked" title="{escape_html(linked)}">{escape_html(linked) or "—"}</td>'
            f'<td class="col-created">{format_date(task.created)}</td>'
            "</tr>"
        )
    return "\n".join(rows)


def render_pending_tasks_table(metrics: TaskMetrics, today: date) -> str:
    ordered = sort_pending(metrics.pending, today)
    if not ordered:
        return _empty_row(4, "No pending tasks")
    return render_task_rows(ordered, today)


def render_completed_tasks_table(metrics: TaskMetrics, limit: int = 10) -> str:
    ordered = sort_completed(metrics.completed, limit)
    if not ordered:
        return _empty_row(3, "No completed tasks")
    rows = []
    for task in ordered:
        linked = format_linked_items(task.linked_contacts, task.linked_jobs)
        rows.append(
            "<tr>"
            f'<td class="col-task">{escape_html(task.task)}</td>'
            f'<td class="col-linked">{escape_html(linked) or "—"}</td>'
            f'<td class="col-created">{format_date(task.completed or task.created)}</td>'
            "</tr>"
        )
    return "\n".join(rows)


# ---- network tables ----


def sort_contacts(contacts: Iterable[Contact]) -> list[Contact]:
    """Most recent interaction (or ``added``) first, then name."""
    ordered = sorted(contacts, key=lambda c: c.name.lower())
    ordered.sort(key=lambda c: c.last_contact_date, reverse=True)
    return ordered


def render_contact_row(contact: Contact) -> str:
    last = contact.last_interaction
    last_str = f"{format_date(last.date)} ({escape_html(last.type)})" if last else "—"
    linked_jobs = sum(len(i.linked_jobs) for i in contact.interactions)
    return (
        "<tr>"
        f'<td class="col-name">{link(contact.linkedin, contact.name)}</td>'
        f'<td class="col-company">{escape_html(contact.company or "—")}</td>'
        f'<td class="col-title">{escape_html(contact.title or "—")}</td>'
        f'<td class="col-last-contact">{last_str}</td>'
        f'<td class="col-linked-jobs">{f"{linked_jobs} roles" if linked_jobs else "—"}</td>'
        "</tr>"
    )


def render_contacts_table(metrics: NetworkMetrics) -> str:
    ordered = sort_contacts(metrics.contacts)
    if not ordered:
        return _empty_row(5, "No contacts yet")
    return "\n".join(render_contact_row(c) for c in ordered)


def render_recent_interactions_table(metrics: NetworkMetrics, limit: int = 10) -> str:
    recent = metrics.recent_interactions[:limit]
    if not recent:
        return _empty_row(4, "No interactions this week")
    rows = []
    for item in recent:
        interaction = item.interaction
        rows.append(
            "<tr>"
            f'<td class="col-date">{format_date(interaction.date)}</td>'
            f'<td class="col-contact">{escape_html(item.contact_name)}</td>'
            f'<td class="col-type">{badge(interaction.type)}</td>'
            f'<td class="col-summary" title="{escape_html(interaction.summary)}">'
            f"{escape_html(interaction.summary)}</td>"
            "</tr>"
        )
    return "\n".join(rows)
