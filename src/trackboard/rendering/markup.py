"""Small HTML building blocks shared by every fragment."""

from __future__ import annotations

import html

import markdown as md

from trackboard.metrics import parse_iso_date
from trackboard.stages import fit_category, stage_to_class

_MARKDOWN_EXTENSIONS = ["tables", "fenced_code", "sane_lists"]


def escape_html(value: object) -> str:
    """Escape ``& < > " '`` (ampersand first); ``None`` becomes ``""``."""
    if value is None:
        return ""
    return html.escape(str(value), quote=True)


def format_date(value: str) -> str:
    """``2024-10-07`` -> ``Oct 7``; ``-`` when missing."""
    if not value:
        return "-"
    parsed = parse_iso_date(value)
    if parsed is None:
        return escape_html(value)
    return f"{parsed:%b} {parsed.day}"


def link(url: str, text: str) -> str:
    """External link with escaped text, or just the text when *url* is empty."""
    if not url:
        return escape_html(text)
    return f'<a href="{escape_html(url)}" target="_blank" rel="noopener">{escape_html(text)}</a>'


def badge(name: str) -> str:
    return f'<span class="badge badge-{escape_html(stage_to_class(name))}">{escape_html(name)}</span>'


def format_fit_score(score: int | None) -> str:
    category = fit_category(score)
    if score is None:
        return f'<span class="fit-score fit-{category}">—</span>'
    return f'<span class="fit-score fit-{category}">{score}</span>'


def job_company(ref: str) -> str:
    """Company part of a ``Company - Role`` reference."""
    return ref.split(" - ")[0]


def format_linked_items(contacts: tuple[str, ...], jobs: tuple[str, ...]) -> str:
    return ", ".join([*contacts, *(job_company(j) for j in jobs)])


def render_markdown(text: str) -> str:
    """Hand a whole document to the markdown renderer."""
    return md.markdown(text, extensions=_MARKDOWN_EXTENSIONS, output_format="html")
