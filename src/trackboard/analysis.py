"""Field extraction from comparison-analysis markdown documents.

This is not a markdown parser. Each field has its own anchored pattern and
is extracted independently, so a document missing one section still yields
the others. Anything that doesn't match is left at its empty default.
"""

from __future__ import annotations

import logging
import re

from trackboard.models import AnalysisResult, DimensionScore

logger = logging.getLogger(__name__)

# ---- patterns ----

_OVERALL_RE = re.compile(
    r"Overall Fit(?:\s*Score)?:[^\n]*?(\d+)\s*/\s*100(?:[ \t*]*[—–-]+[ \t]*([^\n]*))?",
    re.IGNORECASE,
)

_DIMENSION_ROW_RE = re.compile(
    r"^[ \t]*\|([^|\n]+)\|[ \t]*\**[ \t]*(\d+)[ \t]*/[ \t]*100[ \t]*\**[ \t]*\|([^|\n]*)\|[ \t]*$",
    re.MULTILINE,
)
_DIMENSION_HEADER_TOKENS = frozenset({"dimension", "dimensions", "category", "area", "criteria"})

_STRENGTHS_HEADER_RE = re.compile(r"^[ \t]*\*\*Key Strengths:?\*\*:?[^\n]*$", re.IGNORECASE | re.MULTILINE)
_GAPS_HEADER_RE = re.compile(r"^[ \t]*\*\*Primary Gaps:?\*\*:?[^\n]*$", re.IGNORECASE | re.MULTILINE)
_CHANGES_HEADER_RE = re.compile(
    r"^[ \t]*(?:#{1,6}[ \t]*|\*\*)Changes Made\b[^\n]*$", re.IGNORECASE | re.MULTILINE
)
_SUMMARY_HEADER_RE = re.compile(r"\A\s*(?:#{1,6}[ \t]*|\*\*)Summary\b[^\n]*(?:\n|\Z)", re.IGNORECASE)
_FLAGGED_HEADER_RE = re.compile(
    r"^[ \t]*(?:#{1,6}[ \t]*|\*\*)Flagged for Review\b[^\n]*$", re.IGNORECASE | re.MULTILINE
)
_REMOVED_RE = re.compile(
    r"\*\*Removed:?\*\*:?[ \t]*(?:\"([^\"\n]+)\"|“([^”\n]+)”|([^\n]+))",
    re.IGNORECASE,
)

_HEADING_RE = re.compile(r"^[ \t]*#{1,6}[ \t]", re.MULTILINE)
_BOLD_LINE_RE = re.compile(r"^[ \t]*\*\*[^*\n]+\*\*[^\n]*$", re.MULTILINE)
_BOLD_ONLY_LINE_RE = re.compile(r"^[ \t]*\*\*[^*\n]+\*\*:?[ \t]*$", re.MULTILINE)

_BULLET_RE = re.compile(r"^[ \t]*[-*+][ \t]+(.+?)[ \t]*$", re.MULTILINE)
_NUMBERED_RE = re.compile(r"^[ \t]*\d+[.)][ \t]+(.+?)[ \t]*$", re.MULTILINE)
_EMPHASIS_RE = re.compile(r"(\*\*|__)(.+?)\1")


def _clean(text: str) -> str:
    return _EMPHASIS_RE.sub(r"\2", text).strip()


def _section(text: str, header: re.Pattern[str], *terminators: re.Pattern[str]) -> str | None:
    """Body following *header* up to the first *terminators* match (or the end)."""
    match = header.search(text)
    if match is None:
        return None
    body = text[match.end():]
    end = len(body)
    for terminator in terminators:
        hit = terminator.search(body)
        if hit is not None:
            end = min(end, hit.start())
    return body[:end]


def _items(body: str | None, pattern: re.Pattern[str] = _BULLET_RE) -> tuple[str, ...]:
    if not body:
        return ()
    return tuple(item for item in (_clean(m.group(1)) for m in pattern.finditer(body)) if item)


# ---- matchers ----


def _match_overall(text: str) -> tuple[int | None, str]:
    match = _OVERALL_RE.search(text)
    if match is None:
        return None, ""
    score = int(match.group(1))
    if not 0 <= score <= 100:
        logger.debug("Ignoring out-of-range fit score %d.", score)
        return None, ""
    label = _clean((match.group(2) or "").strip().strip("*"))
    return score, label


def _match_dimensions(text: str) -> tuple[DimensionScore, ...]:
    rows = []
    for match in _DIMENSION_ROW_RE.finditer(text):
        name = _clean(match.group(1))
        if not name or name.lower() in _DIMENSION_HEADER_TOKENS or set(name) <= set("-: "):
            continue
        score = int(match.group(2))
        if score > 100:
            continue
        rows.append(DimensionScore(name=name, score=score, notes=_clean(match.group(3))))
    return tuple(rows)


def _match_strengths(text: str) -> tuple[str, ...]:
    return _items(_section(text, _STRENGTHS_HEADER_RE, _BOLD_LINE_RE, _HEADING_RE))


def _match_gaps(text: str) -> tuple[str, ...]:
    return _items(_section(text, _GAPS_HEADER_RE, _HEADING_RE))


def _match_changes(text: str) -> tuple[str, ...]:
    body = _section(text, _CHANGES_HEADER_RE)
    if body is None:
        return ()
    summary = _SUMMARY_HEADER_RE.match(body)
    if summary is not None:
        body = body[summary.end():]
    end = len(body)
    for terminator in (_HEADING_RE, _BOLD_ONLY_LINE_RE):
        hit = terminator.search(body)
        if hit is not None:
            end = min(end, hit.start())
    return _items(body[:end])


def _match_removed(text: str) -> tuple[str, ...]:
    found = []
    for match in _REMOVED_RE.finditer(text):
        value = next(g for g in match.groups() if g is not None)
        value = _clean(value)
        if value:
            found.append(value)
    return tuple(found)


def _match_flagged(text: str) -> tuple[str, ...]:
    return _items(_section(text, _FLAGGED_HEADER_RE, _HEADING_RE), _NUMBERED_RE)


# ---- public API ----


def extract_fit_score(text: str | None) -> int | None:
    """Overall fit score only, for table display.

    Uses the same pattern as :func:`extract_analysis` so both always agree.
    """
    if not text or not text.strip():
        return None
    return _match_overall(text.replace("\r\n", "\n"))[0]


def extract_analysis(text: str | None) -> AnalysisResult:
    """Pull every recognised field out of *text*; empty result when absent."""
    if not text or not text.strip():
        return AnalysisResult()
    text = text.replace("\r\n", "\n")
    score, label = _match_overall(text)
    return AnalysisResult(
        overall_score=score,
        overall_label=label,
        dimensions=_match_dimensions(text),
        strengths=_match_strengths(text),
        gaps=_match_gaps(text),
        changes=_match_changes(text),
        removed=_match_removed(text),
        flagged=_match_flagged(text),
    )
