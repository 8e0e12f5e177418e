"""Stage vocabulary and fit-score ladder.

Every component that needs stage order, outcome names or fit-score bands
reads them from here.
"""

from __future__ import annotations

import re

STAGE_ORDER: tuple[str, ...] = (
    "Sourced",
    "Applied",
    "Recruiter Screen",
    "HM Interview",
    "Onsite",
    "Offer",
    "Negotiating",
)

# Roles at or past this stage count as applied.
APPLIED_STAGE = "Applied"
# Roles at or past this stage count as interviewing.
INTERVIEW_STAGE = "Recruiter Screen"

# Closed roles without a recorded stage are credited with these.
ASSUMED_CLOSED_STAGES: tuple[str, ...] = ("Sourced", "Applied")

OUTCOMES: tuple[str, ...] = ("Rejected", "Withdrew", "Accepted", "Expired")

# (minimum score, category), checked top to bottom.
FIT_BANDS: tuple[tuple[int, str], ...] = (
    (90, "exceptional"),
    (85, "strong"),
    (78, "good"),
    (70, "risk"),
    (60, "stretch"),
)
FIT_FLOOR = "weak"
FIT_NONE = "none"

_WS_RE = re.compile(r"\s+")


def stage_index(stage: str | None) -> int:
    """Position of *stage* in :data:`STAGE_ORDER`, or ``-1`` if unknown."""
    try:
        return STAGE_ORDER.index(stage)  # type: ignore[arg-type]
    except ValueError:
        return -1


def is_known_stage(stage: str | None) -> bool:
    return stage_index(stage) >= 0


def stages_from(stage: str) -> tuple[str, ...]:
    """All stages at or after *stage*."""
    return STAGE_ORDER[STAGE_ORDER.index(stage):]


def stage_to_class(name: str | None) -> str:
    """Machine-safe form of a stage (or outcome/type) name for CSS and data attributes."""
    return _WS_RE.sub("-", (name or "").lower())


def fit_category(score: int | None) -> str:
    if score is None:
        return FIT_NONE
    for floor, category in FIT_BANDS:
        if score >= floor:
            return category
    return FIT_FLOOR
