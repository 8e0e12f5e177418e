"""Aggregate statistics over tracked roles, tasks and contacts.

All functions are pure. Date windows are compared as ISO ``YYYY-MM-DD``
strings against a *today* captured once per build, so there is no
time-of-day or timezone drift at day boundaries.
"""

from __future__ import annotations

import logging
import math
from datetime import date, timedelta
from typing import Iterable

from trackboard.models import (
    Contact,
    CurrentMetrics,
    HistoricalMetrics,
    NetworkMetrics,
    RecentInteraction,
    Role,
    Task,
    TaskMetrics,
    TrackerData,
)
from trackboard.stages import (
    APPLIED_STAGE,
    ASSUMED_CLOSED_STAGES,
    INTERVIEW_STAGE,
    OUTCOMES,
    STAGE_ORDER,
    is_known_stage,
    stage_index,
    stages_from,
)

logger = logging.getLogger(__name__)

REQUIRED_ROLE_FIELDS: tuple[str, ...] = ("company", "role", "url", "added")


def iso_days_from(today: date, days: int) -> str:
    """ISO date string *days* after *today* (negative for the past)."""
    return (today + timedelta(days=days)).isoformat()


def parse_iso_date(value: str) -> date | None:
    try:
        return date.fromisoformat(value[:10])
    except (TypeError, ValueError):
        return None


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def percent(numerator: int, denominator: int) -> int:
    """Whole-number percentage, ``0`` when *denominator* is zero."""
    if denominator <= 0:
        return 0
    return round_half_up(numerator / denominator * 100)


# ---- current state ----


def compute_current_metrics(tracker: TrackerData, today: date, recent_days: int = 7) -> CurrentMetrics:
    """Snapshot of active roles: exact per-stage counts and headline figures."""
    active = tracker.active

    current_pipeline = {stage: 0 for stage in STAGE_ORDER}
    for role in active:
        if role.stage in current_pipeline:
            current_pipeline[role.stage] += 1

    applied_stages = set(stages_from(APPLIED_STAGE))
    interviewing_stages = set(stages_from(INTERVIEW_STAGE))
    week_ago = iso_days_from(today, -recent_days)

    return CurrentMetrics(
        active_count=len(active),
        applied_count=sum(1 for r in active if r.stage in applied_stages),
        interviewing_count=sum(1 for r in active if r.stage in interviewing_stages),
        updated_this_week=sum(1 for r in active if r.updated and r.updated >= week_ago),
        current_pipeline=current_pipeline,
    )


# ---- all time ----


def _credit_stages(pipeline: dict[str, int], stages: Iterable[str]) -> None:
    for stage in stages:
        pipeline[stage] += 1


def historical_pipeline(active: Iterable[Role], closed: Iterable[Role]) -> dict[str, int]:
    """Cumulative count of roles that reached each stage.

    A role at stage S counts toward S and every stage before it. Closed roles
    with no recorded stage are credited with :data:`ASSUMED_CLOSED_STAGES`;
    that is an assumption, not a measurement, and inflates the first two
    columns when closures are recorded without a stage.
    """
    pipeline = {stage: 0 for stage in STAGE_ORDER}
    for role in active:
        idx = stage_index(role.stage)
        if idx >= 0:
            _credit_stages(pipeline, STAGE_ORDER[: idx + 1])
    for role in closed:
        if not role.stage:
            _credit_stages(pipeline, ASSUMED_CLOSED_STAGES)
            continue
        idx = stage_index(role.stage)
        if idx >= 0:
            _credit_stages(pipeline, STAGE_ORDER[: idx + 1])
    return pipeline


def conversion_rates(pipeline: dict[str, int]) -> dict[str, int]:
    """Percentage of roles at each stage that came from the stage before it."""
    return {
        STAGE_ORDER[i]: percent(pipeline[STAGE_ORDER[i]], pipeline[STAGE_ORDER[i - 1]])
        for i in range(1, len(STAGE_ORDER))
    }


def average_days_to_response(roles: Iterable[Role]) -> int:
    """Mean whole days from ``added`` to ``updated`` for roles past the first stage."""
    deltas: list[int] = []
    for role in roles:
        if stage_index(role.stage) <= 0 or not (role.added and role.updated):
            continue
        added = parse_iso_date(role.added)
        updated = parse_iso_date(role.updated)
        if added is None or updated is None:
            continue
        days = (updated - added).days
        if days > 0:
            deltas.append(days)
    if not deltas:
        return 0
    return round_half_up(sum(deltas) / len(deltas))


def days_active(tracker: TrackerData, today: date) -> int:
    """Whole days since the earliest ``added`` date across every collection."""
    added = sorted(
        r.added
        for r in (*tracker.active, *tracker.closed, *tracker.skipped)
        if r.added and parse_iso_date(r.added) is not None
    )
    if not added:
        return 0
    earliest = parse_iso_date(added[0])
    assert earliest is not None
    return max(0, (today - earliest).days)


def compute_historical_metrics(tracker: TrackerData, today: date) -> HistoricalMetrics:
    pipeline = historical_pipeline(tracker.active, tracker.closed)
    outcomes = {outcome: 0 for outcome in OUTCOMES}
    for role in tracker.closed:
        if role.outcome in outcomes:
            outcomes[role.outcome] += 1

    return HistoricalMetrics(
        total_roles=len(tracker.active) + len(tracker.closed),
        days_active=days_active(tracker, today),
        historical_pipeline=pipeline,
        conversion_rates=conversion_rates(pipeline),
        outcomes=outcomes,
        avg_days_to_response=average_days_to_response((*tracker.active, *tracker.closed)),
        closed_count=len(tracker.closed),
        skipped_count=len(tracker.skipped),
    )


# ---- tasks ----


def compute_task_metrics(tasks: Iterable[Task], today: date, due_soon_days: int = 3) -> TaskMetrics:
    tasks = tuple(tasks)
    pending = tuple(t for t in tasks if t.status == "pending")
    completed = tuple(t for t in tasks if t.status == "completed")

    today_iso = today.isoformat()
    soon_iso = iso_days_from(today, due_soon_days)

    return TaskMetrics(
        pending_count=len(pending),
        completed_count=len(completed),
        due_soon_count=sum(1 for t in pending if t.due and t.due <= soon_iso),
        overdue_count=sum(1 for t in pending if t.is_overdue(today_iso)),
        pending=pending,
        completed=completed,
    )


# ---- network ----


def compute_network_metrics(contacts: Iterable[Contact], today: date, recent_days: int = 7) -> NetworkMetrics:
    contacts = tuple(contacts)
    week_ago = iso_days_from(today, -recent_days)

    recent = [
        RecentInteraction(interaction=i, contact_name=c.name, contact_id=c.id)
        for c in contacts
        for i in c.interactions
        if i.date and i.date >= week_ago
    ]
    recent.sort(key=lambda r: r.contact_name.lower())
    recent.sort(key=lambda r: r.interaction.date, reverse=True)

    return NetworkMetrics(
        contact_count=len(contacts),
        total_interactions=sum(len(c.interactions) for c in contacts),
        recent_interaction_count=len(recent),
        contacts_with_jobs_count=sum(
            1 for c in contacts if any(i.linked_jobs for i in c.interactions)
        ),
        contacts=contacts,
        recent_interactions=tuple(recent),
    )


# ---- validation ----


def _missing_fields(role: Role) -> list[str]:
    return [name for name in REQUIRED_ROLE_FIELDS if not getattr(role, name)]


def validate_tracker(tracker: TrackerData) -> list[str]:
    """Return human-readable data-quality warnings; never raises."""
    warnings: list[str] = []

    for i, role in enumerate(tracker.active):
        for name in _missing_fields(role):
            warnings.append(f"active[{i}] missing required field: {name}")
        if role.stage and not is_known_stage(role.stage):
            warnings.append(f'active[{i}] invalid stage: "{role.stage}"')

    for i, role in enumerate(tracker.closed):
        for name in _missing_fields(role):
            warnings.append(f"closed[{i}] missing required field: {name}")
        if role.stage and not is_known_stage(role.stage):
            warnings.append(f'closed[{i}] invalid stage: "{role.stage}"')
        if role.outcome and role.outcome not in OUTCOMES:
            warnings.append(f'closed[{i}] invalid outcome: "{role.outcome}"')

    for warning in warnings:
        logger.warning("Validation: %s", warning)
    return warnings
