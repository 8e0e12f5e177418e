"""Domain models for Trackboard.

Source records are read once from their JSON form and never mutated; the
``from_dict`` constructors tolerate missing keys and wrong shapes so that a
half-filled tracker still renders.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _str_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [_text(v) for v in value if v is not None and _text(v)]


def _dict_list(value: Any) -> list[dict]:
    if not isinstance(value, list):
        return []
    return [v for v in value if isinstance(v, dict)]


@dataclass(frozen=True)
class Role:
    """One tracked role (active, closed or skipped)."""

    company: str = ""
    role: str = ""
    url: str = ""
    stage: str = ""
    outcome: str = ""
    added: str = ""
    updated: str = ""
    closed: str = ""
    next: str = ""
    reason: str = ""
    folder: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "Role":
        return cls(**{name: _text(data.get(name)) for name in cls.__dataclass_fields__})

    @property
    def key(self) -> str:
        """Identity used by the slug map: ``company|role``."""
        return f"{self.company}|{self.role}"

    @property
    def job_ref(self) -> str:
        """How tasks and interactions reference this role: ``Company - Role``."""
        return f"{self.company} - {self.role}"


@dataclass(frozen=True)
class TrackerData:
    active: tuple[Role, ...] = ()
    closed: tuple[Role, ...] = ()
    skipped: tuple[Role, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> "TrackerData":
        if not isinstance(data, dict):
            return cls()
        return cls(
            active=tuple(Role.from_dict(r) for r in _dict_list(data.get("active"))),
            closed=tuple(Role.from_dict(r) for r in _dict_list(data.get("closed"))),
            skipped=tuple(Role.from_dict(r) for r in _dict_list(data.get("skipped"))),
        )


@dataclass(frozen=True)
class Task:
    task: str = ""
    status: str = "pending"
    due: str = ""
    created: str = ""
    completed: str = ""
    linked_contacts: tuple[str, ...] = ()
    linked_jobs: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: dict) -> "Task":
        return cls(
            task=_text(data.get("task")),
            status=_text(data.get("status")),
            due=_text(data.get("due")),
            created=_text(data.get("created")),
            completed=_text(data.get("completed")),
            linked_contacts=tuple(_str_list(data.get("linkedContacts"))),
            linked_jobs=tuple(_str_list(data.get("linkedJobs"))),
        )

    def is_overdue(self, today_iso: str) -> bool:
        return self.status == "pending" and bool(self.due) and self.due < today_iso


@dataclass(frozen=True)
class Interaction:
    date: str = ""
    type: str = ""
    summary: str = ""
    linked_jobs: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: dict) -> "Interaction":
        return cls(
            date=_text(data.get("date")),
            type=_text(data.get("type")),
            summary=_text(data.get("summary")),
            linked_jobs=tuple(_str_list(data.get("linkedJobs"))),
        )


@dataclass(frozen=True)
class Contact:
    """A network contact; ``interactions`` are kept in ascending date order."""

    name: str = ""
    id: str = ""
    company: str = ""
    title: str = ""
    linkedin: str = ""
    added: str = ""
    interactions: tuple[Interaction, ...] = ()

    @classmethod
    def from_dict(cls, data: dict) -> "Contact":
        interactions = [Interaction.from_dict(i) for i in _dict_list(data.get("interactions"))]
        # Stable, so same-day interactions keep their recorded order.
        interactions.sort(key=lambda i: i.date)
        return cls(
            name=_text(data.get("name")),
            id=_text(data.get("id")),
            company=_text(data.get("company")),
            title=_text(data.get("title")),
            linkedin=_text(data.get("linkedin")),
            added=_text(data.get("added")),
            interactions=tuple(interactions),
        )

    @property
    def last_interaction(self) -> Interaction | None:
        return self.interactions[-1] if self.interactions else None

    @property
    def last_contact_date(self) -> str:
        last = self.last_interaction
        return last.date if last else self.added


def tasks_from_dict(data: Any) -> tuple[Task, ...]:
    if not isinstance(data, dict):
        return ()
    return tuple(Task.from_dict(t) for t in _dict_list(data.get("tasks")))


def contacts_from_dict(data: Any) -> tuple[Contact, ...]:
    if not isinstance(data, dict):
        return ()
    return tuple(Contact.from_dict(c) for c in _dict_list(data.get("contacts")))


# ---- derived ----


@dataclass(frozen=True)
class DimensionScore:
    name: str
    score: int
    notes: str = ""


@dataclass(frozen=True)
class AnalysisResult:
    """Structured fields pulled out of a comparison-analysis document."""

    overall_score: int | None = None
    overall_label: str = ""
    dimensions: tuple[DimensionScore, ...] = ()
    strengths: tuple[str, ...] = ()
    gaps: tuple[str, ...] = ()
    changes: tuple[str, ...] = ()
    removed: tuple[str, ...] = ()
    flagged: tuple[str, ...] = ()

    @property
    def has_fit_data(self) -> bool:
        return bool(
            self.overall_score is not None
            or self.dimensions
            or self.strengths
            or self.gaps
        )

    @property
    def has_resume_changes(self) -> bool:
        return bool(self.changes or self.removed or self.flagged)


@dataclass(frozen=True)
class RoleDocuments:
    """Raw text of a role's optional documents (``None`` when absent)."""

    analysis: str | None = None
    notes: str | None = None
    job_description: str | None = None
    research: str | None = None


@dataclass(frozen=True)
class KpiCard:
    value: int
    label: str
    warning: bool = False


@dataclass(frozen=True)
class CurrentMetrics:
    active_count: int
    applied_count: int
    interviewing_count: int
    updated_this_week: int
    current_pipeline: dict[str, int]


@dataclass(frozen=True)
class HistoricalMetrics:
    total_roles: int
    days_active: int
    historical_pipeline: dict[str, int]
    conversion_rates: dict[str, int]
    outcomes: dict[str, int]
    avg_days_to_response: int
    closed_count: int
    skipped_count: int


@dataclass(frozen=True)
class TaskMetrics:
    pending_count: int
    completed_count: int
    due_soon_count: int
    overdue_count: int
    pending: tuple[Task, ...]
    completed: tuple[Task, ...]


@dataclass(frozen=True)
class RecentInteraction:
    """An interaction tagged with the contact it belongs to."""

    interaction: Interaction
    contact_name: str
    contact_id: str


@dataclass(frozen=True)
class NetworkMetrics:
    contact_count: int
    total_interactions: int
    recent_interaction_count: int
    contacts_with_jobs_count: int
    contacts: tuple[Contact, ...]
    recent_interactions: tuple[RecentInteraction, ...]


@dataclass
class BuildReport:
    """Outcome of one site build."""

    today: str
    index_path: str = ""
    detail_pages: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    active_count: int = 0
    applied_count: int = 0
    interviewing_count: int = 0
    pending_tasks: int = 0
    overdue_tasks: int = 0
    contact_count: int = 0
