"""Build coordinator — Load → Compute → Render → Write."""

from __future__ import annotations

import logging
import shutil
from datetime import date, datetime
from pathlib import Path

from trackboard.analysis import extract_analysis, extract_fit_score
from trackboard.loader import load_role_documents, load_sources
from trackboard.metrics import (
    compute_current_metrics,
    compute_historical_metrics,
    compute_network_metrics,
    compute_task_metrics,
    validate_tracker,
)
from trackboard.models import (
    BuildReport,
    Contact,
    Role,
    RoleDocuments,
    Task,
    TrackerData,
    contacts_from_dict,
    tasks_from_dict,
)
from trackboard.rendering import detail, fragments
from trackboard.rendering.markup import escape_html, format_fit_score
from trackboard.rendering.page import embed_json, fill_placeholders, load_template, sanitize_tracker
from trackboard.settings import AppSettings
from trackboard.slugs import assign_slugs
from trackboard.stages import STAGE_ORDER

logger = logging.getLogger(__name__)

_TEMPLATE_NAMES = ("index.html", "detail.html", "styles.css", "script.js")


def format_timestamp(moment: datetime) -> str:
    """``Oct 17, 2026 9:05 AM``"""
    hour = moment.hour % 12 or 12
    return f"{moment:%b} {moment.day}, {moment.year} {hour}:{moment:%M %p}"


class SiteBuilder:
    """Turns the tracker, task list and network into a static site.

    *today* is the reference date for every relative-date computation in the
    build; it is captured once here and never re-read.
    """

    def __init__(
        self,
        settings: AppSettings,
        today: date | None = None,
        now: datetime | None = None,
    ) -> None:
        self._settings = settings
        self._now = now or datetime.now()
        self._today = today or self._now.date()
        self._templates: dict[str, str] = {}

    @property
    def today(self) -> date:
        return self._today

    def build(self) -> BuildReport:
        """Execute the full build and return what was produced."""
        # Templates first: a missing resource aborts before anything is written.
        self._load_templates()

        raw_tracker, raw_tasks, raw_network = load_sources(self._settings)
        tracker = TrackerData.from_dict(raw_tracker)
        tasks = tasks_from_dict(raw_tasks)
        contacts = contacts_from_dict(raw_network)

        report = BuildReport(today=self._today.isoformat())
        report.warnings.extend(validate_tracker(tracker))

        out_dir = self._settings.output_path
        out_dir.mkdir(parents=True, exist_ok=True)
        logo_name = self._copy_logo(out_dir)

        roles = [*tracker.active, *tracker.closed]
        slugs = assign_slugs(roles)
        documents = self._load_documents(roles)

        index_html = self._render_index(tracker, raw_tracker, tasks, contacts, slugs, documents, logo_name, report)
        index_path = out_dir / "index.html"
        index_path.write_text(index_html, encoding="utf-8")
        report.index_path = str(index_path)
        logger.info("Built status page: %s", index_path)

        if self._settings.detail_pages:
            self._write_detail_pages(roles, slugs, documents, tasks, contacts, logo_name, report)

        logger.info(
            "Active: %d | Applied: %d | Tasks: %d | Contacts: %d",
            report.active_count,
            report.applied_count,
            report.pending_tasks,
            report.contact_count,
        )
        return report

    # ---- internal stages ----

    def _load_templates(self) -> None:
        if not self._templates:
            self._templates = {name: load_template(name) for name in _TEMPLATE_NAMES}

    def _load_documents(self, roles: list[Role]) -> dict[str, RoleDocuments]:
        documents: dict[str, RoleDocuments] = {}
        for role in roles:
            if role.key not in documents:
                documents[role.key] = load_role_documents(role, self._settings)
        return documents

    def _copy_logo(self, out_dir: Path) -> str:
        if not self._settings.logo_path:
            return ""
        source = self._settings.root / self._settings.logo_path
        if not source.is_file():
            logger.warning("Logo not found: %s", source)
            return ""
        name = f"logo{source.suffix}"
        shutil.copy2(source, out_dir / name)
        return name

    def _common_values(self, logo_src: str) -> dict[str, str]:
        logo = f'<img class="logo" src="{escape_html(logo_src)}" alt="">' if logo_src else ""
        return {
            "STYLES": self._templates["styles.css"],
            "SCRIPT": self._templates["script.js"],
            "TITLE": escape_html(self._settings.page_title),
            "LAST_UPDATED": format_timestamp(self._now),
            "LOGO": logo,
            "STAGE_ORDER_JSON": embed_json(list(STAGE_ORDER)),
        }

    def _render_index(
        self,
        tracker: TrackerData,
        raw_tracker: dict,
        tasks: tuple[Task, ...],
        contacts: tuple[Contact, ...],
        slugs: dict[str, str],
        documents: dict[str, RoleDocuments],
        logo_name: str,
        report: BuildReport,
    ) -> str:
        s = self._settings
        current = compute_current_metrics(tracker, self._today, s.recent_days)
        historical = compute_historical_metrics(tracker, self._today)
        task_metrics = compute_task_metrics(tasks, self._today, s.due_soon_days)
        network = compute_network_metrics(contacts, self._today, s.recent_days)

        report.active_count = current.active_count
        report.applied_count = current.applied_count
        report.interviewing_count = current.interviewing_count
        report.pending_tasks = task_metrics.pending_count
        report.overdue_tasks = task_metrics.overdue_count
        report.contact_count = network.contact_count

        fit_scores = {key: extract_fit_score(doc.analysis) for key, doc in documents.items()}
        detail_prefix = f"{s.detail_dir}/" if s.detail_pages else ""
        link_slugs = slugs if s.detail_pages else None

        values = self._common_values(logo_name)
        values.update(
            {
                "KPI_CARDS": fragments.render_kpi_cards(fragments.application_kpis(current)),
                "CURRENT_PIPELINE": fragments.render_current_pipeline(current),
                "HISTORICAL_STATS": fragments.render_historical_stats(historical),
                "ACTIVE_ROWS": fragments.render_active_table(tracker.active, fit_scores, link_slugs, detail_prefix),
                "CLOSED_ROWS": fragments.render_closed_table(tracker.closed, link_slugs, detail_prefix),
                "SKIPPED_ROWS": fragments.render_skipped_table(tracker.skipped),
                "CLOSED_COUNT": str(historical.closed_count),
                "SKIPPED_COUNT": str(historical.skipped_count),
                "TRACKER_JSON": embed_json(sanitize_tracker(raw_tracker)),
                # Task tab
                "TASK_KPI_CARDS": fragments.render_kpi_cards(fragments.task_kpis(task_metrics)),
                "PENDING_TASKS_ROWS": fragments.render_pending_tasks_table(task_metrics, self._today),
                "COMPLETED_TASKS_ROWS": fragments.render_completed_tasks_table(task_metrics, s.completed_limit),
                "PENDING_COUNT": str(task_metrics.pending_count),
                "COMPLETED_COUNT": str(task_metrics.completed_count),
                # Network tab
                "NETWORK_KPI_CARDS": fragments.render_kpi_cards(fragments.network_kpis(network)),
                "CONTACTS_ROWS": fragments.render_contacts_table(network),
                "RECENT_INTERACTIONS_ROWS": fragments.render_recent_interactions_table(
                    network, s.recent_interactions_limit
                ),
                "CONTACTS_COUNT": str(network.contact_count),
                "INTERACTIONS_COUNT": str(network.recent_interaction_count),
            }
        )
        return fill_placeholders(self._templates["index.html"], values)

    def _write_detail_pages(
        self,
        roles: list[Role],
        slugs: dict[str, str],
        documents: dict[str, RoleDocuments],
        tasks: tuple[Task, ...],
        contacts: tuple[Contact, ...],
        logo_name: str,
        report: BuildReport,
    ) -> None:
        detail_dir = self._settings.output_path / self._settings.detail_dir
        detail_dir.mkdir(parents=True, exist_ok=True)
        up = "../" * len(Path(self._settings.detail_dir).parts)

        written: set[str] = set()
        for role in roles:
            slug = slugs[role.key]
            if slug in written:
                logger.warning("Duplicate role %s - %s; keeping the first detail page.", role.company, role.role)
                continue
            html = self.render_detail_page(
                role, documents.get(role.key, RoleDocuments()), tasks, contacts, up, logo_name
            )
            path = detail_dir / f"{slug}.html"
            path.write_text(html, encoding="utf-8")
            written.add(slug)
            report.detail_pages.append(str(path))
        logger.info("Built %d detail page(s) in %s.", len(written), detail_dir)

    def render_detail_page(
        self,
        role: Role,
        documents: RoleDocuments,
        tasks: tuple[Task, ...],
        contacts: tuple[Contact, ...],
        up: str = "../",
        logo_name: str = "",
    ) -> str:
        self._load_templates()
        analysis = extract_analysis(documents.analysis)
        tabs = detail.select_tabs(
            role,
            analysis,
            documents,
            tasks,
            contacts,
            self._today,
            self._settings.analysis_filename,
        )
        values = self._common_values(f"{up}{logo_name}" if logo_name else "")
        values.update(
            {
                "COMPANY": escape_html(role.company or "-"),
                "ROLE": escape_html(role.role or "-"),
                "STATUS_BADGE": detail.render_status_badge(role),
                "FIT_SCORE": format_fit_score(analysis.overall_score),
                "ROLE_META": detail.render_role_meta(role),
                "BACK_LINK": f"{up}index.html",
                "TAB_BUTTONS": detail.render_tab_buttons(tabs),
                "TAB_CONTENTS": detail.render_tab_contents(tabs),
            }
        )
        return fill_placeholders(self._templates["detail.html"], values)
