"""Reading source data and per-role documents from disk."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from trackboard.models import Role, RoleDocuments
from trackboard.settings import AppSettings

logger = logging.getLogger(__name__)

EMPTY_TRACKER: dict[str, list] = {"active": [], "closed": [], "skipped": []}
EMPTY_TASKS: dict[str, list] = {"tasks": []}
EMPTY_NETWORK: dict[str, list] = {"contacts": []}


def load_json(path: str | Path, fallback: Any) -> Any:
    """Parse *path*, or warn and return *fallback* if it can't be read."""
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as fh:
            data = json.load(fh)
    except (OSError, ValueError) as exc:
        logger.warning("Error reading %s: %s", path.name, exc)
        return fallback
    if not isinstance(data, dict):
        logger.warning("Error reading %s: expected an object, got %s.", path.name, type(data).__name__)
        return fallback
    return data


def read_optional(path: Path) -> str | None:
    if not path.is_file():
        return None
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Could not read %s: %s", path, exc)
        return None


def load_role_documents(role: Role, settings: AppSettings) -> RoleDocuments:
    """Read the optional documents kept in *role*'s folder."""
    if not role.folder:
        return RoleDocuments()
    folder = settings.root / role.folder
    if not folder.is_dir():
        logger.warning("Folder not found for %s - %s: %s", role.company, role.role, folder)
        return RoleDocuments()
    return RoleDocuments(
        analysis=read_optional(folder / settings.analysis_filename),
        notes=read_optional(folder / settings.notes_filename),
        job_description=read_optional(folder / settings.job_description_filename),
        research=read_optional(folder / settings.research_filename),
    )


def load_sources(settings: AppSettings) -> tuple[dict, dict, dict]:
    """Raw tracker, task and network data; empty structures when unreadable."""
    data_dir = settings.data_path
    tracker = load_json(data_dir / settings.tracker_file, EMPTY_TRACKER)
    tasks = load_json(data_dir / settings.tasks_file, EMPTY_TASKS)
    network = load_json(data_dir / settings.network_file, EMPTY_NETWORK)
    return tracker, tasks, network
