"""Pydantic-based settings loaded from YAML with env-var overrides."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings

from trackboard.exceptions import ConfigurationError


_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


class AppSettings(BaseSettings):
    """Build configuration with YAML + env var support.

    Env vars are prefixed with ``TRACKBOARD_``.
    Example: ``TRACKBOARD_OUTPUT_DIR=/tmp/site``
    """

    model_config = {"env_prefix": "TRACKBOARD_"}

    # --- source data ---
    base_dir: str = "."  # role folder references are relative to this
    data_dir: str = "data"
    tracker_file: str = "tracker.json"
    tasks_file: str = "tasks.json"
    network_file: str = "network.json"

    # --- per-role documents ---
    analysis_filename: str = "comparison-analysis.md"
    notes_filename: str = "notes.md"
    job_description_filename: str = "job-description.md"
    research_filename: str = "research-packet.md"

    # --- output ---
    output_dir: str = "dist"
    detail_dir: str = "roles"
    detail_pages: bool = True
    logo_path: str = ""
    page_title: str = "Job Search Status"

    # --- windows ---
    recent_days: int = 7
    due_soon_days: int = 3
    completed_limit: int = 10
    recent_interactions_limit: int = 10

    @field_validator("recent_days", "due_soon_days", "completed_limit", "recent_interactions_limit")
    @classmethod
    def _non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("must be zero or greater")
        return v

    @field_validator("detail_dir")
    @classmethod
    def _strip_slashes(cls, v: str) -> str:
        return v.strip().strip("/") or "roles"

    # ---- resolved paths ----

    @property
    def root(self) -> Path:
        return Path(self.base_dir)

    @property
    def data_path(self) -> Path:
        return self.root / self.data_dir

    @property
    def output_path(self) -> Path:
        out = Path(self.output_dir)
        return out if out.is_absolute() else self.root / out

    # ---- factory ----

    @classmethod
    def from_yaml(cls, path: str | Path | None = None, **overrides: Any) -> "AppSettings":
        """Load settings from a YAML file, then overlay env vars.

        Env vars (``TRACKBOARD_*``) take priority over YAML values; keyword
        *overrides* (from the command line) take priority over both.
        """
        import os

        if path is None:
            path = _PROJECT_ROOT / "settings.yaml"
        path = Path(path)
        raw: dict[str, Any] = {}
        if path.exists():
            with open(path) as fh:
                raw = yaml.safe_load(fh) or {}
            if not isinstance(raw, dict):
                raise ConfigurationError(f"{path} must contain a mapping, got {type(raw).__name__}.")

        # Let env vars override YAML: remove YAML keys that have an env override
        prefix = "TRACKBOARD_"
        for key in list(raw.keys()):
            env_key = f"{prefix}{key.upper()}"
            if env_key in os.environ:
                del raw[key]

        raw.update({k: v for k, v in overrides.items() if v is not None})
        try:
            return cls(**raw)
        except ValidationError as exc:
            raise ConfigurationError(str(exc)) from exc
