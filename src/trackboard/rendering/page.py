"""Template loading, placeholder substitution and script-safe JSON embedding."""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, Mapping

from trackboard.exceptions import TemplateLoadError

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"

_PLACEHOLDER_RE = re.compile(r"\{\{(\w+)\}\}")

# Tracker fields that point into the local filesystem.
_PRIVATE_FIELDS = frozenset({"folder"})


def load_template(name: str, template_dir: str | Path | None = None) -> str:
    """Read a static page resource; missing resources are fatal."""
    path = Path(template_dir or TEMPLATE_DIR) / name
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise TemplateLoadError(f"Cannot read template {path}: {exc}") from exc


def fill_placeholders(template: str, values: Mapping[str, str]) -> str:
    """Replace ``{{KEY}}`` markers in one pass.

    Substituted values are not rescanned. Markers with no value are left in
    place and logged so that a missing fragment is visible in the output.
    """

    def _sub(match: re.Match[str]) -> str:
        key = match.group(1)
        if key in values:
            return values[key]
        logger.warning("Unreplaced placeholder found: {{%s}}", key)
        return match.group(0)

    return _PLACEHOLDER_RE.sub(_sub, template)


def embed_json(data: Any) -> str:
    """JSON for inlining in a ``<script>`` block; ``<`` becomes ``\\u003c``."""
    return json.dumps(data, ensure_ascii=False).replace("<", "\\u003c")


def sanitize_tracker(raw: Any) -> dict[str, list[dict]]:
    """Copy of the raw tracker with private folder references removed."""
    raw = raw if isinstance(raw, dict) else {}
    sanitized: dict[str, list[dict]] = {}
    for section in ("active", "closed", "skipped"):
        entries = raw.get(section)
        entries = entries if isinstance(entries, list) else []
        sanitized[section] = [
            {k: v for k, v in entry.items() if k not in _PRIVATE_FIELDS}
            for entry in entries
            if isinstance(entry, dict)
        ]
    return sanitized
