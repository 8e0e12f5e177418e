"""URL-safe identifiers for per-role detail pages."""

from __future__ import annotations

import re
from typing import Iterable

from trackboard.models import Role

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """Lowercase, collapse non-alphanumeric runs to ``-``, trim hyphens."""
    return _NON_ALNUM_RE.sub("-", text.lower()).strip("-")


def base_slug(company: str, role: str) -> str:
    return slugify(f"{company} {role}") or "role"


def assign_slugs(roles: Iterable[Role]) -> dict[str, str]:
    """Map ``company|role`` keys to unique slugs.

    The first role producing a given slug keeps it; later ones get ``-1``,
    ``-2``, ... in encounter order. Slugs therefore depend on input order and
    can change between builds if the tracker is reordered. A key seen twice
    keeps its first slug.
    """
    slugs: dict[str, str] = {}
    taken: set[str] = set()
    counters: dict[str, int] = {}
    for role in roles:
        if role.key in slugs:
            continue
        base = base_slug(role.company, role.role)
        slug = base
        while slug in taken:
            counters[base] = counters.get(base, 0) + 1
            slug = f"{base}-{counters[base]}"
        taken.add(slug)
        slugs[role.key] = slug
    return slugs
