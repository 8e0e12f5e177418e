"""Tests for detail-page slug assignment."""

from __future__ import annotations

from trackboard.models import Role
from trackboard.slugs import assign_slugs, slugify


def test_slugify():
    assert slugify("Acme Corp!! -- Staff Engineer ") == "acme-corp-staff-engineer"
    assert slugify("--Hello__World--") == "hello-world"
    assert slugify("!!!") == ""


def test_collision_suffixes_in_input_order():
    roles = [
        Role(company="Acme Corp", role="Engineer"),
        Role(company="acme corp!!", role="Engineer"),
        Role(company="ACME  corp", role="Engineer"),
    ]
    slugs = assign_slugs(roles)
    assert slugs["Acme Corp|Engineer"] == "acme-corp-engineer"
    assert slugs["acme corp!!|Engineer"] == "acme-corp-engineer-1"
    assert slugs["ACME  corp|Engineer"] == "acme-corp-engineer-2"


def test_order_determines_suffix():
    a = Role(company="Acme Corp", role="Engineer")
    b = Role(company="acme corp!!", role="Engineer")
    assert assign_slugs([b, a])[b.key] == "acme-corp-engineer"
    assert assign_slugs([b, a])[a.key] == "acme-corp-engineer-1"


def test_deterministic():
    roles = [Role(company="X", role="Y"), Role(company="x", role="y")]
    assert assign_slugs(roles) == assign_slugs(roles)


def test_suffix_does_not_clash_with_natural_slug():
    roles = [
        Role(company="Acme", role="Engineer 1"),
        Role(company="Acme", role="Engineer"),
        Role(company="Acme!", role="Engineer"),
    ]
    slugs = assign_slugs(roles)
    assert len(set(slugs.values())) == 3
    assert slugs["Acme|Engineer 1"] == "acme-engineer-1"
    assert slugs["Acme|Engineer"] == "acme-engineer"
    assert slugs["Acme!|Engineer"] == "acme-engineer-2"


def test_duplicate_key_keeps_first_slug():
    roles = [Role(company="A", role="B", stage="Applied"), Role(company="A", role="B", outcome="Rejected")]
    assert assign_slugs(roles) == {"A|B": "a-b"}


def test_empty_identity_gets_placeholder():
    assert assign_slugs([Role()]) == {"|": "role"}
