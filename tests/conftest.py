"""Shared test fixtures."""

from __future__ import annotations

import json
from datetime import date

import pytest

TODAY = date(2024, 6, 15)


ANALYSIS_DOC = """\
# Comparison Analysis: Acme Corp - Staff Engineer

**Overall Fit Score: 85/100 — Strong Match**

## Dimension Scores

| Dimension | Score | Notes |
|-----------|-------|-------|
| Technical Skills | 90/100 | Deep Python & distributed systems |
| Leadership | 78/100 | Led two teams |
| Domain | 60/100 | New to fintech |

**Key Strengths:**
- Built **data pipelines** at scale
- Mentored engineers

**Primary Gaps:**
- No payments experience
- Limited Go

## Resume Tailoring

### Changes Made

#### Summary
- Reordered experience to lead with platform work
- Added metrics to the pipeline bullet

### Bullet Edits

**Removed:** "Maintained legacy PHP monolith"
Some other context. **Removed:** Organized team lunches

## Flagged for Review

1. Confirm the 40% latency figure
2. Check dates at Initech
"""


@pytest.fixture()
def today() -> date:
    return TODAY


@pytest.fixture()
def tracker_data() -> dict:
    return {
        "active": [
            {
                "company": "Acme Corp",
                "role": "Staff Engineer",
                "url": "https://acme.example/jobs/1",
                "stage": "Onsite",
                "added": "2024-05-01",
                "updated": "2024-06-12",
                "next": "Prep system design",
                "folder": "roles/acme",
            },
            {
                "company": "Globex",
                "role": "Backend Engineer",
                "url": "https://globex.example/careers/9",
                "stage": "Applied",
                "added": "2024-05-20",
                "updated": "2024-05-20",
                "next": "Wait",
            },
            {
                "company": "Initech",
                "role": "Platform Lead",
                "url": "",
                "stage": "Sourced",
                "added": "2024-06-10",
                "updated": "2024-06-10",
            },
        ],
        "closed": [
            {
                "company": "Umbrella",
                "role": "SRE",
                "url": "https://umbrella.example",
                "stage": "Recruiter Screen",
                "outcome": "Rejected",
                "added": "2024-04-01",
                "updated": "2024-04-11",
                "closed": "2024-04-20",
                "folder": "roles/umbrella",
            },
            {
                "company": "Hooli",
                "role": "Engineer",
                "url": "https://hooli.example",
                "outcome": "Expired",
                "added": "2024-03-15",
                "closed": "2024-05-01",
            },
        ],
        "skipped": [
            {
                "company": "Vandelay",
                "role": "Importer",
                "url": "https://vandelay.example",
                "added": "2024-06-01",
                "reason": "Relocation <required>",
            }
        ],
    }


@pytest.fixture()
def tasks_data() -> dict:
    return {
        "tasks": [
            {
                "task": "Send thank-you note",
                "status": "pending",
                "due": "2024-06-14",
                "created": "2024-06-10",
                "linkedContacts": ["Jane Doe"],
                "linkedJobs": ["Acme Corp - Staff Engineer"],
            },
            {
                "task": "Follow up with Globex",
                "status": "pending",
                "due": "2024-06-17",
                "created": "2024-06-11",
                "linkedJobs": ["Globex - Backend Engineer"],
            },
            {"task": "Update portfolio", "status": "pending", "created": "2024-06-01"},
            {
                "task": "Apply to Acme",
                "status": "completed",
                "created": "2024-05-01",
                "completed": "2024-05-02",
                "linkedJobs": ["Acme Corp - Staff Engineer"],
            },
        ]
    }


@pytest.fixture()
def network_data() -> dict:
    return {
        "contacts": [
            {
                "id": "jane",
                "name": "Jane Doe",
                "company": "Acme Corp",
                "title": "Engineering Manager",
                "linkedin": "https://linkedin.example/jane",
                "added": "2024-05-01",
                "interactions": [
                    {
                        "date": "2024-06-13",
                        "type": "call",
                        "summary": "Talked about the onsite",
                        "linkedJobs": ["Acme Corp - Staff Engineer"],
                    },
                    {
                        "date": "2024-05-02",
                        "type": "email",
                        "summary": "Intro",
                        "linkedJobs": [],
                    },
                ],
            },
            {
                "id": "bob",
                "name": "Bob Smith",
                "added": "2024-06-14",
                "interactions": [],
            },
        ]
    }


@pytest.fixture()
def site_tree(tmp_path, tracker_data, tasks_data, network_data):
    """An on-disk source tree plus a settings.yaml pointing at it."""
    data = tmp_path / "data"
    data.mkdir()
    (data / "tracker.json").write_text(json.dumps(tracker_data))
    (data / "tasks.json").write_text(json.dumps(tasks_data))
    (data / "network.json").write_text(json.dumps(network_data))

    acme = tmp_path / "roles" / "acme"
    acme.mkdir(parents=True)
    (acme / "comparison-analysis.md").write_text(ANALYSIS_DOC)
    (acme / "notes.md").write_text("# Notes\n\nRecruiter is *very* responsive.\n")
    (acme / "research-packet.md").write_text("## Company\n\nSeries C.\n")

    (tmp_path / "logo.png").write_bytes(b"\x89PNG\r\n")

    settings = tmp_path / "settings.yaml"
    settings.write_text(
        "base_dir: \"{root}\"\n"
        "output_dir: dist\n"
        "logo_path: logo.png\n"
        "page_title: Test Search\n".format(root=str(tmp_path))
    )
    return tmp_path
