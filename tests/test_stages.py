"""Tests for the stage model and fit-score ladder."""

from __future__ import annotations

import pytest

from trackboard.stages import (
    APPLIED_STAGE,
    INTERVIEW_STAGE,
    OUTCOMES,
    STAGE_ORDER,
    fit_category,
    stage_index,
    stage_to_class,
    stages_from,
)


def test_stage_order_progression():
    assert STAGE_ORDER[0] == "Sourced"
    assert STAGE_ORDER[-1] == "Negotiating"
    assert stage_index(APPLIED_STAGE) < stage_index(INTERVIEW_STAGE) < stage_index("Offer")


def test_outcomes():
    assert set(OUTCOMES) == {"Rejected", "Withdrew", "Accepted", "Expired"}


def test_stage_index_unknown():
    assert stage_index("Phone Screen") == -1
    assert stage_index(None) == -1
    assert stage_index("") == -1


def test_stages_from():
    assert stages_from("Offer") == ("Offer", "Negotiating")
    assert stages_from("Sourced") == STAGE_ORDER


def test_stage_to_class():
    assert stage_to_class("HM Interview") == "hm-interview"
    assert stage_to_class("Recruiter   Screen") == "recruiter-screen"
    assert stage_to_class("Offer") == "offer"
    assert stage_to_class(None) == ""


@pytest.mark.parametrize(
    "score, category",
    [
        (100, "exceptional"),
        (90, "exceptional"),
        (89, "strong"),
        (85, "strong"),
        (84, "good"),
        (78, "good"),
        (77, "risk"),
        (70, "risk"),
        (69, "stretch"),
        (60, "stretch"),
        (59, "weak"),
        (0, "weak"),
        (None, "none"),
    ],
)
def test_fit_category_boundaries(score, category):
    assert fit_category(score) == category


def test_fit_category_total_over_range():
    known = {"exceptional", "strong", "good", "risk", "stretch", "weak"}
    previous_rank = None
    order = ["weak", "stretch", "risk", "good", "strong", "exceptional"]
    for score in range(0, 101):
        category = fit_category(score)
        assert category in known
        rank = order.index(category)
        # Non-decreasing as the score rises
        assert previous_rank is None or rank >= previous_rank
        previous_rank = rank
