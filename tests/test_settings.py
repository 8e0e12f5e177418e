"""Tests for settings loading and validation."""

from __future__ import annotations

from pathlib import Path

import pytest

from trackboard.exceptions import ConfigurationError
from trackboard.settings import AppSettings


def test_load_from_yaml(site_tree):
    settings = AppSettings.from_yaml(site_tree / "settings.yaml")
    assert settings.page_title == "Test Search"
    assert settings.logo_path == "logo.png"
    assert settings.output_path == site_tree / "dist"
    assert settings.data_path == site_tree / "data"


def test_env_var_override(site_tree, monkeypatch):
    monkeypatch.setenv("TRACKBOARD_PAGE_TITLE", "From Env")
    settings = AppSettings.from_yaml(site_tree / "settings.yaml")
    assert settings.page_title == "From Env"


def test_keyword_override_beats_yaml(site_tree):
    settings = AppSettings.from_yaml(site_tree / "settings.yaml", output_dir="/tmp/elsewhere", logo_path=None)
    assert settings.output_path == Path("/tmp/elsewhere")
    assert settings.logo_path == "logo.png"


def test_defaults_when_no_file(tmp_path):
    settings = AppSettings.from_yaml(tmp_path / "nonexistent.yaml")
    assert settings.recent_days == 7
    assert settings.due_soon_days == 3
    assert settings.completed_limit == 10
    assert settings.analysis_filename == "comparison-analysis.md"
    assert settings.detail_pages is True


def test_negative_window_rejected(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("recent_days: -1\n")
    with pytest.raises(ConfigurationError):
        AppSettings.from_yaml(path)


def test_non_mapping_yaml_rejected(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("- just\n- a list\n")
    with pytest.raises(ConfigurationError):
        AppSettings.from_yaml(path)


def test_detail_dir_normalised(tmp_path):
    settings = AppSettings.from_yaml(tmp_path / "none.yaml", detail_dir="/pages/")
    assert settings.detail_dir == "pages"
