"""Shared test fixtures for the routewall test suite."""

from __future__ import annotations

import json
import os
from pathlib import Path

import pytest

from routewall.models.settings import Settings
from tests.helpers import make_settings


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run every test in an empty directory without ROUTEWALL_* variables."""
    for key in list(os.environ):
        if key.startswith("ROUTEWALL_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def routes_file(tmp_path: Path) -> Path:
    """A framework-style JSON route list."""
    path = tmp_path / "routes.json"
    path.write_text(
        json.dumps(
            [
                {"uri": "/", "name": "home", "method": "GET|HEAD"},
                {"uri": "about", "name": "about", "method": "GET|HEAD"},
                {"uri": "blog/{post}", "name": "blog.show", "method": "GET|HEAD"},
                {"uri": "api/users/{user}", "name": None, "method": "GET|HEAD"},
                {"uri": "_dusk/login/{userId}", "name": "dusk.login", "method": "GET"},
            ]
        ),
        encoding="utf-8",
    )
    return path
