"""Shared test fixtures for the FitCoach test suite.

Provides isolated local storage, Gemini key toggling and a ready-made
demo plan.
"""

import os

import pytest

from fitcoach.agent.fallback import generate_fallback_plan
from fitcoach.memory.local_storage import LocalStorage
from fitcoach.memory.profile import create_goals


def pytest_collection_modifyitems(config, items):
    """Skip integration tests when no Gemini key is configured."""
    if os.environ.get("GEMINI_API_KEY"):
        return
    skip = pytest.mark.skip(reason="GEMINI_API_KEY not set")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip)


@pytest.fixture
def storage(tmp_path):
    """LocalStorage rooted in a per-test temp directory."""
    return LocalStorage(tmp_path / "local")


@pytest.fixture
def no_gemini(monkeypatch):
    """Demo mode: no Gemini API key."""
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)


@pytest.fixture
def fake_gemini(monkeypatch):
    """A key is configured; tests must mock the client."""
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")


@pytest.fixture
def demo_plan():
    """A complete fallback plan for a default gym user."""
    return generate_fallback_plan(create_goals(), ["gym"])
