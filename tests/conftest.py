"""Pytest configuration and fixtures for quest extractor tests."""

from pathlib import Path
from typing import Dict, List, Tuple

import pytest
import requests

FIXTURES_DIR = Path(__file__).parent / "fixtures"
QUESTS_DIR = FIXTURES_DIR / "quests"


def make_response(url: str, status: int = 200, text: str = "") -> requests.Response:
    """Build a real requests.Response so raise_for_status() behaves as in production."""
    response = requests.Response()
    response.status_code = status
    response.url = url
    response.encoding = "utf-8"
    response._content = text.encode("utf-8")
    return response


class FakeSession:
    """Stands in for requests.Session: serves canned responses keyed by URL."""

    def __init__(self, pages: Dict[str, Tuple[int, str]] = None, errors: Dict[str, Exception] = None):
        self.pages = dict(pages or {})
        self.errors = dict(errors or {})
        self.calls: List[Tuple[str, dict, float]] = []
        self.closed = False

    def get(self, url, headers=None, timeout=None):
        self.calls.append((url, headers or {}, timeout))
        if url in self.errors:
            raise self.errors[url]
        status, text = self.pages.get(url, (404, "Not Found"))
        return make_response(url, status, text)

    def close(self):
        self.closed = True


@pytest.fixture
def cooks_assistant_source() -> str:
    """Java source of the Cook's Assistant fixture quest."""
    return (QUESTS_DIR / "cooksassistant" / "CooksAssistant.java").read_text(encoding="utf-8")


@pytest.fixture
def quests_dir() -> Path:
    return QUESTS_DIR


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def session_factory():
    """FakeSession class, for tests that need canned pages or errors."""
    return FakeSession
