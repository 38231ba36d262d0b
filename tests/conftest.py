"""Shared test fixtures for all test modules."""

import json
import os
from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"

# ── Environment overrides (must be set before importing backend modules) ─────
os.environ["BROS_CONTENT_SOURCE"] = str(FIXTURES_DIR / "content.json")
os.environ["BROS_BASE_URL"] = "/bros-unblocked/"
os.environ["BROS_DEBOUNCE_MS"] = "20"


@pytest.fixture(autouse=True)
def fresh_content_cache():
    """Every test starts without a cached content index."""
    from backend.services.content_service import reset_content
    reset_content()
    yield
    reset_content()


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def content_path():
    """Path of the sample content index."""
    return FIXTURES_DIR / "content.json"


@pytest.fixture
def content_document(content_path):
    """The sample content index as decoded JSON."""
    return json.loads(content_path.read_text(encoding="utf-8"))


@pytest.fixture
def content_index(content_document):
    """The sample content index built into models (malformed records dropped)."""
    from backend.services.content_service import build_index
    return build_index(content_document)


@pytest.fixture
def single_game_index():
    """Index holding only the Bros Adventure game."""
    from backend.models.content import ContentIndex, GameRecord
    return ContentIndex(games=(
        GameRecord(
            title="Bros Adventure",
            description="fun platformer",
            tags=("mario", "platform"),
            slug="bros-adv",
        ),
    ))
