"""Shared test fixtures."""
import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path so `src.*` imports work
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from src.core.dispatcher import SlidesCommandHandler  # noqa: E402
from src.core.slide_store import Slide, SlideStore     # noqa: E402


@pytest.fixture
def store():
    """Three-slide deck: overview (active), intro, details."""
    return SlideStore([
        Slide(id="s0", title="Overview", active=True),
        Slide(id="s1", title="Intro", content="Hello"),
        Slide(id="s2", title="Details"),
    ])


@pytest.fixture
def handler(store):
    return SlidesCommandHandler(store)
