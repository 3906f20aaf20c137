"""
Pytest fixtures for Plant Tracker tests.
"""
import sys
import pytest
from pathlib import Path
from datetime import datetime
from dotenv import load_dotenv

# Ensure src/ is on sys.path so tests can import plant_tracker.
ROOT = Path(__file__).resolve().parent.parent
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

# Load environment variables
load_dotenv()

from plant_tracker.store import RecordStore  # noqa: E402
from plant_tracker.types import FoodCandidate, FoodCategory, FoodColor  # noqa: E402


# ============================================================================
# Dates
# ============================================================================

# Monday 6 January 2025, the week used throughout the suite
MONDAY = datetime(2025, 1, 6, 9, 30)


@pytest.fixture
def monday():
    """A Monday morning in local time."""
    return MONDAY


# ============================================================================
# Food factories
# ============================================================================


def make_candidate(
    food_id: str = "cabbage",
    color: FoodColor = FoodColor.GREEN,
    is_fermented: bool = False,
    category: FoodCategory = FoodCategory.VEGETABLES,
    logged_date: datetime = MONDAY,
    food_name: str = None,
) -> FoodCandidate:
    """Build a FoodCandidate with sensible defaults."""
    return FoodCandidate(
        food_id=food_id,
        food_name=food_name or food_id.replace("_", " ").title(),
        category=category,
        color=color,
        is_fermented=is_fermented,
        logged_date=logged_date,
    )


@pytest.fixture
def candidate():
    """Factory fixture for food candidates."""
    return make_candidate


# ============================================================================
# Record store
# ============================================================================


@pytest.fixture
def store(tmp_path):
    """A record store backed by a temporary SQLite file."""
    record_store = RecordStore(str(tmp_path / "plant_tracker.db"))
    yield record_store
    record_store.close()


@pytest.fixture
def api_client(store):
    """
    FastAPI test client whose trackers write to the temporary store.
    """
    from fastapi.testclient import TestClient

    from server.dashboard_api.main import app
    from server.dashboard_api.services.trackers import TrackerRegistry, get_registry

    registry = TrackerRegistry(store)
    app.dependency_overrides[get_registry] = lambda: registry
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()
