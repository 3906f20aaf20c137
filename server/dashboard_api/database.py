"""Record store construction for the API."""
import logging
from functools import lru_cache

from plant_tracker.store import RecordStore

from .config import get_settings

log = logging.getLogger(__name__)


@lru_cache
def get_record_store() -> RecordStore:
    """Open the configured record store once per process."""
    settings = get_settings()
    log.info(f"Using record store at {settings.db_path}")
    return RecordStore(settings.db_path)
