# Ensure the package under src/ is importable during tests without installing it,
# and share the store/service fixtures used across spec files.
from pathlib import Path
import sys

import pytest

ROOT = Path(__file__).resolve().parent
SRC = ROOT / "src"
if SRC.exists():
    sys.path.insert(0, str(SRC))

from paytrail.services.payment_file_service import PaymentFileService  # noqa: E402
from paytrail.storage.event_store import EventStore  # noqa: E402


@pytest.fixture
def event_store() -> EventStore:
    """Fresh in-memory event store."""
    return EventStore()


@pytest.fixture
def service(event_store: EventStore) -> PaymentFileService:
    """Command/query handlers bound to the test store."""
    return PaymentFileService(event_store)
