from __future__ import annotations

from paytrail.services.journey_service import JourneyError, JourneyService
from paytrail.services.payment_file_service import PaymentFileService
from paytrail.services.timeline_service import TimelineEntry, TimelineService

__all__ = [
    "JourneyError",
    "JourneyService",
    "PaymentFileService",
    "TimelineEntry",
    "TimelineService",
]
