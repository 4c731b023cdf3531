from __future__ import annotations

from paytrail.storage.correlation_index import CorrelationIndex
from paytrail.storage.event_log import EventLog
from paytrail.storage.event_store import EventStore
from paytrail.storage.projection import ProjectionBuilder, project

__all__ = ["CorrelationIndex", "EventLog", "EventStore", "ProjectionBuilder", "project"]
