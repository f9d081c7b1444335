"""Activity timeline built from canonical commits and change requests."""

from repolens.services.timeline.builder import (
    build_timeline,
    parse_event_filter,
    parse_time_range,
    resolve_time_range,
)
from repolens.services.timeline.exceptions import FilterValidationError
from repolens.services.timeline.types import (
    ChangeRequestEvent,
    CommitEvent,
    EventFilter,
    TimelineEvent,
    TimelineEventType,
    TimeRange,
)

__all__ = [
    # Builder
    "build_timeline",
    "parse_event_filter",
    "parse_time_range",
    "resolve_time_range",
    # Types
    "TimelineEvent",
    "CommitEvent",
    "ChangeRequestEvent",
    "TimelineEventType",
    "EventFilter",
    "TimeRange",
    # Exceptions
    "FilterValidationError",
]
