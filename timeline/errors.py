"""
Timeline errors.

Every engine failure is a TimelineError carrying a stable ``error_code`` so the
API and CLI can report it without inspecting the message. Raising one never
touches persisted state: callers only save after an operation succeeds.
"""


class TimelineError(ValueError):
    """Base class for recoverable timeline errors."""

    error_code = "timeline_error"


class InvalidTimeFormat(TimelineError):
    """Raised when a wall-clock string is not a valid HH:MM value."""

    error_code = "invalid_time_format"


class NegativeDuration(TimelineError):
    """Raised when a span or buffer works out to fewer than zero minutes."""

    error_code = "negative_duration"


class UnknownHabit(TimelineError):
    """
    A placed habit id is not present in the supplied catalog.

    Orphaned placements are kept, so this is never raised: its error_code
    tags the orphan report of the unplaced endpoint.
    """

    error_code = "unknown_habit"


class PlacementNotFound(TimelineError):
    """Raised when a placement id or index does not exist in the ledger."""

    error_code = "placement_not_found"


class InvalidProfile(TimelineError):
    """Raised when a profile document is missing fields or has bad types."""

    error_code = "invalid_profile"
