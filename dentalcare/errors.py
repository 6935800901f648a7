"""Error types raised by the scheduling core.

All errors are raised synchronously to the calling UI layer. Nothing here
is retried: the core does no I/O, so there are no transient failures.
"""


class SchedulingError(Exception):
    """Base class for every error raised by the scheduling core."""


class ValidationError(SchedulingError):
    """Raised when appointment data is missing, malformed, or out of range."""


class AppointmentNotFoundError(ValidationError):
    """Raised when an appointment id is not present in the store."""


class InvalidTransitionError(SchedulingError):
    """Raised when a status transition is not valid from the current status."""


class ConfigurationError(SchedulingError):
    """Raised when clinic settings cannot produce a valid slot schedule."""
