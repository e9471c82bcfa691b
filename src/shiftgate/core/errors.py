"""Common shiftgate-specific exceptions and warning categories."""


class ShiftgateValueError(ValueError):
    """Raised when shiftgate detects invalid user-provided data."""


class ResolutionDegradedWarning(RuntimeWarning):
    """Emitted when a civil time cannot be resolved to an exact instant in its zone."""


__all__ = ["ShiftgateValueError", "ResolutionDegradedWarning"]
