"""Exception types raised inside the engine."""


class WaypointError(Exception):
    """Base class for engine errors."""


class SettingsValidationError(WaypointError, ValueError):
    """A settings value failed its shape check."""

    def __init__(self, field: str, value: object, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field} {value!r}: {reason}")


class AnchorNotFoundError(WaypointError):
    """No trigger token or begin sentinel where one was expected."""
