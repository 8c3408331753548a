"""Error types raised by the meal planning core."""


class PawFuelError(Exception):
    """Base error for the application."""


class InvalidInputError(PawFuelError, ValueError):
    """Raised when a caller passes values outside the domain."""


class ResourceUnavailableError(PawFuelError, RuntimeError):
    """Raised by adapters when an external resource cannot be reached."""
