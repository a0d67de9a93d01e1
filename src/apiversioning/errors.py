__all__ = ["ConventionError", "InvalidArgumentError", "InvalidStateError"]


class ConventionError(Exception):
    """Base class for errors raised while declaring or resolving API version conventions."""

    pass


class InvalidArgumentError(ConventionError, ValueError):
    """Raised when a declaration is given a missing or malformed argument."""

    pass


class InvalidStateError(ConventionError):
    """Raised when a profile is requested for a controller or action that was never registered."""

    pass
