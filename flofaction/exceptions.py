"""Errors raised by the calculators. Routers translate them to HTTP status codes."""


class FloFactionError(Exception):
    """Base class for calculator errors."""


class NotFoundError(FloFactionError, LookupError):
    """Unknown service id, policy type, or calculator name."""


class InvalidInputError(FloFactionError, ValueError):
    """Input outside the calculator's domain (non-positive rate, missing field, ...)."""

    def __init__(self, message, missing_fields=None):
        super().__init__(message)
        self.missing_fields = list(missing_fields or [])
