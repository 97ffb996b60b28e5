"""
Domain errors raised by the journey and statistics services.

Route handlers wrapped with core.api.api_route turn them into HTTP
responses: invalid input is 400, a journey the user cannot see is 404,
and saving a connection the user already saved is 409.
"""


class JourneyLogError(Exception):
    """Base class; ``details`` is extra context for logs and clients."""

    def __init__(self, message: str, details: dict | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(JourneyLogError):
    """Journey data is inconsistent (e.g. arrival before departure)."""


class ResourceNotFoundError(JourneyLogError):
    """The journey does not exist or belongs to another user."""


class DuplicateResourceError(JourneyLogError):
    """The user already saved this connection."""


JourneyLogException = JourneyLogError
ValidationException = ValidationError
ResourceNotFoundException = ResourceNotFoundError
DuplicateResourceException = DuplicateResourceError
