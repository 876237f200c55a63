"""Domain error taxonomy.

Service functions raise these; ``huddle.app.main`` turns them into JSON
responses carrying the matching status code.
"""

from typing import Any


class HuddleError(Exception):
    status_code = 500
    default_detail = "Internal server error"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.default_detail
        super().__init__(self.detail)

    def to_dict(self) -> dict[str, Any]:
        return {"detail": self.detail}


class ValidationError(HuddleError):
    """Malformed or missing input. Carries per-field messages."""

    status_code = 400
    default_detail = "Invalid request"

    def __init__(self, detail: str | None = None, errors: list[dict[str, str]] | None = None):
        super().__init__(detail)
        self.errors = errors or []

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls(message, errors=[{"field": field, "message": message}])

    def to_dict(self) -> dict[str, Any]:
        return {"detail": self.detail, "errors": self.errors}


class UnauthenticatedError(HuddleError):
    status_code = 401
    default_detail = "Not authenticated"


class AuthorizationError(HuddleError):
    status_code = 403
    default_detail = "You do not have access to this channel"


class NotFoundError(HuddleError):
    status_code = 404
    default_detail = "Not found"


class ConflictError(HuddleError):
    status_code = 409
    default_detail = "Already exists"


class AiLimitExceededError(HuddleError):
    status_code = 429
    default_detail = "Daily AI chat limit reached"


class AssistantUnavailableError(HuddleError):
    status_code = 502
    default_detail = "AI assistant is unavailable"
