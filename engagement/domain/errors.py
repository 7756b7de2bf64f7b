"""
Engagement Domain Errors

Typed failures raised inside a unit of work. Use cases convert them into
``Error`` values at their boundary, so callers only ever see a ``Result``.
"""

from typing import Any, Dict, Optional

from engagement.libs.result import Error


class EngagementError(Exception):
    """Base class for all typed domain failures"""

    code = "ENGAGEMENT_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_error(self) -> Error:
        return Error(self.code, self.message, self.details)


class NotFoundError(EngagementError):
    """Entity absent, or outside the caller's workspace (indistinguishable)"""

    code = "NOT_FOUND"

    def __init__(self, entity: str, identifier: Any = None):
        message = f"{entity} not found"
        super().__init__(message, {"entity": entity})
        self.entity = entity
        self.identifier = identifier


class AuthorizationError(EngagementError):
    code = "FORBIDDEN"


class ValidationError(EngagementError):
    code = "VALIDATION_ERROR"


class ConflictError(EngagementError):
    """A state guard failed, usually because a concurrent writer got there first"""

    code = "CONFLICT"


class ExpiredError(EngagementError):
    code = "INVITE_EXPIRED"


class ExhaustedError(EngagementError):
    code = "INVITE_EXHAUSTED"


class BudgetExceededError(EngagementError):
    code = "BUDGET_EXCEEDED"


class ProviderError(EngagementError):
    """External reward provider call failed; drives the FAILED state"""

    code = "PROVIDER_ERROR"

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response = response
