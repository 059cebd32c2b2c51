"""
Error taxonomy for the remove-from-group action.
The error callback only sees messages, so every upstream error embeds its
HTTP status in the text.
"""

from enum import Enum
from typing import Optional


class ActionError(RuntimeError):
    """Base class for every failure raised by the action."""


class ConfigurationError(ActionError):
    """Missing parameter, credential material or base address."""


class MissingParameterError(ConfigurationError):
    def __init__(self, parameter: str):
        super().__init__(f"{parameter} is required")
        self.parameter = parameter


class UpstreamError(ActionError):
    """Non-success answer from the token endpoint or the directory."""

    def __init__(self, message: str, status: Optional[int] = None, reason: Optional[str] = None):
        super().__init__(message)
        self.status = status
        self.reason = reason


class TokenExchangeError(UpstreamError):
    pass


class UserLookupError(UpstreamError):
    pass


class MembershipRemovalError(UpstreamError):
    pass


class DirectoryObjectNotFoundError(ActionError):
    """User lookup succeeded but returned no directory object id."""


class ErrorDisposition(Enum):
    RATE_LIMITED = "rate_limited"
    TRANSIENT = "transient"
    AUTH_FAILURE = "auth_failure"
    UNKNOWN = "unknown"


TRANSIENT_STATUS_MARKERS = ("502", "503", "504")
AUTH_STATUS_MARKERS = ("401", "403")


def classify_error_message(message: str) -> ErrorDisposition:
    """
    Classify a failure message by the status codes it mentions.

    Checked in order: rate limit (429), transient server errors
    (502/503/504), then authentication/authorization (401/403).
    """
    message = message or ""
    if "429" in message:
        return ErrorDisposition.RATE_LIMITED
    if any(code in message for code in TRANSIENT_STATUS_MARKERS):
        return ErrorDisposition.TRANSIENT
    if any(code in message for code in AUTH_STATUS_MARKERS):
        return ErrorDisposition.AUTH_FAILURE
    return ErrorDisposition.UNKNOWN
