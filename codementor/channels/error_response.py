"""Map core exceptions to the uniform ``{error, details?}`` response shape.

Upstream messages are passed to the client, so they are scrubbed of anything
that looks like a credential first. The original exception is still logged
in full.
"""

import logging
import re
from dataclasses import dataclass, field

from ..errors import (
    AdapterInitError,
    CodementorError,
    ConfigurationRequiredError,
    UpstreamError,
    ValidationError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ApiResponse:
    status: int
    body: dict = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


# (pattern, replacement), applied in order.
_SECRET_PATTERNS = [
    (re.compile(r"\bsk-(?:ant-|proj-)?[A-Za-z0-9_\-]{8,}"), "[REDACTED_API_KEY]"),
    (re.compile(r"(?i)\bbearer\s+[A-Za-z0-9._\-]{8,}"), "Bearer [REDACTED]"),
    (re.compile(r"(?i)\b(api[-_]?key|x-api-key|token)([\"']?\s*[=:]\s*[\"']?)[^\s,;\"']+"), r"\1\2[REDACTED]"),
]


def redact_secrets(message: str) -> str:
    """Replace API keys and bearer tokens in *message* with placeholders."""
    for pattern, replacement in _SECRET_PATTERNS:
        message = pattern.sub(replacement, message)
    return message


def error_response(exc: Exception, fallback: str = "Internal server error") -> ApiResponse:
    """Return the status and body the boundary reports for *exc*.

    Args:
        exc: Any exception raised while handling a request.
        fallback: Message used for exceptions the core does not define.
    """
    if isinstance(exc, ValidationError):
        body = {"error": exc.message}
        if exc.details:
            body["details"] = dict(exc.details)
        return ApiResponse(exc.status_code, body)

    if isinstance(exc, ConfigurationRequiredError):
        return ApiResponse(exc.status_code, {"error": exc.message})

    if isinstance(exc, AdapterInitError):
        return ApiResponse(exc.status_code, {"error": "Failed to initialize AI service"})

    if isinstance(exc, UpstreamError):
        message = redact_secrets(exc.message) if exc.message else "No response from AI provider"
        return ApiResponse(exc.status_code, {"error": message})

    if isinstance(exc, CodementorError):
        return ApiResponse(exc.status_code, {"error": redact_secrets(exc.message)})

    logger.error("Unhandled %s mapped to %r: %s", type(exc).__name__, fallback, exc)
    return ApiResponse(500, {"error": fallback})
