"""Exception types raised by the conversation core.

Every exception carries the HTTP status the request boundary reports for it,
so callers outside the core get the same status regardless of which component
failed.
"""


class CodementorError(Exception):
    """Base class for all errors raised by the core."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(CodementorError):
    """Caller input is malformed. Always recoverable by fixing the input."""

    status_code = 400

    def __init__(self, message: str, details: dict | None = None) -> None:
        super().__init__(message)
        self.details = details


class UnsupportedProviderError(ValidationError):
    """The provider identifier is outside the known set."""

    def __init__(self, provider: str, supported: tuple) -> None:
        choices = ", ".join(f'"{p}"' for p in supported)
        super().__init__(f"Invalid provider '{provider}'. Must be one of {choices}")
        self.provider = provider


class ConfigurationRequiredError(CodementorError):
    """A message was sent before any provider was configured."""

    status_code = 400

    def __init__(self, message: str = "AI configuration not set") -> None:
        super().__init__(message)


class UpstreamError(CodementorError):
    """The provider call failed or returned no usable content."""

    def __init__(self, message: str, provider: str = "") -> None:
        super().__init__(message)
        self.provider = provider


class AdapterInitError(CodementorError):
    """Building the provider client failed (bad SDK install, bad arguments)."""

    def __init__(self, provider: str, reason: str) -> None:
        super().__init__(f"Failed to initialize {provider} adapter: {reason}")
        self.provider = provider
