from __future__ import annotations

"""Error taxonomy shared by the endpoint, the generator and the client."""

from typing import Optional


class ChatValidationError(Exception):
    """Client-correctable request problem; always answered with HTTP 400."""

    status_code = 400


class GenerationError(Exception):
    """Terminal generation failure carrying a user-facing message."""

    retryable = False

    def __init__(self, message: str, *, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


class AuthError(GenerationError):
    pass


class InvalidUpstreamRequestError(GenerationError):
    pass


class RateLimitError(GenerationError):
    retryable = True


class UpstreamServerError(GenerationError):
    retryable = True


class NetworkError(GenerationError):
    retryable = True


class GenerationTimeoutError(GenerationError):
    pass


class GenericGenerationError(GenerationError):
    retryable = True


class ChatClientError(Exception):
    """Terminal error raised by the HTTP client after its own retry budget."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ClientTimeoutError(ChatClientError):
    pass
