from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Dict, List, Optional, Sequence

from ..domain.chat_models import BrandContext, Message
from ..domain.errors import (
    AuthError,
    GenerationError,
    GenericGenerationError,
    InvalidUpstreamRequestError,
    NetworkError,
    RateLimitError,
    UpstreamServerError,
)
from ..observability.metrics import record_attempt
from .llm_client import CompletionClient, CompletionOptions
from .prompts import build_prompt, detect_content_type
from .validators import validate_content


logger = logging.getLogger("mavericks.generator")
LOG = logging.getLogger("mavericks.llm")

Sleep = Callable[[float], Awaitable[None]]

RATE_LIMIT_MESSAGE = "The service is experiencing high demand. Please wait a moment and try again."
AUTH_MESSAGE = "API authentication failed. Please check your OpenAI API key."
INVALID_REQUEST_MESSAGE = "Invalid request to OpenAI API. Please try rephrasing your message."
UNAVAILABLE_MESSAGE = "OpenAI service is temporarily unavailable. Please try again in a moment."
NETWORK_MESSAGE = "Network connection error. Please check your internet connection and try again."

RETRY_DELAY_SECONDS = 1.0


def _status_of(exc: BaseException) -> Optional[int]:
    for attr in ("status_code", "status"):
        value = getattr(exc, attr, None)
        if isinstance(value, int):
            return value
    return None


def _is_network_error(exc: BaseException) -> bool:
    if isinstance(exc, ConnectionError):
        return True
    text = str(exc).lower()
    return "fetch" in text or "network" in text


def build_messages(
    system_prompt: str,
    history: Sequence[Message],
    user_message: str,
) -> List[Dict[str, str]]:
    """System prompt first, then user/assistant turns, then the new message."""
    msgs = [{"role": "system", "content": system_prompt}]
    for m in history:
        if m.role in ("user", "assistant"):
            msgs.append({"role": m.role, "content": m.content})
    msgs.append({"role": "user", "content": user_message})
    return msgs


class ContentGenerator:
    """Calls the upstream model with a bounded, per-failure-class retry policy.

    Attempts run strictly one after another. ``sleep`` is injectable so tests
    can use a zero-delay clock.
    """

    def __init__(
        self,
        client: CompletionClient,
        sleep: Sleep = asyncio.sleep,
        options: Optional[CompletionOptions] = None,
    ) -> None:
        self.client = client
        self.sleep = sleep
        self.options = options or CompletionOptions()

    async def generate(
        self,
        user_message: str,
        history: Optional[Sequence[Message]] = None,
        brand_context: Optional[BrandContext] = None,
        max_retries: int = 3,
    ) -> str:
        system_prompt = build_prompt(user_message, brand_context)
        msgs = build_messages(system_prompt, history or [], user_message)

        last_error: Optional[BaseException] = None
        rate_limited = False
        final_attempt = max_retries - 1

        for attempt in range(max_retries):
            try:
                text = await self.client.complete(msgs, self.options)
                if not text:
                    raise RuntimeError("No response from OpenAI")
            except Exception as exc:
                last_error = exc
                status = _status_of(exc)

                if status == 429:
                    rate_limited = True
                    record_attempt("rate_limited")
                    LOG.info("llm_rate_limited", extra={"attempt": attempt + 1, "max_retries": max_retries})
                    if attempt < final_attempt:
                        await self.sleep(2 ** attempt)
                    continue

                if status == 401:
                    record_attempt("auth_failed")
                    raise AuthError(AUTH_MESSAGE, cause=exc) from exc

                if status == 400:
                    record_attempt("invalid_request")
                    raise InvalidUpstreamRequestError(INVALID_REQUEST_MESSAGE, cause=exc) from exc

                if status is not None and status >= 500:
                    record_attempt("server_error")
                    LOG.warning("llm_server_error", extra={"attempt": attempt + 1, "status": status})
                    if attempt < final_attempt:
                        await self.sleep(RETRY_DELAY_SECONDS)
                        continue
                    raise UpstreamServerError(UNAVAILABLE_MESSAGE, cause=exc) from exc

                if _is_network_error(exc):
                    record_attempt("network_error")
                    LOG.warning("llm_network_error", extra={"attempt": attempt + 1, "err": str(exc)})
                    if attempt < final_attempt:
                        await self.sleep(RETRY_DELAY_SECONDS)
                        continue
                    raise NetworkError(NETWORK_MESSAGE, cause=exc) from exc

                record_attempt("error")
                LOG.warning("llm_attempt_failed", extra={"attempt": attempt + 1, "err": str(exc)})
                if attempt < final_attempt:
                    await self.sleep(RETRY_DELAY_SECONDS)
                continue

            record_attempt("success")
            self._check_structure(user_message, text)
            return text

        if rate_limited:
            raise RateLimitError(RATE_LIMIT_MESSAGE, cause=last_error)
        reason = str(last_error) if last_error else "Unknown error"
        raise GenericGenerationError(f"Unable to generate content: {reason}. Please try again.", cause=last_error)

    @staticmethod
    def _check_structure(user_message: str, text: str) -> None:
        content_type = detect_content_type(user_message)
        result = validate_content(content_type, text)
        if result is not None and not result.is_valid:
            logger.warning(
                "content_validation_failed",
                extra={
                    "content_type": content_type.name,
                    "missing": result.missing_components,
                    "errors": result.errors,
                },
            )


__all__ = ["ContentGenerator", "GenerationError", "build_messages"]
