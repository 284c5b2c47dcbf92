from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, Optional, Union

import requests
from pydantic import ValidationError

from ..domain.chat_models import ChatRequest, ChatResponse
from ..domain.errors import ChatClientError, ClientTimeoutError


LOG = logging.getLogger("mavericks.client")

API_TIMEOUT_SECONDS = 30.0
DEFAULT_BASE_URL = "http://localhost:3000"

HIGH_DEMAND_MESSAGE = "The service is experiencing high demand. Please wait a moment and try again."
SERVER_TIMEOUT_MESSAGE = "Request timed out. The response took longer than expected. Please try again."
UNAVAILABLE_MESSAGE = "The service is temporarily unavailable. Please try again in a moment."
NETWORK_MESSAGE = "Network error. Please check your internet connection and try again."
TIMEOUT_MESSAGE = "Request timed out after 30 seconds. Please try again with a simpler request."
UNEXPECTED_MESSAGE = "An unexpected error occurred. Please try again."


class ChatClient:
    """Calls ``POST /api/chat`` with its own timeout and retry budget.

    One initial attempt plus ``max_retries`` retries. Server errors and
    connection failures back off ``1s * (retry + 1)``; timeouts, 408 and 429
    are terminal.

    ``requests`` applies ``timeout`` to the connect and to each socket read,
    not to the whole exchange. An attempt whose response arrives after
    ``timeout`` seconds of wall-clock time is therefore reported as a timeout
    once it completes, even if no single read stalled that long.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        max_retries: int = 2,
        timeout: float = API_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.max_retries = max_retries
        self.timeout = timeout
        self._session = session or requests.Session()
        self._sleep = sleep
        self._clock = clock

    def _backoff(self, retry_count: int) -> None:
        self._sleep(1.0 * (retry_count + 1))

    def send_message(self, request: Union[ChatRequest, Dict[str, Any]]) -> ChatResponse:
        body = request.to_wire() if isinstance(request, ChatRequest) else dict(request)
        retry_count = 0
        while True:
            started = self._clock()
            try:
                resp = self._session.post(f"{self.base_url}/api/chat", json=body, timeout=self.timeout)
            except requests.Timeout as exc:
                raise ClientTimeoutError(TIMEOUT_MESSAGE) from exc
            except requests.ConnectionError as exc:
                if retry_count < self.max_retries:
                    LOG.info("chat_network_retry", extra={"attempt": retry_count + 1, "max_retries": self.max_retries})
                    self._backoff(retry_count)
                    retry_count += 1
                    continue
                raise ChatClientError(NETWORK_MESSAGE) from exc
            except requests.RequestException as exc:
                LOG.warning("chat_request_failed", extra={"err": str(exc)})
                raise ChatClientError(UNEXPECTED_MESSAGE) from exc

            if self._clock() - started > self.timeout:
                raise ClientTimeoutError(TIMEOUT_MESSAGE)

            if resp.ok:
                try:
                    return ChatResponse.model_validate(resp.json())
                except (ValueError, ValidationError) as exc:
                    LOG.warning("chat_response_unreadable", extra={"status": resp.status_code})
                    raise ChatClientError(UNEXPECTED_MESSAGE, status_code=resp.status_code) from exc

            status = resp.status_code
            if status == 429:
                raise ChatClientError(HIGH_DEMAND_MESSAGE, status_code=status)
            if status == 408:
                raise ChatClientError(SERVER_TIMEOUT_MESSAGE, status_code=status)
            if status >= 500:
                if retry_count < self.max_retries:
                    LOG.info("chat_server_retry", extra={"attempt": retry_count + 1, "status": status})
                    self._backoff(retry_count)
                    retry_count += 1
                    continue
                raise ChatClientError(UNAVAILABLE_MESSAGE, status_code=status)

            try:
                error_data = resp.json()
            except ValueError:
                error_data = {}
            message = error_data.get("error") if isinstance(error_data, dict) else None
            raise ChatClientError(message or f"Server error ({status})", status_code=status)

    def health_check(self) -> bool:
        try:
            resp = self._session.get(f"{self.base_url}/api/health", timeout=self.timeout)
            return resp.ok
        except Exception:
            return False
