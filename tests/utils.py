from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional

from fastapi.testclient import TestClient

from src.mavericks.api.main import create_app
from src.mavericks.config import Settings
from src.mavericks.services.brand_context_store import BrandContextStore


class StubCompletionClient:
    """Replays a scripted list of results; exceptions are raised, strings returned."""

    def __init__(self, outcomes: List[Any]) -> None:
        self.outcomes = list(outcomes)
        self.calls: List[List[Dict[str, str]]] = []

    async def complete(self, messages, options):
        self.calls.append(messages)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


class StatusError(Exception):
    def __init__(self, status_code: int, message: str = "upstream failure") -> None:
        super().__init__(message)
        self.status_code = status_code


class RecordingSleep:
    def __init__(self) -> None:
        self.delays: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


class StubGenerator:
    def __init__(self, reply: str = "Test marketing response", error: Optional[Exception] = None, delay: float = 0.0) -> None:
        self.reply = reply
        self.error = error
        self.delay = delay
        self.calls: List[Dict[str, Any]] = []

    async def generate(self, user_message, history=None, brand_context=None, max_retries=3):
        self.calls.append({"message": user_message, "history": history, "brand_context": brand_context})
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.reply


def make_client(
    generator: Optional[StubGenerator] = None,
    store: Optional[BrandContextStore] = None,
    settings: Optional[Settings] = None,
) -> TestClient:
    app = create_app(
        settings=settings or Settings(),
        store=store if store is not None else BrandContextStore(),
        generator=generator or StubGenerator(),
    )
    return TestClient(app)
