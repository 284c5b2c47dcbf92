"""Upstream chat-completion boundary.

The generator only depends on :class:`CompletionClient`; the default
implementation wraps ``langchain_openai.ChatOpenAI`` and translates SDK
failures into exceptions that carry an HTTP-like ``status_code``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Protocol

import openai

from ..config import Settings

# Optional import: langchain-openai
try:
    from langchain_openai import ChatOpenAI  # type: ignore
except Exception:  # pragma: no cover - optional import
    ChatOpenAI = None  # type: ignore


LOG = logging.getLogger("mavericks.llm")


@dataclass(frozen=True)
class CompletionOptions:
    temperature: float = 0.7
    max_tokens: int = 2000


class UpstreamStatusError(Exception):
    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code


class UpstreamConnectionError(ConnectionError):
    pass


class CompletionClient(Protocol):
    async def complete(self, messages: List[Dict[str, str]], options: CompletionOptions) -> Optional[str]: ...


class OpenAIChatClient:
    def __init__(
        self,
        api_key: Optional[str],
        model: str = "gpt-4",
        base_url: Optional[str] = None,
        timeout: float = 30.0,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.base_url = base_url
        self.timeout = timeout
        self._llms: Dict[CompletionOptions, object] = {}

    @classmethod
    def from_settings(cls, settings: Settings) -> "OpenAIChatClient":
        return cls(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            base_url=settings.openai_base_url,
            timeout=settings.request_timeout_seconds,
        )

    def _get_llm(self, options: CompletionOptions):
        llm = self._llms.get(options)
        if llm is not None:
            return llm
        if not ChatOpenAI:
            raise RuntimeError("LLM client not available")
        if not self.api_key:
            raise UpstreamStatusError(401, "OPENAI_API_KEY is not configured")
        # The generator owns the retry policy, so the SDK must not retry on its own.
        llm = ChatOpenAI(
            api_key=self.api_key,
            base_url=self.base_url,
            model=self.model,
            temperature=options.temperature,
            max_tokens=options.max_tokens,
            max_retries=0,
            timeout=self.timeout,
        )
        self._llms[options] = llm
        return llm

    async def complete(self, messages: List[Dict[str, str]], options: CompletionOptions) -> Optional[str]:
        llm = self._get_llm(options)
        LOG.debug("llm_invoke", extra={"model": self.model, "messages": len(messages)})
        try:
            res = await llm.ainvoke(messages)
        except openai.APIStatusError as exc:
            raise UpstreamStatusError(exc.status_code, str(exc)) from exc
        except openai.APIConnectionError as exc:
            raise UpstreamConnectionError(f"network error: {exc}") from exc
        text = res.content if hasattr(res, "content") else res
        if isinstance(text, str):
            return text
        return None
