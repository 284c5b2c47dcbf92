from __future__ import annotations

import asyncio
import logging
import re
import secrets
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from ...domain.chat_models import BrandContext, ChatResponse, Message
from ...domain.errors import ChatValidationError, GenerationTimeoutError
from ...services.brand_context_store import BrandContextStore
from ...services.content_generator import ContentGenerator


logger = logging.getLogger("mavericks.api.chat")

MAX_MESSAGE_LENGTH = 5000
MAX_HISTORY_LENGTH = 50

_WHITESPACE = re.compile(r"\s+")
_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"
_ROLES = ("system", "user", "assistant")


def sanitize_input(text: str) -> str:
    """Replace NULs with spaces, trim and collapse whitespace runs."""
    return _WHITESPACE.sub(" ", text.replace("\0", " ").strip())


def new_session_id() -> str:
    suffix = "".join(secrets.choice(_BASE36) for _ in range(9))
    return f"session_{int(time.time() * 1000)}_{suffix}"


@dataclass
class ParsedChatRequest:
    message: str
    history: List[Message] = field(default_factory=list)
    brand_context: Optional[BrandContext] = None
    session_id: Optional[str] = None


def _history_message(entry: Dict[str, Any]) -> Optional[Message]:
    role = entry["role"]
    if role not in _ROLES:
        return None
    data: Dict[str, Any] = {"role": role, "content": entry["content"]}
    if entry.get("id") is not None:
        data["id"] = str(entry["id"])
    if isinstance(entry.get("timestamp"), int):
        data["timestamp"] = entry["timestamp"]
    return Message(**data)


def parse_chat_payload(payload: Any) -> ParsedChatRequest:
    """Validate a raw /api/chat body; the first violated rule wins."""
    body = payload if isinstance(payload, dict) else {}

    message = body.get("message")
    if not isinstance(message, str):
        raise ChatValidationError("Invalid request: message is required and must be a string")

    sanitized = sanitize_input(message)
    if not sanitized:
        raise ChatValidationError("Invalid request: message cannot be empty")
    if len(sanitized) > MAX_MESSAGE_LENGTH:
        raise ChatValidationError(
            f"Invalid request: message exceeds maximum length of {MAX_MESSAGE_LENGTH} characters"
        )

    history = body.get("history")
    if history is not None and not isinstance(history, list):
        raise ChatValidationError("Invalid request: history must be an array")
    history = history or []
    if len(history) > MAX_HISTORY_LENGTH:
        raise ChatValidationError(
            f"Invalid request: history exceeds maximum length of {MAX_HISTORY_LENGTH} messages"
        )
    for entry in history:
        if not isinstance(entry, dict) or not entry.get("role") or not isinstance(entry.get("content"), str):
            raise ChatValidationError("Invalid request: history messages must have role and content")
    messages = [m for m in (_history_message(e) for e in history) if m is not None]

    raw_context = body.get("brandContext")
    brand_context: Optional[BrandContext] = None
    if raw_context is not None:
        if not isinstance(raw_context, dict):
            raise ChatValidationError("Invalid request: brandContext must be an object")
        try:
            brand_context = BrandContext.model_validate(raw_context)
        except ValidationError:
            raise ChatValidationError("Invalid request: brandContext fields must be strings")

    session_id = body.get("sessionId")
    if session_id is not None and not isinstance(session_id, str):
        raise ChatValidationError("Invalid request: sessionId must be a string")

    return ParsedChatRequest(
        message=sanitized,
        history=messages,
        brand_context=brand_context,
        session_id=session_id or None,
    )


def resolve_brand_context(
    store: BrandContextStore,
    brand_context: Optional[BrandContext],
    session_id: Optional[str],
) -> tuple[Optional[BrandContext], Optional[str]]:
    """Return the effective (context, session id) for a request."""
    if brand_context is not None and brand_context.is_empty():
        # An empty object explicitly clears whatever the session remembered
        if session_id:
            store.delete(session_id)
        return None, session_id

    if brand_context is not None and session_id:
        store.set(session_id, brand_context)
        return brand_context, session_id
    if brand_context is None and session_id and store.has(session_id):
        return store.get(session_id), session_id
    if brand_context is not None and not session_id:
        session_id = new_session_id()
        store.set(session_id, brand_context)
        logger.info("brand_session_created", extra={"session_id": session_id})
        return brand_context, session_id
    return None, session_id


def get_brand_store(request: Request) -> BrandContextStore:
    return request.app.state.brand_store


def get_generator(request: Request) -> ContentGenerator:
    return request.app.state.generator


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("")
async def chat(
    request: Request,
    store: BrandContextStore = Depends(get_brand_store),
    generator: ContentGenerator = Depends(get_generator),
):
    try:
        payload = await request.json()
    except ValueError:
        payload = None

    try:
        parsed = parse_chat_payload(payload)
    except ChatValidationError as exc:
        return _error(exc.status_code, str(exc))

    brand_context, session_id = resolve_brand_context(store, parsed.brand_context, parsed.session_id)

    deadline = request.app.state.settings.generation_timeout_seconds
    try:
        try:
            text = await asyncio.wait_for(
                generator.generate(parsed.message, parsed.history, brand_context),
                timeout=deadline,
            )
        except asyncio.TimeoutError:
            raise GenerationTimeoutError("Generation timeout")
    except Exception as exc:
        logger.exception("chat_generation_failed")
        return _error(500, f"Failed to generate response: {exc}")

    return ChatResponse(response=text, success=True, session_id=session_id).to_wire()
