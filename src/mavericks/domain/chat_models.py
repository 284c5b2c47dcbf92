from __future__ import annotations

import time
import uuid
from typing import List, Optional, Literal
from pydantic import BaseModel, ConfigDict, Field


Role = Literal["system", "user", "assistant"]

BRAND_FIELDS = ("brand_name", "brand_voice", "target_audience", "industry")


def _now_ms() -> int:
    return int(time.time() * 1000)


class Message(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    role: Role
    content: str
    timestamp: int = Field(default_factory=_now_ms)


class BrandContext(BaseModel):
    """Sparse brand metadata; every field is optional."""

    model_config = ConfigDict(populate_by_name=True)

    brand_name: Optional[str] = Field(default=None, alias="brandName")
    brand_voice: Optional[str] = Field(default=None, alias="brandVoice")
    target_audience: Optional[str] = Field(default=None, alias="targetAudience")
    industry: Optional[str] = None

    def is_empty(self) -> bool:
        return not any(getattr(self, name) for name in BRAND_FIELDS)

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    history: Optional[List[Message]] = None
    brand_context: Optional[BrandContext] = Field(default=None, alias="brandContext")
    session_id: Optional[str] = Field(default=None, alias="sessionId")

    def to_wire(self) -> dict:
        body: dict = {"message": self.message}
        if self.history is not None:
            body["history"] = [m.model_dump() for m in self.history]
        if self.brand_context is not None:
            body["brandContext"] = self.brand_context.to_wire()
        if self.session_id:
            body["sessionId"] = self.session_id
        return body


class ChatResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    response: str = ""
    success: bool
    error: Optional[str] = None
    session_id: Optional[str] = Field(default=None, alias="sessionId")

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)
