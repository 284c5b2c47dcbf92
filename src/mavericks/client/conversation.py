from __future__ import annotations

import logging
from typing import List, Optional

from ..domain.chat_models import BrandContext, ChatRequest, Message
from ..domain.errors import ChatClientError
from .chat_client import ChatClient
from .context_extractor import extract_brand_context, merge_brand_context


LOG = logging.getLogger("mavericks.client")


class Conversation:
    """Client-side chat state: messages, inferred brand context, retry of the last failure."""

    def __init__(self, client: ChatClient) -> None:
        self.client = client
        self.messages: List[Message] = []
        self.brand_context = BrandContext()
        self.session_id: Optional[str] = None
        self.error: Optional[str] = None
        self.last_failed_message: Optional[str] = None

    def _append(self, message: Message) -> None:
        self.messages.append(message)
        self.brand_context = merge_brand_context(self.brand_context, extract_brand_context(self.messages))

    def send(self, text: str) -> Message:
        """Send ``text`` and return the assistant (or error) bubble appended for it."""
        self.error = None
        self.last_failed_message = None

        history = list(self.messages)
        self._append(Message(role="user", content=text))

        request = ChatRequest(
            message=text,
            history=history,
            brand_context=None if self.brand_context.is_empty() else self.brand_context,
            session_id=self.session_id,
        )
        try:
            response = self.client.send_message(request)
            if not response.success:
                raise ChatClientError(response.error or "Failed to get response")
        except Exception as exc:
            message = exc.message if isinstance(exc, ChatClientError) else (str(exc) or "An unexpected error occurred")
            LOG.info("conversation_send_failed", extra={"err": message})
            self.error = message
            self.last_failed_message = text
            reply = Message(role="assistant", content=f"Sorry, I encountered an error: {message}")
            self.messages.append(reply)
            return reply

        if response.session_id:
            self.session_id = response.session_id
        reply = Message(role="assistant", content=response.response)
        self._append(reply)
        return reply

    def retry(self) -> Optional[Message]:
        """Drop the trailing error bubble and resend the last failed message."""
        if not self.last_failed_message:
            return None
        text = self.last_failed_message
        # remove the error bubble and the user turn it answered; send() re-adds the user turn
        if self.messages and self.messages[-1].role == "assistant":
            self.messages.pop()
        if self.messages and self.messages[-1].role == "user" and self.messages[-1].content == text:
            self.messages.pop()
        return self.send(text)
