"""Python counterpart of the browser client: HTTP calls, context extraction, conversation state."""

from .chat_client import ChatClient
from .context_extractor import extract_brand_context, merge_brand_context
from .conversation import Conversation

__all__ = ["ChatClient", "Conversation", "extract_brand_context", "merge_brand_context"]
