from __future__ import annotations

from typing import Dict, Optional
from threading import RLock

from ..domain.chat_models import BRAND_FIELDS, BrandContext


class BrandContextStore:
    """In-memory brand context per chat session.

    Records live for the lifetime of the process; there is no eviction.
    Every read and write copies, so callers never hold a reference into
    the stored map.
    """

    def __init__(self) -> None:
        self._data: Dict[str, BrandContext] = {}
        self._lock = RLock()

    def set(self, session_id: str, context: BrandContext) -> None:
        with self._lock:
            self._data[session_id] = context.model_copy(deep=True)

    def get(self, session_id: str) -> Optional[BrandContext]:
        with self._lock:
            context = self._data.get(session_id)
            return context.model_copy(deep=True) if context is not None else None

    def update(self, session_id: str, partial: BrandContext) -> BrandContext:
        """Merge the populated fields of ``partial`` over the stored record."""
        with self._lock:
            existing = self._data.get(session_id) or BrandContext()
            changes = {name: getattr(partial, name) for name in BRAND_FIELDS if getattr(partial, name) is not None}
            merged = existing.model_copy(update=changes, deep=True)
            self._data[session_id] = merged
            return merged.model_copy(deep=True)

    def has(self, session_id: str) -> bool:
        with self._lock:
            return session_id in self._data

    def delete(self, session_id: str) -> bool:
        with self._lock:
            return self._data.pop(session_id, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def size(self) -> int:
        with self._lock:
            return len(self._data)

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, session_id: object) -> bool:
        return isinstance(session_id, str) and self.has(session_id)
