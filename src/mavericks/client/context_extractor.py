"""Heuristic brand-context extraction from a conversation's user turns."""

from __future__ import annotations

import re
from typing import Iterable, List, Optional, Pattern, Tuple

from ..domain.chat_models import BRAND_FIELDS, BrandContext, Message


BRAND_PATTERNS: Tuple[Pattern[str], ...] = (
    re.compile(r"(?:my brand is|brand is|for|brand:)\s+([A-Z][a-zA-Z0-9\s&]+?)(?:\s+(?:and|which|that|,|\.|$))", re.I),
    re.compile(r"(?:we are|we're|i'm with|i work for)\s+([A-Z][a-zA-Z0-9\s&]+?)(?:\s+(?:and|which|that|,|\.|$))", re.I),
)

AUDIENCE_PATTERNS: Tuple[Pattern[str], ...] = (
    re.compile(r"(?:target audience|audience|targeting|for)\s+(?:is|are|:)?\s*([a-z0-9\s,\-]+?)(?:\s+(?:who|that|and|,|\.|$))", re.I),
    re.compile(r"(?:customers|clients|users)\s+(?:are|is)?\s*([a-z0-9\s,\-]+?)(?:\s+(?:who|that|and|,|\.|$))", re.I),
)

INDUSTRY_PATTERNS: Tuple[Pattern[str], ...] = (
    re.compile(r"(?:industry|sector|field|in the)\s+(?:is|:)?\s*([a-z\s]+?)(?:\s+(?:industry|sector|space|market|,|\.|$))", re.I),
    re.compile(r"(?:we're in|work in|operate in)\s+(?:the)?\s*([a-z\s]+?)(?:\s+(?:industry|sector|space|market|,|\.|$))", re.I),
)

VOICE_PATTERNS: Tuple[Pattern[str], ...] = (
    re.compile(r"(?:tone|voice|style)\s+(?:is|should be|:)?\s*([a-z\s,]+?)(?:\s+(?:and|,|\.|$))", re.I),
    re.compile(
        r"(?:sound|be|feel)\s+(?:more)?\s*(professional|casual|friendly|formal|playful|serious|conversational)(?:\s+(?:and|,|\.|$))",
        re.I,
    ),
)


def _first_match(patterns: Iterable[Pattern[str]], text: str, min_len: int = 0) -> Optional[str]:
    for pattern in patterns:
        match = pattern.search(text)
        if match and match.group(1) and len(match.group(1)) > min_len:
            return match.group(1).strip()
    return None


def extract_brand_context(messages: List[Message]) -> BrandContext:
    text = " ".join(m.content.lower() for m in messages if m.role == "user")
    return BrandContext(
        brand_name=_first_match(BRAND_PATTERNS, text),
        target_audience=_first_match(AUDIENCE_PATTERNS, text, min_len=3),
        industry=_first_match(INDUSTRY_PATTERNS, text, min_len=2),
        brand_voice=_first_match(VOICE_PATTERNS, text, min_len=2),
    )


def merge_brand_context(existing: BrandContext, new: BrandContext) -> BrandContext:
    """Newer non-empty values win, field by field."""
    return BrandContext(**{name: getattr(new, name) or getattr(existing, name) for name in BRAND_FIELDS})
