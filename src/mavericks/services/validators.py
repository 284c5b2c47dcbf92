"""Regex structure checks for generated marketing content.

These never alter a response; the generator only logs what is missing.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from .prompts import (
    AD_COPY,
    BLOG_POST,
    CAMPAIGN_IDEAS,
    CAMPAIGN_STRATEGY,
    EMAIL,
    PLATFORM_LIMITS,
    SOCIAL_MEDIA,
    ContentType,
)


@dataclass
class ValidationResult:
    is_valid: bool
    missing_components: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)


def _result(missing: List[str], errors: Optional[List[str]] = None) -> ValidationResult:
    errors = errors or []
    return ValidationResult(is_valid=not missing and not errors, missing_components=missing, errors=errors)


def _paragraphs(content: str, min_len: int) -> List[str]:
    return [p for p in content.split("\n\n") if len(p.strip()) > min_len]


def validate_blog_post_structure(content: str) -> ValidationResult:
    missing: List[str] = []

    first_line = content.strip().split("\n")[0] if content.strip() else ""
    has_title = bool(re.search(r"^#\s+.+", content, re.M) or re.search(r"^.+\n=+", content, re.M) or first_line)
    if not has_title:
        missing.append("title")

    has_intro = bool(re.search(r"introduction|intro|overview", content, re.I) or _paragraphs(content, 50))
    if not has_intro:
        missing.append("introduction")

    heading_count = len(re.findall(r"^#{1,6}\s+.+", content, re.M))
    if not (heading_count >= 2 or len(_paragraphs(content, 50)) >= 3):
        missing.append("body sections")

    if not re.search(r"conclusion|summary|final|closing|to sum up|takeaway", content, re.I):
        missing.append("conclusion")

    return _result(missing)


def validate_email_structure(content: str) -> ValidationResult:
    missing: List[str] = []
    if not re.search(r"subject\s*line|subject:", content, re.I):
        missing.append("subject line")
    has_body = bool(re.search(r"email\s*body|body:|message:", content, re.I) or len(_paragraphs(content, 30)) >= 2)
    if not has_body:
        missing.append("email body")
    return _result(missing)


def validate_ad_copy_structure(content: str) -> ValidationResult:
    missing: List[str] = []
    errors: List[str] = []

    variations = len(re.findall(r"variation\s+\d+", content, re.I))
    if variations < 2:
        errors.append(f"Found {variations} variation(s), but at least 2 are required")
    if len(re.findall(r"headline:", content, re.I)) < 2:
        missing.append("headlines (need at least 2)")
    if len(re.findall(r"description:", content, re.I)) < 2:
        missing.append("descriptions (need at least 2)")

    return _result(missing, errors)


_STRATEGY_SECTIONS = (
    ("goals", r"##?\s*goals?|goals?:|objectives?:"),
    ("tactics", r"##?\s*tactics?|tactics?:|approaches?:|strategies?:"),
    ("channels", r"##?\s*channels?|channels?:|platforms?:"),
    ("content types", r"##?\s*content\s+types?|content\s+types?:"),
    ("distribution channels", r"##?\s*distribution\s+channels?|distribution\s+channels?:|distribution:"),
)


def validate_campaign_strategy_structure(content: str) -> ValidationResult:
    missing = [name for name, pattern in _STRATEGY_SECTIONS if not re.search(pattern, content, re.I)]
    return _result(missing)


def validate_campaign_ideas_structure(content: str) -> ValidationResult:
    errors: List[str] = []
    missing: List[str] = []

    ideas = (
        re.findall(r"campaign\s+idea\s+\d+", content, re.I)
        or re.findall(r"##\s+campaign", content, re.I)
        or re.findall(r"\d+\.\s+campaign", content, re.I)
    )
    if len(ideas) < 3:
        errors.append(f"Found {len(ideas)} campaign idea(s), but at least 3 are required")
    if len(re.findall(r"rationale:", content, re.I)) < 3:
        missing.append("rationale for each campaign (need at least 3)")

    return _result(missing, errors)


def validate_social_media_length(content: str, platform: str) -> ValidationResult:
    limit = PLATFORM_LIMITS.get(platform.lower())
    if not limit:
        return ValidationResult(is_valid=False, errors=[f"Unknown platform: {platform}"])

    clean = re.sub(r"^#+\s+.+$", "", content, flags=re.M)
    clean = re.sub(r"\*\*(.+?)\*\*", r"\1", clean)
    clean = re.sub(r"\*(.+?)\*", r"\1", clean).strip()

    if len(clean) > limit:
        return ValidationResult(
            is_valid=False,
            errors=[f"Content length ({len(clean)}) exceeds {platform} limit of {limit} characters"],
        )
    return ValidationResult(is_valid=True)


_VALIDATORS: Dict[str, Callable[[str], ValidationResult]] = {
    BLOG_POST: validate_blog_post_structure,
    EMAIL: validate_email_structure,
    AD_COPY: validate_ad_copy_structure,
    CAMPAIGN_STRATEGY: validate_campaign_strategy_structure,
    CAMPAIGN_IDEAS: validate_campaign_ideas_structure,
}


def validate_content(content_type: ContentType, content: str) -> Optional[ValidationResult]:
    """Run the checker that matches ``content_type``; None when there is none."""
    if content_type.name == SOCIAL_MEDIA:
        platform = content_type.platform or ""
        if platform not in PLATFORM_LIMITS:
            # "social media" names no platform, so there is no limit to check
            return None
        return validate_social_media_length(content, platform)
    validator = _VALIDATORS.get(content_type.name)
    if validator is None:
        return None
    return validator(content)
