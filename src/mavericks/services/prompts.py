"""Marketing prompt templates and content-type detection.

Detection is a priority-ordered table of ``(content_type, keywords)`` rows.
The first row whose keyword appears in the lower-cased user message selects
the specialised template; no match falls back to the general assistant
prompt. Matching is plain substring containment.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from ..domain.chat_models import BrandContext

GENERAL = "general"
BLOG_POST = "blog_post"
SOCIAL_MEDIA = "social_media"
EMAIL = "email"
AD_COPY = "ad_copy"
CAMPAIGN_STRATEGY = "campaign_strategy"
CAMPAIGN_IDEAS = "campaign_ideas"

PLATFORM_LIMITS: Dict[str, int] = {
    "twitter": 280,
    "x": 280,
    "linkedin": 3000,
    "facebook": 63206,
    "instagram": 2200,
}
DEFAULT_PLATFORM_LIMIT = 280

SOCIAL_PLATFORMS: Tuple[str, ...] = ("twitter", "x", "linkedin", "facebook", "instagram", "social media")


@dataclass(frozen=True)
class ContentType:
    name: str
    platform: Optional[str] = None


def _keyword_rule(name: str, *keywords: str) -> Callable[[str], Optional[ContentType]]:
    def rule(text: str) -> Optional[ContentType]:
        if any(k in text for k in keywords):
            return ContentType(name)
        return None

    return rule


def _social_rule(text: str) -> Optional[ContentType]:
    for platform in SOCIAL_PLATFORMS:
        if platform in text:
            return ContentType(SOCIAL_MEDIA, platform=platform)
    return None


DETECTION_RULES: List[Callable[[str], Optional[ContentType]]] = [
    _keyword_rule(BLOG_POST, "blog", "article"),
    _social_rule,
    _keyword_rule(EMAIL, "email"),
    _keyword_rule(AD_COPY, "ad", "advertisement"),
    _keyword_rule(CAMPAIGN_STRATEGY, "campaign strategy", "marketing strategy"),
    _keyword_rule(CAMPAIGN_IDEAS, "campaign idea", "campaign concept"),
]


def detect_content_type(user_message: str) -> ContentType:
    text = (user_message or "").lower()
    for rule in DETECTION_RULES:
        match = rule(text)
        if match:
            return match
    return ContentType(GENERAL)


def format_brand_context(brand_context: BrandContext, heading: str = "**Brand Context:**") -> str:
    lines = [heading]
    if brand_context.brand_name:
        lines.append(f"- Brand Name: {brand_context.brand_name}")
    if brand_context.brand_voice:
        lines.append(f"- Brand Voice: {brand_context.brand_voice}")
    if brand_context.target_audience:
        lines.append(f"- Target Audience: {brand_context.target_audience}")
    if brand_context.industry:
        lines.append(f"- Industry: {brand_context.industry}")
    return "\n".join(lines) + "\n\nEnsure all generated content aligns with this brand context."


def _blog_post_prompt(_: ContentType) -> str:
    return (
        "You are an expert content marketing writer. When generating blog posts, you MUST include ALL of the following sections:\n"
        "\n"
        "1. **Title**: A compelling, SEO-friendly headline\n"
        "2. **Introduction**: An engaging opening that hooks the reader (2-3 paragraphs)\n"
        "3. **Body Sections**: Multiple well-structured sections with subheadings covering the topic in depth\n"
        "4. **Conclusion**: A strong closing that summarizes key points and includes a call-to-action\n"
        "\n"
        "Format your response with clear markdown headers (##, ###) for each section.\n"
        "Ensure the content is informative, engaging, and optimized for the target audience."
    )


def _social_media_prompt(content_type: ContentType) -> str:
    platform = content_type.platform or "social media"
    limit = PLATFORM_LIMITS.get(platform.lower(), DEFAULT_PLATFORM_LIMIT)
    return (
        f"You are a social media marketing expert. Generate engaging social media content for {platform}.\n"
        "\n"
        "CRITICAL REQUIREMENTS:\n"
        f"- The content MUST NOT exceed {limit} characters\n"
        "- Include relevant hashtags and emojis where appropriate\n"
        "- Make it engaging and shareable\n"
        "- Optimize for the platform's audience and style\n"
        "\n"
        f"Character limit: {limit} characters (strictly enforced)"
    )


def _email_prompt(_: ContentType) -> str:
    return (
        "You are an email marketing specialist. Generate compelling email marketing copy that MUST include:\n"
        "\n"
        "1. **Subject Line**: A catchy, attention-grabbing subject line (clearly labeled)\n"
        "2. **Email Body**: Well-structured email content with:\n"
        "   - Opening hook\n"
        "   - Main message/value proposition\n"
        "   - Clear call-to-action\n"
        "   - Professional closing\n"
        "\n"
        "Format your response with clear sections:\n"
        "## Subject Line\n"
        "[Your subject line here]\n"
        "\n"
        "## Email Body\n"
        "[Your email content here]\n"
        "\n"
        "Optimize for engagement, open rates, and conversions."
    )


def _ad_copy_prompt(_: ContentType) -> str:
    return (
        "You are a digital advertising copywriter. Generate multiple ad copy variations (MINIMUM 2 variations).\n"
        "\n"
        "Each variation MUST include:\n"
        "1. **Headline**: Attention-grabbing headline (30-60 characters)\n"
        "2. **Description**: Compelling description (80-150 characters)\n"
        "\n"
        "Format your response as:\n"
        "## Variation 1\n"
        "**Headline:** [headline text]\n"
        "**Description:** [description text]\n"
        "\n"
        "## Variation 2\n"
        "**Headline:** [headline text]\n"
        "**Description:** [description text]\n"
        "\n"
        "[Additional variations as appropriate]\n"
        "\n"
        "Make each variation distinct with different angles or messaging approaches.\n"
        "Optimize for click-through rates and conversions."
    )


def _campaign_strategy_prompt(_: ContentType) -> str:
    return (
        "You are a marketing strategist. Generate a comprehensive campaign strategy that MUST include ALL of the following sections:\n"
        "\n"
        "1. **Goals**: Clear, measurable campaign objectives\n"
        "2. **Tactics**: Specific marketing tactics and approaches to achieve the goals\n"
        "3. **Channels**: Recommended marketing channels and platforms for distribution\n"
        "4. **Content Types**: Specific types of content to create (blog posts, videos, social media, etc.)\n"
        "5. **Distribution Channels**: How and where to distribute the content\n"
        "\n"
        "Format your response with clear markdown headers (##) for each section.\n"
        "Ensure the strategy is actionable, data-driven, and aligned with best practices."
    )


def _campaign_ideas_prompt(_: ContentType) -> str:
    lines = [
        "You are a creative marketing strategist. Generate campaign ideas with the following requirements:",
        "",
        "- Provide AT LEAST 3 distinct campaign concepts",
        "- Each concept MUST include:",
        "  1. Campaign name/theme",
        "  2. Core concept description",
        "  3. Rationale explaining why this campaign would be effective",
        "",
        "Format your response as:",
    ]
    for idx in range(1, 4):
        lines.extend(
            [
                f"## Campaign Idea {idx}: [Name]",
                "**Concept:** [Description]",
                "**Rationale:** [Why this works]",
                "",
            ]
        )
    lines.append("Make each campaign idea creative, unique, and strategically sound.")
    return "\n".join(lines)


GENERAL_PROMPT = "\n".join(
    [
        "You are Marketing Mavericks, an expert AI marketing assistant. You help businesses and marketers create compelling marketing content, develop strategic campaigns, and optimize their marketing efforts.",
        "",
        "Your capabilities include:",
        "- Generating blog posts with title, introduction, body sections, and conclusion",
        "- Creating platform-appropriate social media content (Twitter/X: 280 chars, LinkedIn: 3000 chars, etc.)",
        "- Writing email marketing copy with subject lines and body content",
        "- Producing multiple ad copy variations with headlines and descriptions",
        "- Developing comprehensive campaign strategies with goals, tactics, and channels",
        "- Suggesting at least 3 distinct campaign ideas with rationale",
        "- Including recommended content types and distribution channels in strategies",
        "",
        "Always maintain a professional, creative, and strategic tone.",
    ]
)

TEMPLATES: Dict[str, Callable[[ContentType], str]] = {
    BLOG_POST: _blog_post_prompt,
    SOCIAL_MEDIA: _social_media_prompt,
    EMAIL: _email_prompt,
    AD_COPY: _ad_copy_prompt,
    CAMPAIGN_STRATEGY: _campaign_strategy_prompt,
    CAMPAIGN_IDEAS: _campaign_ideas_prompt,
}


def build_prompt(user_message: str, brand_context: Optional[BrandContext] = None) -> str:
    """Return the system prompt for ``user_message``.

    Never raises; an unrecognised request gets the general template.
    """
    content_type = detect_content_type(user_message)
    template = TEMPLATES.get(content_type.name)
    if template is None:
        prompt = GENERAL_PROMPT
        heading = "Brand Context:"
    else:
        prompt = template(content_type)
        heading = "**Brand Context:**"
    if brand_context is not None:
        prompt += "\n\n" + format_brand_context(brand_context, heading=heading)
    return prompt
