import pytest

from src.mavericks.domain.chat_models import BrandContext
from src.mavericks.services import prompts


@pytest.mark.parametrize(
    "message,expected",
    [
        ("Write a BLOG post about AI", prompts.BLOG_POST),
        ("Draft an article on SEO", prompts.BLOG_POST),
        ("Post for LinkedIn", prompts.SOCIAL_MEDIA),
        ("Write an email newsletter", prompts.EMAIL),
        ("Give me an advertisement", prompts.AD_COPY),
        ("Plan our marketing strategy", prompts.CAMPAIGN_STRATEGY),
        ("Any campaign idea for spring?", prompts.CAMPAIGN_IDEAS),
        ("hello", prompts.GENERAL),
    ],
)
def test_detect_content_type(message, expected):
    assert prompts.detect_content_type(message).name == expected


def test_priority_order_blog_beats_social():
    assert prompts.detect_content_type("Blog post to share on twitter").name == prompts.BLOG_POST


def test_substring_matching_is_greedy():
    # "x" is a social platform keyword, so any message containing an x is social content
    detected = prompts.detect_content_type("Next quarter plan")
    assert detected.name == prompts.SOCIAL_MEDIA
    assert detected.platform == "x"


def test_social_prompt_uses_platform_limit():
    prompt = prompts.build_prompt("Post for instagram")
    assert "instagram" in prompt
    assert "2200 characters" in prompt


def test_general_prompt_without_context():
    prompt = prompts.build_prompt("hello")
    assert prompt == prompts.GENERAL_PROMPT
    assert "Brand Context" not in prompt


def test_brand_context_lists_only_populated_fields_in_order():
    ctx = BrandContext(industry="Retail", brand_name="Acme", target_audience="Parents")
    prompt = prompts.build_prompt("hello", ctx)
    block = prompt.split("Brand Context:")[1]
    assert "Brand Voice" not in block
    assert block.index("Brand Name: Acme") < block.index("Target Audience: Parents") < block.index("Industry: Retail")
    assert prompt.endswith("Ensure all generated content aligns with this brand context.")


def test_specialized_prompt_gets_bold_brand_heading():
    prompt = prompts.build_prompt("Write a blog", BrandContext(brand_voice="Witty"))
    assert "**Brand Context:**\n- Brand Voice: Witty" in prompt


def test_build_prompt_is_total():
    assert prompts.build_prompt("") == prompts.GENERAL_PROMPT
