"""Prompt sent to remote text-generation services."""

from typing import Optional

SYSTEM_PROMPT = (
    "You are an expert SEO specialist who generates keyword suggestions with "
    "search volume estimates, competition analysis, and implementation guidance. "
    "Always respond with valid JSON format only, no additional text."
)


def build_prompt(
    business: str,
    industry: str,
    location: Optional[str],
    keyword_type: str,
) -> str:
    """Build the keyword suggestion prompt for a remote service."""
    return (
        "Generate SEO keyword suggestions for this business: \"" + business + "\"\n\n"
        "Industry: " + industry + "\n"
        "Location: " + (location or "Not specified") + "\n"
        "Keyword Type Focus: " + keyword_type + "\n\n"
        "Please provide a JSON response with this exact structure:\n"
        "{\n"
        "  \"primary_keywords\": [ { \"keyword\": \"keyword phrase\", "
        "\"search_volume\": \"estimated monthly searches\", "
        "\"competition\": \"easy|medium|hard\", "
        "\"intent\": \"commercial|informational|navigational\" } ],\n"
        "  \"long_tail_keywords\": [ { \"keyword\": \"longer keyword phrase\", "
        "\"search_volume\": \"estimated monthly searches\", "
        "\"competition\": \"easy|medium|hard\", "
        "\"intent\": \"commercial|informational|navigational\" } ],\n"
        "  \"local_keywords\": [ { \"keyword\": \"local keyword phrase\", "
        "\"search_volume\": \"estimated monthly searches\", "
        "\"competition\": \"easy|medium|hard\", "
        "\"intent\": \"commercial|informational|navigational\" } ],\n"
        "  \"content_ideas\": [ { \"keyword\": \"content-focused keyword\", "
        "\"search_volume\": \"estimated monthly searches\", "
        "\"competition\": \"easy|medium|hard\", \"intent\": \"informational\" } ],\n"
        "  \"seo_tips\": [ { \"tip\": \"specific implementation advice\", "
        "\"keyword_example\": \"example keyword to use\", "
        "\"placement\": \"where to use it (title, meta, content, etc.)\" } ]\n"
        "}\n\n"
        "Generate 4-6 keywords per category. Focus on relevant, actionable keywords "
        "with realistic search volumes."
    )
