"""
Optional AI insight step for SEO audits, backed by Claude.

Claude API key must be defined in a .env file in the backend root:

ANTHROPIC_API_KEY=your_real_key_here

The service is built explicitly (see create_insight_service) and handed to
the audit orchestrator. analyze_seo never raises; failures come back as an
unsuccessful InsightResult.
"""

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any

from anthropic import Anthropic

from config import ANTHROPIC_API_KEY, CLAUDE_MAX_TOKENS, CLAUDE_MODEL, CLAUDE_TEMPERATURE

logger = logging.getLogger(__name__)

PROMPT_CONTENT_CHARS = 2000

SYSTEM_MESSAGE = """You are an SEO expert who analyzes websites and provides actionable recommendations.
Return ONLY valid raw JSON.
Do not include markdown, code fences, or text outside JSON."""

USER_TEMPLATE = """Analyze this webpage for SEO and provide actionable recommendations:

URL: {url}
{title_line}
{meta_line}

Page Content Preview:
{content}...

Provide:
1. Overall SEO score (0-100)
2. Title tag recommendations
3. Meta description recommendations
4. Key issues found
5. Quick wins for improvement
6. Suggested keywords to target

Format as JSON with keys: score, titleSuggestions, metaSuggestions, issues, quickWins, keywords"""

LIST_KEYS = ("titleSuggestions", "metaSuggestions", "issues", "quickWins", "keywords")


@dataclass
class InsightResult:
    """Outcome of one insight call: data on success, an error message otherwise."""

    success: bool
    data: dict[str, Any] = field(default_factory=dict)
    error: str = ""

    @classmethod
    def failed(cls, error: str) -> "InsightResult":
        return cls(success=False, error=error)


def _extract_json(text: str) -> dict | None:
    if not text:
        return None

    text = text.strip()

    # Remove markdown fences
    if text.startswith("```"):
        text = text.replace("```json", "").replace("```", "").strip()

    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1:
        return None

    json_str = (
        text[start : end + 1]
        .replace("“", '"')
        .replace("”", '"')
        .replace("‘", "'")
        .replace("’", "'")
    )

    repaired = re.sub(r",\s*([}\]])", r"\1", json_str)

    for candidate in (json_str, repaired):
        try:
            parsed = json.loads(candidate)
        except ValueError:
            continue
        return parsed if isinstance(parsed, dict) else None
    return None


def _extract_response_text(response: object) -> str:
    content = ""
    for block in getattr(response, "content", []) or []:
        text = getattr(block, "text", None)
        if text:
            content += text
    return content.strip()


def _normalize_insights(raw: dict) -> dict[str, Any]:
    """Coerce a parsed reply into the six documented keys."""
    score = raw.get("score")
    if isinstance(score, bool) or not isinstance(score, (int, float)):
        score = 0
    normalized: dict[str, Any] = {"score": min(100, max(0, score))}

    for key in LIST_KEYS:
        value = raw.get(key)
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, list):
            value = []
        normalized[key] = [str(item).strip() for item in value if item is not None and str(item).strip()]
    return normalized


def build_user_message(
    url: str, page_content: str, current_title: str | None = None, current_meta: str | None = None
) -> str:
    return USER_TEMPLATE.format(
        url=url,
        title_line=f"Current Title: {current_title}" if current_title else "",
        meta_line=f"Current Meta Description: {current_meta}" if current_meta else "",
        content=(page_content or "")[:PROMPT_CONTENT_CHARS],
    )


class SEOInsightService:
    """Narrative SEO insights for one page, via an injected Anthropic client."""

    def __init__(
        self,
        client: Anthropic,
        model: str = CLAUDE_MODEL,
        max_tokens: int = CLAUDE_MAX_TOKENS,
        temperature: float = CLAUDE_TEMPERATURE,
    ) -> None:
        self.client = client
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature

    def analyze_seo(
        self,
        url: str,
        page_content: str,
        current_title: str | None = None,
        current_meta: str | None = None,
    ) -> InsightResult:
        user_message = build_user_message(url, page_content, current_title, current_meta)
        try:
            response = self.client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                system=SYSTEM_MESSAGE,
                messages=[{"role": "user", "content": user_message}],
                temperature=self.temperature,
            )
        except Exception as e:
            logger.warning("Claude request failed for %s: %s", url, e)
            return InsightResult.failed(str(e))

        if getattr(response, "stop_reason", None) == "max_tokens":
            logger.warning("Claude output hit max_tokens for model=%s", self.model)

        content = _extract_response_text(response)
        if not content:
            return InsightResult.failed("Empty Claude response content.")

        parsed = _extract_json(content)
        if parsed is None:
            logger.debug("Unparseable Claude response: %s", content)
            return InsightResult.failed("Claude response was not valid JSON.")

        return InsightResult(success=True, data=_normalize_insights(parsed))


def create_insight_service(api_key: str | None = None) -> SEOInsightService | None:
    """Build the insight service from configuration; None when no API key is set."""
    key = (api_key if api_key is not None else ANTHROPIC_API_KEY).strip()
    if not key:
        logger.info("ANTHROPIC_API_KEY not set; AI insights disabled.")
        return None
    return SEOInsightService(Anthropic(api_key=key))
