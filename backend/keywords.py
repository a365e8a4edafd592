"""Frequency-ranked keyword candidates from the visible body text."""

import re

from bs4 import BeautifulSoup

from models import KeywordCandidate
from scraper import body_text

MAX_KEYWORDS = 20

# ASCII word boundaries: digits or accented letters glued to a run disqualify it.
_KEYWORD_RE = re.compile(r"\b[a-z]{4,}\b", re.ASCII)


def extract_keywords(doc: BeautifulSoup, limit: int = MAX_KEYWORDS) -> list[KeywordCandidate]:
    words = _KEYWORD_RE.findall(body_text(doc).lower())
    if not words:
        return []

    frequency: dict[str, int] = {}
    for word in words:
        frequency[word] = frequency.get(word, 0) + 1

    # sorted() is stable, so equal counts keep first-seen order
    ranked = sorted(frequency.items(), key=lambda kv: kv[1], reverse=True)[:limit]
    total = len(words)
    return [
        {"keyword": keyword, "density_percent": f"{count / total * 100:.2f}"}
        for keyword, count in ranked
    ]
