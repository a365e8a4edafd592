"""On-page analyzers: raw metrics extracted from a parsed document.

Each analyzer is a total function over any parsed document, including one
with no images, headings or words; none of them raises.
"""

import re

from bs4 import BeautifulSoup

from models import (
    AccessibilityMetrics,
    ContentMetrics,
    FetchResult,
    MobileMetrics,
    PerformanceMetrics,
    TechnicalMetrics,
)
from scoring import round_half_up
from scraper import body_text, meta_content, page_title

HEADING_EXCERPT_CHARS = 60
GOOD_CONTENT_MIN_WORDS = 300

_SENTENCE_SPLIT = re.compile(r"[.!?]+")
_SILENT_ENDING = re.compile(r"(?:[^laeiouy]es|ed|[^laeiouy]e)$")
_LEADING_Y = re.compile(r"^y")
_VOWEL_GROUP = re.compile(r"[aeiouy]{1,2}")


def analyze_technical(doc: BeautifulSoup) -> TechnicalMetrics:
    title = page_title(doc)
    description = meta_content(doc, "description") or ""
    keywords = meta_content(doc, "keywords") or ""

    structure = [
        f"{el.name}: {el.get_text()[:HEADING_EXCERPT_CHARS]}"
        for el in doc.find_all(["h1", "h2", "h3"])
    ]

    all_images = doc.find_all("img")
    with_alt = sum(1 for img in all_images if img.get("alt") is not None)

    # Only "http..." is external and only "/" or "#" is internal, so "//host"
    # counts as internal. mailto:, bare relative and empty hrefs count nowhere.
    internal_links = 0
    external_links = 0
    for a in doc.find_all("a", href=True):
        href = a["href"] or ""
        if href.startswith("http"):
            external_links += 1
        elif href.startswith(("/", "#")):
            internal_links += 1

    return {
        "meta_tags": {
            "has_title": bool(title.strip()),
            "title_length": len(title),
            "has_description": bool(description.strip()),
            "description_length": len(description),
            "has_keywords": bool(keywords.strip()),
            "has_open_graph": bool(doc.select('meta[property^="og:"]')),
        },
        "headings": {
            "h1_count": len(doc.find_all("h1")),
            "h2_count": len(doc.find_all("h2")),
            "structure": structure,
        },
        "images": {
            "total": len(all_images),
            "with_alt": with_alt,
            "without_alt": len(all_images) - with_alt,
        },
        "links": {"internal": internal_links, "external": external_links},
    }


def count_syllables(word: str) -> int:
    """Rough English syllable count used by the readability estimate."""
    word = word.lower()
    if len(word) <= 3:
        return 1
    word = _SILENT_ENDING.sub("", word, count=1)
    word = _LEADING_Y.sub("", word, count=1)
    return len(_VOWEL_GROUP.findall(word)) or 1


def readability_score(text: str) -> int:
    """
    Approximate Flesch Reading Ease of `text`, clamped to 0-100.

    Sentences are the segments of a plain split on runs of . ! ?, so text
    ending in punctuation contributes a trailing empty segment. Text with no
    words scores 0.
    """
    words = text.split()
    if not words:
        return 0
    sentences = len(_SENTENCE_SPLIT.split(text))
    syllables = sum(count_syllables(word) for word in words)
    raw = 206.835 - 1.015 * (len(words) / sentences) - 84.6 * (syllables / len(words))
    return round_half_up(max(0.0, min(100.0, raw)))


def analyze_content(doc: BeautifulSoup) -> ContentMetrics:
    text = body_text(doc)
    word_count = len(text.split())
    return {
        "word_count": word_count,
        "readability_score": readability_score(text),
        "quality_bucket": "good" if word_count > GOOD_CONTENT_MIN_WORDS else "needs_improvement",
    }


def analyze_mobile(doc: BeautifulSoup) -> MobileMetrics:
    viewport = doc.select_one('meta[name="viewport"]')
    content = (viewport.get("content") or "") if viewport is not None else ""
    return {
        "responsive": viewport is not None,
        "viewport": "width=device-width" in content,
    }


def analyze_performance(doc: BeautifulSoup, fetched: FetchResult) -> PerformanceMetrics:
    return {
        "load_time_ms": fetched["load_time_ms"],
        "page_size_bytes": len(fetched["html"].encode("utf-8")),
        "resource_tag_count": len(doc.find_all(["script", "link", "img"])),
    }


def analyze_accessibility(doc: BeautifulSoup) -> AccessibilityMetrics:
    return {
        "has_lang": doc.select_one("html[lang]") is not None,
        "images_without_alt": len(doc.select("img:not([alt])")),
        "anchors_without_href": len(doc.select("a:not([href])")),
        "buttons_without_aria_label": len(doc.select("button:not([aria-label])")),
    }
