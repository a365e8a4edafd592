"""Data models and types used across the audit engine.

Every structure here is built fresh for one audit and never mutated after
it is returned. API (camelCase) schemas live in schemas.py.
"""

from typing import Any, Literal, TypedDict

Priority = Literal["critical", "high", "medium", "low"]
QualityBucket = Literal["good", "needs_improvement"]


class FetchResult(TypedDict):
    """Raw page body plus wall-clock retrieval latency."""

    html: str
    load_time_ms: int


class MetaTags(TypedDict):
    has_title: bool
    title_length: int
    has_description: bool
    description_length: int
    has_keywords: bool
    has_open_graph: bool


class Headings(TypedDict):
    h1_count: int
    h2_count: int
    structure: list[str]


class Images(TypedDict):
    total: int
    with_alt: int
    without_alt: int


class Links(TypedDict):
    internal: int
    external: int


class TechnicalMetrics(TypedDict):
    meta_tags: MetaTags
    headings: Headings
    images: Images
    links: Links


class ContentMetrics(TypedDict):
    word_count: int
    readability_score: int
    quality_bucket: QualityBucket


class MobileMetrics(TypedDict):
    responsive: bool
    viewport: bool


class PerformanceMetrics(TypedDict):
    load_time_ms: int
    page_size_bytes: int
    resource_tag_count: int


class AccessibilityMetrics(TypedDict):
    has_lang: bool
    images_without_alt: int
    anchors_without_href: int
    buttons_without_aria_label: int


class TechnicalSEO(TechnicalMetrics):
    """Technical metrics as reported, with mobile and performance folded in."""

    mobile: MobileMetrics
    performance: PerformanceMetrics


class ScoreSet(TypedDict):
    overall: int
    technical: int
    content: int
    mobile: int
    speed: int
    accessibility: int


class Recommendation(TypedDict):
    category: str
    priority: Priority
    issue: str
    solution: str
    impact: str


class KeywordCandidate(TypedDict):
    keyword: str
    density_percent: str


class AuditReport(TypedDict):
    """Aggregate result of one audit."""

    url: str
    scores: ScoreSet
    technical_seo: TechnicalSEO
    content_analysis: ContentMetrics
    keywords: list[KeywordCandidate]
    recommendations: list[Recommendation]
    ai_insights: dict[str, Any]
