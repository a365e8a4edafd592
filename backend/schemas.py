"""Pydantic schemas for API request/response.

Responses are emitted with camelCase keys; internal reports use snake_case.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AuditRequest(BaseModel):
    """Request body for POST /audit."""

    url: str

    @field_validator("url", mode="before")
    @classmethod
    def normalize_url(cls, value: object) -> str:
        return str(value or "").strip()


class MetaTagsOut(CamelModel):
    has_title: bool
    title_length: int
    has_description: bool
    description_length: int
    has_keywords: bool
    has_open_graph: bool


class HeadingsOut(CamelModel):
    h1_count: int
    h2_count: int
    structure: list[str]


class ImagesOut(CamelModel):
    total: int
    with_alt: int
    without_alt: int


class LinksOut(CamelModel):
    internal: int
    external: int


class MobileOut(CamelModel):
    responsive: bool
    viewport: bool


class PerformanceOut(CamelModel):
    load_time_ms: int
    page_size_bytes: int
    resource_tag_count: int


class TechnicalSEOOut(CamelModel):
    meta_tags: MetaTagsOut
    headings: HeadingsOut
    images: ImagesOut
    links: LinksOut
    mobile: MobileOut
    performance: PerformanceOut


class ContentAnalysisOut(CamelModel):
    word_count: int
    readability_score: int = Field(ge=0, le=100)
    quality_bucket: Literal["good", "needs_improvement"]


class ScoresOut(CamelModel):
    overall: int = Field(ge=0, le=100)
    technical: int = Field(ge=0, le=100)
    content: int = Field(ge=0, le=100)
    mobile: int = Field(ge=0, le=100)
    speed: int = Field(ge=0, le=100)
    accessibility: int = Field(ge=0, le=100)


class KeywordOut(CamelModel):
    keyword: str
    density_percent: str


class RecommendationOut(CamelModel):
    category: str
    priority: Literal["critical", "high", "medium", "low"]
    issue: str
    solution: str
    impact: str


class AuditReportResponse(CamelModel):
    """Full audit report returned by POST /audit."""

    url: str
    scores: ScoresOut
    technical_seo: TechnicalSEOOut = Field(alias="technicalSEO")
    content_analysis: ContentAnalysisOut
    keywords: list[KeywordOut]
    recommendations: list[RecommendationOut]
    ai_insights: dict[str, Any] = Field(default_factory=dict)
