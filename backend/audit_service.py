"""Audit orchestration: fetch -> parse -> analyze -> score -> recommend -> insight.

Only fetching and parsing can fail an audit. The insight step is best-effort:
its failure is logged and leaves `ai_insights` empty. Nothing is cached or
retried, and every call builds a brand-new report.
"""

import logging
from typing import Any, Protocol

import requests
from bs4 import BeautifulSoup

from analyzers import (
    analyze_accessibility,
    analyze_content,
    analyze_mobile,
    analyze_performance,
    analyze_technical,
)
from errors import AuditError, AuditStage
from keywords import extract_keywords
from models import AuditReport, FetchResult
from recommendations import generate_recommendations
from scoring import build_score_set
from scraper import body_text, fetch_page, meta_content, page_title, parse_html

logger = logging.getLogger(__name__)

INSIGHT_TEXT_CHARS = 3000


class InsightProvider(Protocol):
    def analyze_seo(
        self,
        url: str,
        page_content: str,
        current_title: str | None = None,
        current_meta: str | None = None,
    ) -> Any: ...


def _enter(stage: AuditStage, url: str) -> None:
    logger.debug("Audit %s -> %s", url, stage.value)


def analyze_document(url: str, doc: BeautifulSoup, fetched: FetchResult) -> AuditReport:
    """Deterministic part of the audit; `ai_insights` is left empty."""
    _enter(AuditStage.ANALYZING, url)
    technical = analyze_technical(doc)
    content = analyze_content(doc)
    mobile = analyze_mobile(doc)
    performance = analyze_performance(doc, fetched)
    accessibility = analyze_accessibility(doc)

    _enter(AuditStage.SCORING, url)
    scores = build_score_set(technical, content, mobile, performance, accessibility)

    _enter(AuditStage.RECOMMENDING, url)
    recommendations = generate_recommendations(technical, content, mobile, performance)

    return {
        "url": url,
        "scores": scores,
        "technical_seo": {**technical, "mobile": mobile, "performance": performance},
        "content_analysis": content,
        "keywords": extract_keywords(doc),
        "recommendations": recommendations,
        "ai_insights": {},
    }


def build_report(url: str, fetched: FetchResult) -> AuditReport:
    """Parse already-fetched HTML and run the deterministic pipeline on it."""
    _enter(AuditStage.PARSING, url)
    doc = parse_html(fetched["html"])
    return analyze_document(url, doc, fetched)


def collect_insights(insight_service: InsightProvider | None, url: str, doc: BeautifulSoup) -> dict[str, Any]:
    """Ask the insight collaborator for narrative findings; {} on any failure."""
    if insight_service is None:
        return {}

    _enter(AuditStage.INSIGHT, url)
    try:
        result = insight_service.analyze_seo(
            url,
            body_text(doc)[:INSIGHT_TEXT_CHARS],
            page_title(doc),
            meta_content(doc, "description"),
        )
    except Exception as e:
        logger.warning("AI insights not available for %s: %s", url, e)
        return {}

    if not getattr(result, "success", False):
        logger.warning("AI insights not available for %s: %s", url, getattr(result, "error", ""))
        return {}
    return dict(getattr(result, "data", None) or {})


def audit_website(
    url: str,
    insight_service: InsightProvider | None = None,
    session: requests.Session | None = None,
) -> AuditReport:
    """
    Run one full audit of `url`.
    Raises FetchError or ParseError; no partial report is ever returned.
    """
    logger.info("Starting SEO audit for %s", url)
    try:
        _enter(AuditStage.FETCHING, url)
        fetched = fetch_page(url, session=session)

        _enter(AuditStage.PARSING, url)
        doc = parse_html(fetched["html"])
    except AuditError as e:
        logger.warning("SEO audit for %s failed while %s: %s", url, e.stage.value, e.message)
        _enter(AuditStage.FAILED, url)
        raise

    report = analyze_document(url, doc, fetched)
    report["ai_insights"] = collect_insights(insight_service, url, doc)

    _enter(AuditStage.ASSEMBLED, url)
    logger.info(
        "SEO audit for %s finished: overall=%d, %d recommendations",
        url,
        report["scores"]["overall"],
        len(report["recommendations"]),
    )
    return report
