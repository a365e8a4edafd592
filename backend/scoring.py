"""Rule-based sub-scores and the weighted overall score.

All functions are pure and deterministic. Each sub-score is clamped to
[0, 100]; the overall score is their fixed-weight blend.
"""

import math

from models import (
    AccessibilityMetrics,
    ContentMetrics,
    MobileMetrics,
    PerformanceMetrics,
    ScoreSet,
    TechnicalMetrics,
)

# Integer percentages so the blend can be rounded exactly.
CATEGORY_WEIGHTS = {
    "technical": 30,
    "content": 25,
    "mobile": 20,
    "speed": 15,
    "accessibility": 10,
}

# (threshold_ms, penalty): first matching bracket wins.
LOAD_TIME_PENALTIES = [(3000, 30), (2000, 15), (1000, 5)]
# (threshold_bytes, penalty): first matching bracket wins.
PAGE_SIZE_PENALTIES = [(3_000_000, 20), (1_500_000, 10)]


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards +infinity."""
    return int(math.floor(value + 0.5))


def clamp(value: int | float, low: int = 0, high: int = 100) -> int:
    return int(max(low, min(high, value)))


def score_technical(technical: TechnicalMetrics) -> int:
    meta = technical["meta_tags"]
    headings = technical["headings"]
    images = technical["images"]

    score = 0
    if meta["has_title"]:
        score += 20
    if 30 <= meta["title_length"] <= 60:
        score += 10
    if meta["has_description"]:
        score += 20
    if 120 <= meta["description_length"] <= 160:
        score += 10
    if meta["has_open_graph"]:
        score += 10
    if headings["h1_count"] == 1:
        score += 15
    if headings["h2_count"] > 0:
        score += 10
    if images["total"] > 0 and images["with_alt"] / images["total"] > 0.8:
        score += 5

    return clamp(score)


def score_content(content: ContentMetrics) -> int:
    word_count = content["word_count"]
    readability = content["readability_score"]

    if word_count >= 300:
        score = 40
    elif word_count >= 200:
        score = 25
    else:
        score = 10

    if readability >= 60:
        score += 30
    elif readability >= 40:
        score += 20
    else:
        score += 10

    # base content structure score
    score += 30
    return clamp(score)


def score_mobile(mobile: MobileMetrics) -> int:
    return 100 if mobile["responsive"] and mobile["viewport"] else 50


def score_speed(performance: PerformanceMetrics) -> int:
    score = 100
    for threshold, penalty in LOAD_TIME_PENALTIES:
        if performance["load_time_ms"] > threshold:
            score -= penalty
            break
    for threshold, penalty in PAGE_SIZE_PENALTIES:
        if performance["page_size_bytes"] > threshold:
            score -= penalty
            break
    return clamp(score)


def score_accessibility(accessibility: AccessibilityMetrics) -> int:
    score = 100
    if not accessibility["has_lang"]:
        score -= 20
    if accessibility["images_without_alt"] > 0:
        score -= 15
    if accessibility["anchors_without_href"] > 0:
        score -= 10
    if accessibility["buttons_without_aria_label"] > 3:
        score -= 10
    return clamp(score)


def score_overall(
    technical: int, content: int, mobile: int, speed: int, accessibility: int
) -> int:
    """Weighted blend of the five sub-scores, rounded half up."""
    parts = {
        "technical": clamp(technical),
        "content": clamp(content),
        "mobile": clamp(mobile),
        "speed": clamp(speed),
        "accessibility": clamp(accessibility),
    }
    weighted = sum(parts[name] * weight for name, weight in CATEGORY_WEIGHTS.items())
    return (weighted + 50) // 100


def build_score_set(
    technical: TechnicalMetrics,
    content: ContentMetrics,
    mobile: MobileMetrics,
    performance: PerformanceMetrics,
    accessibility: AccessibilityMetrics,
) -> ScoreSet:
    scores = {
        "technical": score_technical(technical),
        "content": score_content(content),
        "mobile": score_mobile(mobile),
        "speed": score_speed(performance),
        "accessibility": score_accessibility(accessibility),
    }
    return {"overall": score_overall(**scores), **scores}
