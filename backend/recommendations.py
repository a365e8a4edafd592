"""Actionable findings derived from raw metrics (never from scores).

Rules run in a fixed order, so the output order is stable for a given page.
"""

from models import ContentMetrics, MobileMetrics, PerformanceMetrics, Recommendation, TechnicalMetrics

THIN_CONTENT_WORDS = 300
SLOW_LOAD_MS = 3000


def generate_recommendations(
    technical: TechnicalMetrics,
    content: ContentMetrics,
    mobile: MobileMetrics,
    performance: PerformanceMetrics,
) -> list[Recommendation]:
    recommendations: list[Recommendation] = []

    if not technical["meta_tags"]["has_title"]:
        recommendations.append(
            {
                "category": "Technical SEO",
                "priority": "critical",
                "issue": "Missing title tag",
                "solution": "Add a unique, descriptive title tag (50-60 characters)",
                "impact": "High - Essential for search rankings",
            }
        )

    if not technical["meta_tags"]["has_description"]:
        recommendations.append(
            {
                "category": "Technical SEO",
                "priority": "high",
                "issue": "Missing meta description",
                "solution": "Add a compelling meta description (120-160 characters)",
                "impact": "Medium - Improves click-through rate",
            }
        )

    h1_count = technical["headings"]["h1_count"]
    if h1_count != 1:
        recommendations.append(
            {
                "category": "Technical SEO",
                "priority": "high",
                "issue": f"{'Missing' if h1_count == 0 else 'Multiple'} H1 heading",
                "solution": "Use exactly one H1 heading per page",
                "impact": "Medium - Important for content structure",
            }
        )

    if content["word_count"] < THIN_CONTENT_WORDS:
        recommendations.append(
            {
                "category": "Content Quality",
                "priority": "medium",
                "issue": "Thin content",
                "solution": "Expand content to at least 300 words with valuable information",
                "impact": "Medium - More content helps rankings",
            }
        )

    if not mobile["responsive"]:
        recommendations.append(
            {
                "category": "Mobile",
                "priority": "critical",
                "issue": "Not mobile-friendly",
                "solution": "Add viewport meta tag and responsive design",
                "impact": "Critical - Mobile-first indexing",
            }
        )

    if performance["load_time_ms"] > SLOW_LOAD_MS:
        recommendations.append(
            {
                "category": "Performance",
                "priority": "high",
                "issue": "Slow page load time",
                "solution": "Optimize images, minify CSS/JS, enable caching",
                "impact": "High - Affects rankings and user experience",
            }
        )

    return recommendations
