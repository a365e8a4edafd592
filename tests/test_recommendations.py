import pytest

from recommendations import generate_recommendations


def _metrics(has_title=True, has_description=True, h1_count=1, word_count=500, responsive=True, load_time_ms=500):
    technical = {
        "meta_tags": {
            "has_title": has_title,
            "title_length": 40 if has_title else 0,
            "has_description": has_description,
            "description_length": 130 if has_description else 0,
            "has_keywords": False,
            "has_open_graph": False,
        },
        "headings": {"h1_count": h1_count, "h2_count": 0, "structure": []},
        "images": {"total": 0, "with_alt": 0, "without_alt": 0},
        "links": {"internal": 0, "external": 0},
    }
    content = {"word_count": word_count, "readability_score": 50, "quality_bucket": "good"}
    mobile = {"responsive": responsive, "viewport": responsive}
    performance = {"load_time_ms": load_time_ms, "page_size_bytes": 1000, "resource_tag_count": 0}
    return technical, content, mobile, performance


def test_healthy_page_has_no_recommendations():
    assert generate_recommendations(*_metrics()) == []


def test_all_rules_fire_in_fixed_order():
    recommendations = generate_recommendations(
        *_metrics(has_title=False, has_description=False, h1_count=0, word_count=10, responsive=False, load_time_ms=4000)
    )

    assert [(r["category"], r["priority"], r["issue"]) for r in recommendations] == [
        ("Technical SEO", "critical", "Missing title tag"),
        ("Technical SEO", "high", "Missing meta description"),
        ("Technical SEO", "high", "Missing H1 heading"),
        ("Content Quality", "medium", "Thin content"),
        ("Mobile", "critical", "Not mobile-friendly"),
        ("Performance", "high", "Slow page load time"),
    ]
    assert all(r["solution"] and r["impact"] for r in recommendations)


@pytest.mark.parametrize("h1_count, word", [(0, "Missing"), (2, "Multiple"), (5, "Multiple")])
def test_h1_recommendation_distinguishes_missing_and_multiple(h1_count, word):
    recommendations = generate_recommendations(*_metrics(h1_count=h1_count))

    h1_entries = [r for r in recommendations if "H1" in r["issue"]]
    assert len(h1_entries) == 1
    assert h1_entries[0]["issue"] == f"{word} H1 heading"
    assert h1_entries[0]["priority"] == "high"


def test_thresholds_are_strict():
    assert generate_recommendations(*_metrics(word_count=300, load_time_ms=3000)) == []
    issues = [r["issue"] for r in generate_recommendations(*_metrics(word_count=299, load_time_ms=3001))]
    assert issues == ["Thin content", "Slow page load time"]


def test_viewport_without_device_width_is_not_flagged():
    technical, content, mobile, performance = _metrics()
    mobile = {"responsive": True, "viewport": False}
    assert generate_recommendations(technical, content, mobile, performance) == []
