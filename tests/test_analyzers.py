import pytest

from analyzers import (
    analyze_accessibility,
    analyze_content,
    analyze_mobile,
    analyze_performance,
    analyze_technical,
    count_syllables,
    readability_score,
)
from scraper import parse_html


def test_technical_metrics_for_well_formed_page(scenario_a_html):
    technical = analyze_technical(parse_html(scenario_a_html))

    assert technical["meta_tags"] == {
        "has_title": True,
        "title_length": 45,
        "has_description": True,
        "description_length": 140,
        "has_keywords": False,
        "has_open_graph": False,
    }
    assert technical["headings"]["h1_count"] == 1
    assert technical["headings"]["h2_count"] == 2
    assert technical["headings"]["structure"] == ["h1: Durable tools", "h2: Hammers", "h2: Wrenches"]
    assert technical["images"] == {"total": 3, "with_alt": 3, "without_alt": 0}
    assert technical["links"] == {"internal": 1, "external": 1}


def test_title_length_is_raw_and_presence_is_trimmed():
    technical = analyze_technical(parse_html("<html><head><title>   </title></head><body></body></html>"))
    assert technical["meta_tags"]["has_title"] is False
    assert technical["meta_tags"]["title_length"] == 3


def test_keywords_and_open_graph_detection():
    doc = parse_html(
        '<head><meta name="keywords" content="tools, hammers">'
        '<meta property="og:title" content="Acme"></head>'
    )
    meta = analyze_technical(doc)["meta_tags"]
    assert meta["has_keywords"] is True
    assert meta["has_open_graph"] is True


def test_heading_structure_is_in_document_order_and_truncated():
    long_text = "x" * 80
    doc = parse_html(f"<body><h3>Third</h3><h1>{long_text}</h1><h4>skip</h4><h2>Second</h2></body>")

    structure = analyze_technical(doc)["headings"]["structure"]

    assert structure == ["h3: Third", f"h1: {'x' * 60}", "h2: Second"]


def test_alt_attribute_presence_not_content_is_counted():
    doc = parse_html('<body><img src="a"><img src="b" alt=""><img src="c" alt="C"><img src="d"></body>')
    images = analyze_technical(doc)["images"]
    assert images == {"total": 4, "with_alt": 2, "without_alt": 2}
    assert images["with_alt"] + images["without_alt"] == images["total"]


def test_link_classification_by_href_prefix():
    doc = parse_html(
        "<body>"
        '<a href="https://other.com">ext</a>'
        '<a href="http://other.com">ext</a>'
        '<a href="/about">int</a>'
        '<a href="#top">int</a>'
        '<a href="mailto:hi@example.com">mail</a>'
        '<a href="//cdn.example.com/x">proto-relative</a>'
        '<a href="page.html">relative</a>'
        '<a href="">empty</a>'
        "<a>no href</a>"
        "</body>"
    )
    assert analyze_technical(doc)["links"] == {"internal": 3, "external": 2}


def test_technical_metrics_for_empty_document(empty_page_html):
    technical = analyze_technical(parse_html(empty_page_html))
    assert technical["meta_tags"]["has_title"] is False
    assert technical["meta_tags"]["has_description"] is False
    assert technical["headings"] == {"h1_count": 0, "h2_count": 0, "structure": []}
    assert technical["images"] == {"total": 0, "with_alt": 0, "without_alt": 0}


@pytest.mark.parametrize(
    "word, expected",
    [
        ("cat", 1),
        ("the", 1),
        ("cake", 1),
        ("table", 2),
        ("jumped", 1),
        ("yellow", 2),
        ("running", 2),
        ("rhythm", 1),
    ],
)
def test_count_syllables(word, expected):
    assert count_syllables(word) == expected


def test_readability_counts_trailing_empty_sentence():
    # "Hello." -> 1 word, 2 sentence segments, 2 syllables
    # 206.835 - 1.015 * 0.5 - 84.6 * 2 = 37.1275
    assert readability_score("Hello.") == 37


@pytest.mark.parametrize("text", ["a", "Incomprehensibilities", "", "!!!"])
def test_readability_is_clamped(text):
    assert 0 <= readability_score(text) <= 100


def test_readability_extremes():
    assert readability_score("a") == 100
    assert readability_score("Incomprehensibilities") == 0
    assert readability_score("") == 0


def test_content_metrics_for_single_sentence():
    content = analyze_content(parse_html("<html><body><p>Hello.</p></body></html>"))
    assert content == {"word_count": 1, "readability_score": 37, "quality_bucket": "needs_improvement"}


def test_content_metrics_for_empty_body(empty_page_html):
    content = analyze_content(parse_html(empty_page_html))
    assert content["word_count"] == 0
    assert content["readability_score"] == 0


def test_word_count_includes_text_after_closing_body():
    content = analyze_content(parse_html("<html><body><p>one two</p></body><p>three four five</p></html>"))
    assert content["word_count"] == 5


def test_word_count_keeps_punctuation_tokens_and_bucket_threshold():
    words = " ".join(["word"] * 300) + " - !"
    content = analyze_content(parse_html(f"<body><p>{words}</p></body>"))
    assert content["word_count"] == 302
    assert content["quality_bucket"] == "good"

    exactly_300 = analyze_content(parse_html(f"<body><p>{' '.join(['word'] * 300)}</p></body>"))
    assert exactly_300["quality_bucket"] == "needs_improvement"


@pytest.mark.parametrize(
    "head, expected",
    [
        ("", {"responsive": False, "viewport": False}),
        ('<meta name="viewport" content="initial-scale=1">', {"responsive": True, "viewport": False}),
        ('<meta name="viewport">', {"responsive": True, "viewport": False}),
        ('<meta name="viewport" content="Width=Device-Width">', {"responsive": True, "viewport": False}),
        (
            '<meta name="viewport" content="width=device-width, initial-scale=1">',
            {"responsive": True, "viewport": True},
        ),
    ],
)
def test_mobile_metrics(head, expected):
    assert analyze_mobile(parse_html(f"<html><head>{head}</head><body></body></html>")) == expected


def test_performance_metrics_use_utf8_size_and_resource_tags():
    html = '<html><head><link rel="stylesheet" href="a.css"><script src="a.js"></script></head><body><img src="x">é</body></html>'
    performance = analyze_performance(parse_html(html), {"html": html, "load_time_ms": 812})
    assert performance == {
        "load_time_ms": 812,
        "page_size_bytes": len(html) + 1,
        "resource_tag_count": 3,
    }


def test_accessibility_metrics():
    doc = parse_html(
        '<html lang="en"><body><img src="a"><img src="b" alt="">'
        '<a>no href</a><a href="/">home</a>'
        '<button>1</button><button>2</button><button aria-label="close">x</button>'
        "</body></html>"
    )
    assert analyze_accessibility(doc) == {
        "has_lang": True,
        "images_without_alt": 1,
        "anchors_without_href": 1,
        "buttons_without_aria_label": 2,
    }


def test_accessibility_without_lang(empty_page_html):
    assert analyze_accessibility(parse_html(empty_page_html))["has_lang"] is False
