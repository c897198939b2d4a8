from __future__ import annotations

import pytest

from core.extractor import (
    ExtractionError,
    extract,
    extract_citation,
    extract_commentary,
    extract_scripture,
)

EMBEDDED_HTML = (
    "<header><h2>Wednesday, May 1</h2></header>"
    '<p class="themeScrp"><em>In everything let love rule.—1 Cor. 13:8.</em></p>'
    '<p class="sb">Love moves us to forgive others, as the '
    '<a href="/en/wol/d/r1/lp-e/123">study note</a> explains.</p>'
)

TRADITIONAL_HTML = (
    "<h2>Thursday, May 2</h2>"
    '<p class="themeScrp"><em>God loved the world so much that he gave his only-begotten Son.</em> '
    "<em>John 3:16</em></p>"
    "<p>Jehovah&#39;s love moved him to make the greatest sacrifice of all.</p>"
)


def test_embedded_layout() -> None:
    record = extract(EMBEDDED_HTML, date="2024-05-01")
    assert record.date == "2024-05-01"
    assert record.scripture == "In everything let love rule."
    assert record.citation == "1 Cor. 13:8."
    assert record.commentary == (
        "Love moves us to forgive others, as the "
        "[study note](https://wol.jw.org/en/wol/d/r1/lp-e/123) explains."
    )


def test_traditional_layout() -> None:
    record = extract(TRADITIONAL_HTML)
    assert record.scripture == "God loved the world so much that he gave his only-begotten Son."
    assert record.citation == "John 3:16"
    assert record.commentary == "Jehovah's love moved him to make the greatest sacrifice of all."


def test_date_is_never_read_from_content() -> None:
    assert extract(EMBEDDED_HTML).date == ""


def test_weekday_paragraph_is_never_scripture() -> None:
    html = (
        "<p>Wednesday, May 1 is the day we remember</p>"
        "<p><em>Jehovah is my Shepherd. I will lack nothing.</em></p>"
    )
    assert extract_scripture(html) == "Jehovah is my Shepherd. I will lack nothing."


def test_scripture_falls_back_to_emphasis_spans() -> None:
    html = (
        "<h2>header</h2><p>Friday, May 3</p>"
        "<div><em>Short</em><em>Keep on the watch, for you do not know the day.</em>"
        "<em>Matt. 24:42</em></div>"
    )
    assert extract_scripture(html) == "Keep on the watch, for you do not know the day."
    assert extract_citation(html) == "Matt. 24:42"


def test_citation_falls_back_to_second_span() -> None:
    html = (
        "<p><em>Happy are those conscious of their spiritual need.</em></p>"
        "<p><em>Sermon on the Mount</em></p>"
    )
    assert extract_citation(html) == "Sermon on the Mount"
    assert extract_citation("<p><em>Only one span without a reference</em></p>") == ""


def test_commentary_skips_short_paragraphs() -> None:
    html = (
        "<h2>header</h2><p>Scripture block</p><p>Too short.</p>"
        "<p>This paragraph is long enough to count as commentary.</p>"
    )
    assert extract_commentary(html) == "This paragraph is long enough to count as commentary."


def test_commentary_uses_given_base_url() -> None:
    result = extract_commentary(EMBEDDED_HTML, base_url="https://example.org")
    assert "[study note](https://example.org/en/wol/d/r1/lp-e/123)" in result


def test_empty_and_malformed_input_yield_empty_record() -> None:
    assert extract("").is_empty
    assert extract("<p><em>unclosed").is_empty


def test_extraction_is_deterministic() -> None:
    assert extract(TRADITIONAL_HTML) == extract(TRADITIONAL_HTML)


def test_non_text_input_raises() -> None:
    with pytest.raises(ExtractionError):
        extract(None)  # type: ignore[arg-type]
    assert issubclass(ExtractionError, ValueError)


def test_bare_embedded_span_without_paragraph() -> None:
    html = "<em>In everything let love rule.—1 Cor. 13:8.</em>"
    assert extract_scripture(html) == "In everything let love rule."
    assert extract_citation(html) == "1 Cor. 13:8."


def test_bare_traditional_spans_without_paragraph() -> None:
    html = "<em>For God so loved the world.</em><em>John 3:16</em>"
    assert extract_scripture(html) == "For God so loved the world."
    assert extract_citation(html) == "John 3:16"


def test_emphasis_fallback_splits_embedded_citation() -> None:
    html = (
        "<h2>header</h2><p>Monday, June 3</p>"
        "<div><em>Josh. 1:9</em><em>Be courageous and strong.–Josh. 1:9</em></div>"
    )
    assert extract_scripture(html) == "Be courageous and strong."
    assert extract_citation(html) == "Josh. 1:9"
