from __future__ import annotations

from core.segment_rules import (
    Segment,
    contains_iso_date,
    is_link_only,
    is_month_header,
    is_numeric_date,
    is_too_short_or_marked,
    rejection_reason,
    starts_with_book_number,
    starts_with_dash,
)


def _segment(raw: str) -> Segment:
    return Segment.from_html(raw)


def test_weekday_and_month_headers_are_rejected() -> None:
    assert rejection_reason(_segment("Wednesday, May 1")) == "weekday_header"
    assert rejection_reason(_segment("May 1")) == "month_header"
    assert is_month_header(_segment("1 May"))
    assert is_month_header(_segment("December"))


def test_verse_starting_with_may_is_kept() -> None:
    segment = _segment("May Jehovah bless you and keep you safe always.")
    assert not is_month_header(segment)
    assert rejection_reason(segment) is None


def test_dates_links_and_references_are_rejected() -> None:
    assert is_numeric_date(_segment("2024/05/01"))
    assert contains_iso_date(_segment("Posted 2024-05-01 for everyone to read"))
    assert is_link_only(_segment('<a href="/x">Read more</a>.'))
    assert not is_link_only(_segment('Read the <a href="/x">note</a> for details'))
    assert starts_with_dash(_segment("—John 3:16"))
    assert starts_with_book_number(_segment("1 Corinthians 13 tells us about love"))


def test_short_or_marked_segments_are_rejected() -> None:
    assert is_too_short_or_marked(_segment("Too short."))
    assert is_too_short_or_marked(_segment("Love is patient and kind, always.*"))
    assert is_too_short_or_marked(_segment("Love is patient and kind to everyone<sup>a</sup>"))


def test_too_few_words() -> None:
    assert rejection_reason(_segment("Supercalifragilistic expialidocious words")) == "too_few_words"
