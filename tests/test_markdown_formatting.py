from __future__ import annotations

import pytest

from adapters.markdown_formatting import format_daily_text
from core.models import DailyTextRecord

RECORD = DailyTextRecord(
    date="2024-05-01",
    scripture="In everything let love rule.",
    citation="1 Cor. 13:8.",
    commentary="Love is patient.",
)


def test_callout_layout() -> None:
    assert format_daily_text(RECORD) == (
        "## Daily Text — 2024-05-01\n\n"
        "> [!quote] 1 Cor. 13:8.\n"
        "> In everything let love rule.\n\n"
        "Love is patient.\n\n"
        "---\n\n"
    )


def test_classic_layout() -> None:
    assert format_daily_text(RECORD, mode="classic", heading="JW Daily Text") == (
        "# JW Daily Text — 2024-05-01\n\n"
        "**Scripture:** In everything let love rule.\n\n"
        "**Citation:** 1 Cor. 13:8.\n\n"
        "Love is patient.\n\n"
        "---\n\n"
    )


def test_missing_fields_are_left_out() -> None:
    record = DailyTextRecord(scripture="In everything let love rule.")
    text = format_daily_text(record)
    assert text.startswith("## Daily Text\n")
    assert "[!quote]" not in text
    assert "> In everything let love rule." in text
    assert "**Citation:**" not in format_daily_text(record, mode="classic")


def test_unknown_mode_raises() -> None:
    with pytest.raises(ValueError):
        format_daily_text(RECORD, mode="fancy")
