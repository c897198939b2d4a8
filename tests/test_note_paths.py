from __future__ import annotations

from datetime import date, time

import pytest

from core.note_paths import (
    format_path_template,
    parse_date,
    parse_time_of_day,
    validate_path_template,
)


def test_format_path_template_zero_pads() -> None:
    template = "Daily/Daily Text - {YYYY}-{MM}-{DD}.md"
    assert format_path_template(template, date(2024, 5, 1)) == "Daily/Daily Text - 2024-05-01.md"
    assert format_path_template("{YYYY}/{MM}/{DD}.md", date(987, 12, 9)) == "0987/12/09.md"


def test_validate_path_template() -> None:
    assert validate_path_template("Daily/{YYYY}-{MM}-{DD}.md") is None
    assert validate_path_template("") == "path template is required"
    assert validate_path_template("Daily/{Week}.md") == "unknown token(s): {Week}"
    assert validate_path_template("/abs/{YYYY}.md") is not None
    assert validate_path_template("C:/notes/{YYYY}.md") is not None
    assert validate_path_template("../outside/{YYYY}.md") is not None
    assert validate_path_template("Daily/") is not None


def test_parse_date() -> None:
    assert parse_date(" 2024-05-01 ") == date(2024, 5, 1)
    with pytest.raises(ValueError):
        parse_date("2024/05/01")


def test_parse_time_of_day() -> None:
    assert parse_time_of_day("00:00:05") == time(0, 0, 5)
    assert parse_time_of_day("7:30") == time(7, 30)
    with pytest.raises(ValueError):
        parse_time_of_day("25:00")
