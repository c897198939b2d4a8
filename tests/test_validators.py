from __future__ import annotations

from frontend.validators import (
    check_base_url,
    check_date,
    check_language_path,
    check_path_template,
    check_run_at,
)


def test_check_path_template() -> None:
    assert check_path_template(" Daily/{YYYY}-{MM}-{DD}.md ").normalized == "Daily/{YYYY}-{MM}-{DD}.md"
    assert check_path_template("Daily/{YYYY}.txt").error == "path template should end with .md"
    assert check_path_template("../{YYYY}.md").normalized is None


def test_check_run_at_normalizes() -> None:
    assert check_run_at("7:30").normalized == "07:30:00"
    assert check_run_at("noon").error is not None


def test_check_feed_fields() -> None:
    assert check_base_url("https://wol.jw.org/").normalized == "https://wol.jw.org"
    assert check_base_url("ftp://wol.jw.org").error is not None
    assert check_language_path("/r1/lp-e/").normalized == "r1/lp-e"
    assert check_language_path("").error == "language_path is required"


def test_check_date() -> None:
    assert check_date("2024-05-01").normalized == "2024-05-01"
    assert check_date("2024-02-30").error == "date must be YYYY-MM-DD"
