"""Validation helpers for config editing."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlparse

from core.note_paths import parse_date, parse_time_of_day, validate_path_template


@dataclass
class FieldCheck:
    normalized: str | None
    error: str | None = None


def check_path_template(raw_value: str) -> FieldCheck:
    value = raw_value.strip()
    error = validate_path_template(value)
    if error:
        return FieldCheck(None, error)
    if not value.lower().endswith(".md"):
        return FieldCheck(None, "path template should end with .md")
    return FieldCheck(value)


def check_run_at(raw_value: str) -> FieldCheck:
    try:
        parsed = parse_time_of_day(raw_value)
    except ValueError:
        return FieldCheck(None, "run_at must be HH:MM or HH:MM:SS")
    return FieldCheck(parsed.strftime("%H:%M:%S"))


def check_base_url(raw_value: str) -> FieldCheck:
    value = raw_value.strip().rstrip("/")
    parsed = urlparse(value)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        return FieldCheck(None, "base_url must be an http(s) URL")
    return FieldCheck(value)


def check_language_path(raw_value: str) -> FieldCheck:
    value = raw_value.strip().strip("/")
    if not value:
        return FieldCheck(None, "language_path is required")
    if " " in value or ".." in value.split("/"):
        return FieldCheck(None, "language_path is invalid")
    return FieldCheck(value)


def check_date(raw_value: str) -> FieldCheck:
    try:
        parsed = parse_date(raw_value)
    except ValueError:
        return FieldCheck(None, "date must be YYYY-MM-DD")
    return FieldCheck(parsed.isoformat())
