"""Helpers for working with note path templates, dates and times of day."""

from __future__ import annotations

import re
from datetime import date, datetime, time
from pathlib import PurePosixPath
from typing import Optional

DATE_TOKENS = ("{YYYY}", "{MM}", "{DD}")
DATE_FORMAT = "%Y-%m-%d"

_TOKEN_RE = re.compile(r"\{[A-Za-z]+\}")


def format_path_template(template: str, target_date: date) -> str:
    """Substitute {YYYY}, {MM} and {DD} with the zero-padded date parts."""

    return (
        template.replace("{YYYY}", f"{target_date.year:04d}")
        .replace("{MM}", f"{target_date.month:02d}")
        .replace("{DD}", f"{target_date.day:02d}")
    )


def validate_path_template(template: str) -> Optional[str]:
    """Return an error message for an unusable template, or None."""

    stripped = template.strip()
    if not stripped:
        return "path template is required"
    unknown = [token for token in _TOKEN_RE.findall(stripped) if token not in DATE_TOKENS]
    if unknown:
        return f"unknown token(s): {', '.join(sorted(set(unknown)))}"
    path = PurePosixPath(stripped.replace("\\", "/"))
    if path.is_absolute() or re.match(r"^[A-Za-z]:", stripped):
        return "path template must be relative to the vault"
    if ".." in path.parts:
        return "path template must not contain '..'"
    if stripped.endswith("/"):
        return "path template must name a file"
    return None


def parse_date(value: str) -> date:
    """Parse a YYYY-MM-DD string."""

    try:
        return datetime.strptime(value.strip(), DATE_FORMAT).date()
    except ValueError as exc:
        raise ValueError(f"Invalid date (expected YYYY-MM-DD): {value!r}") from exc


def parse_time_of_day(value: str) -> time:
    """Parse HH:MM or HH:MM:SS."""

    stripped = value.strip()
    for fmt in ("%H:%M:%S", "%H:%M"):
        try:
            return datetime.strptime(stripped, fmt).time()
        except ValueError:
            continue
    raise ValueError(f"Invalid time (expected HH:MM[:SS]): {value!r}")
