"""Shared note formatting helpers.

Keeping formatting here prevents drift between the CLI, the scheduler and
the config panel, so every note block looks the same.
"""

from __future__ import annotations

from core.models import DailyTextRecord

FORMAT_MODES = ("callout", "classic")
SEPARATOR = "---"


def _format_callout(record: DailyTextRecord, heading: str) -> str:
    """Obsidian callout layout: citation as the callout title, quote inside."""

    lines = [f"## {heading} — {record.date}".rstrip(" —"), ""]

    if record.citation:
        lines.append(f"> [!quote] {record.citation}")
        if record.scripture:
            lines.append(f"> {record.scripture}")
        lines.append("")
    elif record.scripture:
        lines.extend([f"> {record.scripture}", ""])

    if record.commentary:
        lines.extend([record.commentary, ""])

    lines.extend([SEPARATOR, "", ""])
    return "\n".join(lines)


def _format_classic(record: DailyTextRecord, heading: str) -> str:
    """Plain layout with bold labels."""

    lines = [f"# {heading} — {record.date}".rstrip(" —"), ""]
    if record.scripture:
        lines.extend([f"**Scripture:** {record.scripture}", ""])
    if record.citation:
        lines.extend([f"**Citation:** {record.citation}", ""])
    if record.commentary:
        lines.extend([record.commentary, ""])
    lines.extend([SEPARATOR, "", ""])
    return "\n".join(lines)


def format_daily_text(
    record: DailyTextRecord,
    mode: str = "callout",
    heading: str = "Daily Text",
) -> str:
    """Return the note block for record in the requested mode."""

    if mode == "callout":
        return _format_callout(record, heading)
    if mode == "classic":
        return _format_classic(record, heading)
    raise ValueError(f"Unsupported note format: {mode}")
