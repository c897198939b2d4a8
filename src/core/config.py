"""Core configuration dataclasses.

We keep config parsing outside the core, but these dataclasses define the
shape the core expects so adapters and app layers can build safely.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import time


@dataclass(frozen=True)
class NoteConfig:
    """Where and how a daily text is written into the vault."""

    path_template: str
    append: bool
    format: str = "callout"
    heading: str = "Daily Text"


@dataclass(frozen=True)
class ScheduleConfig:
    """Daily auto-fetch settings consumed by the scheduler."""

    enabled: bool
    run_at: time = time(0, 0, 5)
    catch_up_on_start: bool = False
