"""Shared constants for the Textual UI."""

from __future__ import annotations

from pathlib import Path

import settings

ACCENT = "#5B8DD6"
PROJECT_ROOT = Path(settings.PROJECT_ROOT)
CONFIG_PATH = Path(settings.CONFIG_PATH)
DB_PATH = Path(settings.DB_PATH)
