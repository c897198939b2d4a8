"""Static configuration for dailytext.

All user-editable settings (vault, note template, feed, auto-fetch, logging)
live in a single JSON file for quick edits without touching Python. Missing
keys fall back to DEFAULT_CONFIG, so a partial file is fine.
"""

import copy
import json
import os

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

# Where to store the SQLite database (history and scheduler marker).
DB_PATH = os.path.join(os.path.dirname(__file__), "dailytext.db")

# config.json sits at the project root unless DAILYTEXT_CONFIG points elsewhere.
CONFIG_PATH = os.getenv("DAILYTEXT_CONFIG") or os.path.join(PROJECT_ROOT, "config.json")

DEFAULT_CONFIG: dict = {
    "vault": {"path": ""},
    "note": {
        "path_template": "Daily/Daily Text - {YYYY}-{MM}-{DD}.md",
        "append": True,
        "format": "callout",
        "heading": "Daily Text",
    },
    "feed": {
        "base_url": "https://wol.jw.org",
        "language_path": "r1/lp-e",
        "timeout_seconds": 30,
    },
    "auto_fetch": {
        "enabled": False,
        "run_at": "00:00:05",
        "catch_up_on_start": False,
    },
    "logging": {
        "enabled": True,
        "level": "INFO",
        "console": True,
        "file": {
            "enabled": False,
            "path": "logs/dailytext.log",
            "max_bytes": 5 * 1024 * 1024,
            "backup_count": 5,
        },
        "redact": {"enabled": False, "patterns": []},
    },
}


def merge_defaults(raw: dict) -> dict:
    """Overlay a user config on DEFAULT_CONFIG, section by section."""

    merged = copy.deepcopy(DEFAULT_CONFIG)
    for section, value in raw.items():
        default = merged.get(section)
        if isinstance(default, dict) and isinstance(value, dict):
            for key, item in value.items():
                # Nested dicts (logging.file, logging.redact) merge one level deeper.
                if isinstance(default.get(key), dict) and isinstance(item, dict):
                    default[key] = {**default[key], **item}
                else:
                    default[key] = item
        else:
            merged[section] = value
    return merged


def load_config(path: str = CONFIG_PATH) -> dict:
    """Load config.json merged over the defaults."""

    if not os.path.exists(path):
        return copy.deepcopy(DEFAULT_CONFIG)

    with open(path, "r", encoding="utf-8") as handle:
        raw = json.load(handle)
    if not isinstance(raw, dict):
        raise ValueError(f"Config root must be an object: {path}")
    return merge_defaults(raw)


_CONFIG = load_config()

# Expose the merged config for modules that need structured access.
# client.py builds the note, feed and schedule objects from it.
CONFIG = _CONFIG

# Logging configuration.
LOGGING = _CONFIG["logging"]
