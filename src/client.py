"""Factories wiring adapters into the core processor and scheduler.

Everything is built from a config dict (settings.CONFIG by default) so the
config panel can run a fetch with the values currently on screen.
"""

from __future__ import annotations

import logging
import os
from functools import partial
from typing import Optional

from dotenv import load_dotenv

import settings
from adapters.markdown_formatting import FORMAT_MODES, format_daily_text
from adapters.sqlite_storage import SQLiteStorage
from adapters.vault_writer import VaultWriter
from adapters.wol_feed import DEFAULT_USER_AGENT, WolFeedClient
from core.config import NoteConfig, ScheduleConfig
from core.note_paths import parse_time_of_day, validate_path_template
from core.processor import DailyTextProcessor
from core.scheduler import DailyScheduler

LOGGER = logging.getLogger(__name__)


def note_config_from(config: dict) -> NoteConfig:
    """Build and validate the NoteConfig section."""

    note = config.get("note", {})
    template = str(note.get("path_template", "")).strip()
    error = validate_path_template(template)
    if error:
        raise RuntimeError(f"note.path_template is invalid: {error}")
    mode = note.get("format", "callout")
    if mode not in FORMAT_MODES:
        raise RuntimeError(f"note.format must be one of {', '.join(FORMAT_MODES)}")
    return NoteConfig(
        path_template=template,
        append=bool(note.get("append", True)),
        format=mode,
        heading=str(note.get("heading") or "Daily Text"),
    )


def schedule_config_from(config: dict) -> ScheduleConfig:
    auto_fetch = config.get("auto_fetch", {})
    try:
        run_at = parse_time_of_day(str(auto_fetch.get("run_at", "00:00:05")))
    except ValueError as exc:
        raise RuntimeError(f"auto_fetch.run_at is invalid: {exc}") from exc
    return ScheduleConfig(
        enabled=bool(auto_fetch.get("enabled", False)),
        run_at=run_at,
        catch_up_on_start=bool(auto_fetch.get("catch_up_on_start", False)),
    )


def build_feed(config: dict) -> WolFeedClient:
    """Create the feed client; DAILYTEXT_USER_AGENT may override the agent."""

    load_dotenv()
    feed = config.get("feed", {})
    return WolFeedClient(
        base_url=feed.get("base_url", "https://wol.jw.org"),
        language_path=feed.get("language_path", "r1/lp-e"),
        timeout=float(feed.get("timeout_seconds", 30)),
        user_agent=os.getenv("DAILYTEXT_USER_AGENT", DEFAULT_USER_AGENT),
    )


def build_writer(config: dict) -> VaultWriter:
    """Create the vault writer from DAILYTEXT_VAULT_PATH or vault.path."""

    load_dotenv()
    vault_path = os.getenv("DAILYTEXT_VAULT_PATH") or config.get("vault", {}).get("path", "")

    # There is no default vault location.
    if not vault_path:
        raise RuntimeError("Missing vault path: set vault.path in config.json or DAILYTEXT_VAULT_PATH")

    vault_path = os.path.expanduser(vault_path)
    if not os.path.isabs(vault_path):
        vault_path = os.path.join(settings.PROJECT_ROOT, vault_path)
    return VaultWriter(vault_path)


def build_storage(db_path: str = settings.DB_PATH) -> SQLiteStorage:
    storage = SQLiteStorage(db_path)
    storage.init_db()
    return storage


def build_processor(
    config: Optional[dict] = None,
    storage: Optional[SQLiteStorage] = None,
) -> DailyTextProcessor:
    """Wire feed, vault, storage and formatter into a processor."""

    config = settings.CONFIG if config is None else config
    note_config = note_config_from(config)
    writer = build_writer(config)
    LOGGER.info("Writing notes into vault %s", writer.root)
    return DailyTextProcessor(
        feed=build_feed(config),
        writer=writer,
        storage=storage or build_storage(),
        note_config=note_config,
        formatter=partial(format_daily_text, mode=note_config.format, heading=note_config.heading),
    )


def build_scheduler(
    config: Optional[dict] = None,
    storage: Optional[SQLiteStorage] = None,
) -> DailyScheduler:
    config = settings.CONFIG if config is None else config
    storage = storage or build_storage()
    return DailyScheduler(
        processor=build_processor(config, storage),
        storage=storage,
        schedule=schedule_config_from(config),
    )
