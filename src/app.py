"""Application entry point for the dailytext fetcher."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys
from datetime import date
from logging.handlers import RotatingFileHandler
from typing import Optional

from art import tprint
from dotenv import load_dotenv

import settings
from client import build_processor, build_scheduler, schedule_config_from
from core.extractor import extract
from core.note_paths import parse_date

NAME = "DAILY TEXT"
FONT = "tarty-1"


def _print_banner() -> None:
    tprint(NAME, FONT, space=1)


class _RedactingFormatter(logging.Formatter):
    def __init__(self, secrets: list[str], fmt: str, datefmt: Optional[str] = None) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self._secrets = [secret for secret in secrets if secret]

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        for secret in self._secrets:
            message = message.replace(secret, "***")
        return message


def _collect_redaction_values(config: dict) -> list[str]:
    redact_cfg = config.get("redact", {}) if config else {}
    if not redact_cfg.get("enabled", False):
        return []
    values = []
    for name in redact_cfg.get("patterns", []):
        value = os.getenv(name)
        if value:
            values.append(value)
    return sorted(set(values), key=len, reverse=True)


def _configure_logging() -> None:
    config = settings.LOGGING or {}
    if not config.get("enabled", False):
        return

    load_dotenv()
    level_name = str(config.get("level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"
    secrets = _collect_redaction_values(config)
    formatter = _RedactingFormatter(secrets, fmt=fmt, datefmt=datefmt)

    handlers: list[logging.Handler] = []

    if config.get("console", True):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    file_cfg = config.get("file", {})
    if file_cfg.get("enabled", False):
        path = file_cfg.get("path", "logs/dailytext.log")
        if not os.path.isabs(path):
            path = os.path.join(settings.PROJECT_ROOT, path)
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        max_bytes = int(file_cfg.get("max_bytes", 5 * 1024 * 1024))
        backup_count = int(file_cfg.get("backup_count", 5))
        file_handler = RotatingFileHandler(
            path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    if not handlers:
        return

    logging.basicConfig(level=level, handlers=handlers)


def _run() -> None:
    _print_banner()
    _configure_logging()
    logger = logging.getLogger(__name__)

    schedule = schedule_config_from(settings.CONFIG)
    if not schedule.enabled:
        logger.warning("auto_fetch.enabled is false in config.json; nothing to schedule")
        return

    scheduler = build_scheduler(settings.CONFIG)
    logger.info("Auto-fetch scheduled daily at %s", schedule.run_at.strftime("%H:%M:%S"))
    try:
        asyncio.run(scheduler.run_forever())
    except KeyboardInterrupt:
        logger.info("Scheduler stopped")


def _fetch(target_date: date) -> int:
    _configure_logging()
    logger = logging.getLogger(__name__)

    try:
        processor = build_processor(settings.CONFIG)
        path = asyncio.run(processor.fetch_and_write(target_date))
    except Exception:
        logger.exception("Error fetching daily text for %s", target_date.isoformat())
        return 1

    if path is None:
        print(f"No daily text found for {target_date.isoformat()}; nothing written.")
        return 1
    print(f"Daily text written to {path}")
    return 0


def _read_fragment(path: str) -> str:
    """Return the HTML fragment from a saved page or feed JSON payload."""

    with open(path, "r", encoding="utf-8") as handle:
        raw = handle.read()
    if not raw.lstrip().startswith(("{", "[")):
        return raw
    payload = json.loads(raw)
    items = payload.get("items") if isinstance(payload, dict) else None
    first = items[0] if isinstance(items, list) and items else None
    if not isinstance(first, dict):
        raise ValueError(f"{path}: expected a feed payload with items[0].content")
    return str(first.get("content", ""))


def _extract(path: str, date_label: str) -> int:
    _configure_logging()
    try:
        fragment = _read_fragment(path)
    except (OSError, ValueError) as exc:
        print(f"Cannot read {path}: {exc}", file=sys.stderr)
        return 1
    record = extract(fragment, date=date_label)
    print(f"date:       {record.date}")
    print(f"scripture:  {record.scripture}")
    print(f"citation:   {record.citation}")
    print(f"commentary: {record.commentary}")
    return 0 if not record.is_empty else 1


def _setup() -> None:
    _print_banner()
    from frontend.app import ConfigPanelApp

    ConfigPanelApp().run()


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="dailytext")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("run", help="Start the daily auto-fetch scheduler")
    fetch_parser = subparsers.add_parser("fetch", help="Fetch one daily text and write it now")
    fetch_parser.add_argument("--date", help="Day to fetch (YYYY-MM-DD), defaults to today")
    extract_parser = subparsers.add_parser(
        "extract",
        help="Parse a saved HTML fragment or feed JSON and print the fields",
    )
    extract_parser.add_argument("file")
    extract_parser.add_argument("--date", default="", help="Label for the record")
    subparsers.add_parser("config", help="Launch the config TUI")

    args = parser.parse_args(argv)
    if args.command == "config":
        _setup()
        return
    if args.command == "fetch":
        try:
            target_date = parse_date(args.date) if args.date else date.today()
        except ValueError as exc:
            parser.error(str(exc))
        sys.exit(_fetch(target_date))
    if args.command == "extract":
        sys.exit(_extract(args.file, args.date))
    _run()


if __name__ == "__main__":
    main()
