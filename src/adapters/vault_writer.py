"""Vault file adapter.

Implements the core NoteWriterPort on a plain folder of Markdown files,
which is all an Obsidian vault is on disk.
"""

from __future__ import annotations

import logging
from pathlib import Path

LOGGER = logging.getLogger(__name__)


class VaultWriter:
    """Creates, appends to or overwrites notes below a vault root."""

    def __init__(self, vault_root: str | Path) -> None:
        self._root = Path(vault_root).expanduser().resolve()

    @property
    def root(self) -> Path:
        return self._root

    def resolve(self, relative_path: str) -> Path:
        """Return the absolute note path, refusing anything outside the vault."""

        target = (self._root / relative_path).resolve()
        if target != self._root and self._root not in target.parents:
            raise ValueError(f"Note path escapes the vault: {relative_path}")
        if target == self._root:
            raise ValueError("Note path must name a file inside the vault")
        return target

    def write(self, relative_path: str, content: str, append: bool) -> Path:
        """Create the note, or append/overwrite when it already exists."""

        target = self.resolve(relative_path)
        target.parent.mkdir(parents=True, exist_ok=True)

        if not target.exists():
            target.write_text(content, encoding="utf-8")
            LOGGER.info("Created note %s", target)
        elif append:
            with target.open("a", encoding="utf-8") as handle:
                handle.write(content)
            LOGGER.info("Appended to note %s", target)
        else:
            target.write_text(content, encoding="utf-8")
            LOGGER.info("Overwrote note %s", target)
        return target
