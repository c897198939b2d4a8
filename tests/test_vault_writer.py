from __future__ import annotations

import pytest

from adapters.vault_writer import VaultWriter


def test_create_append_and_overwrite(tmp_path) -> None:
    writer = VaultWriter(tmp_path)

    path = writer.write("Daily/2024-05-01.md", "one\n", append=True)
    assert path == tmp_path.resolve() / "Daily" / "2024-05-01.md"
    assert path.read_text(encoding="utf-8") == "one\n"

    writer.write("Daily/2024-05-01.md", "two\n", append=True)
    assert path.read_text(encoding="utf-8") == "one\ntwo\n"

    writer.write("Daily/2024-05-01.md", "three\n", append=False)
    assert path.read_text(encoding="utf-8") == "three\n"


def test_paths_outside_the_vault_are_refused(tmp_path) -> None:
    writer = VaultWriter(tmp_path / "vault")
    with pytest.raises(ValueError):
        writer.write("../outside.md", "x", append=False)
    with pytest.raises(ValueError):
        writer.resolve("")
    assert not (tmp_path / "outside.md").exists()
