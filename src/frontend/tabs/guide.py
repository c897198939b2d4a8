"""Guide tab with a short usage reference."""

from __future__ import annotations

from textual.containers import ScrollableContainer
from textual.widgets import Markdown

GUIDE_TEXT = """\
# Daily Text

Fetches the day's text from wol.jw.org and writes scripture, citation and
commentary into a note inside your vault.

## Note path

`note.path_template` is relative to `vault.path` and accepts these tokens:

| token  | value              |
|--------|--------------------|
| `{YYYY}` | four-digit year  |
| `{MM}`   | two-digit month  |
| `{DD}`   | two-digit day    |

With `append` on, a new entry is added to the end of an existing note.
Otherwise the note is replaced.

`format` picks the layout: `callout` quotes the scripture in a callout block,
`classic` writes bold **Scripture:** / **Citation:** lines.

## Commands

- `dailytext run` starts the daily scheduler (needs `auto_fetch.enabled`)
- `dailytext fetch --date 2024-05-01` fetches one day now
- `dailytext extract page.html` prints the fields parsed from a saved page
- `dailytext config` opens this panel

## Environment (.env)

- `DAILYTEXT_VAULT_PATH` overrides `vault.path`
- `DAILYTEXT_CONFIG` (shell only, read before .env) points at another config.json
- `DAILYTEXT_USER_AGENT` overrides the HTTP User-Agent

Press **ctrl+s** to save, **ctrl+r** to reload, **q** to quit.
"""


class GuideTab(ScrollableContainer):
    def compose(self):
        yield Markdown(GUIDE_TEXT, id="guide-text")
