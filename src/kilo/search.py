from __future__ import annotations

from typing import TYPE_CHECKING

from .constants import (
    ARROW_DOWN,
    ARROW_LEFT,
    ARROW_RIGHT,
    ARROW_UP,
    ENTER,
    ESC,
    HL_MATCH,
)
from .models import EditorConfig
from .rows import row_rx_to_cx

if TYPE_CHECKING:
    from .editor import Editor


class SearchState:
    """Per-keystroke search driver.

    ``last_match`` is the row of the previous hit (-1 for none) and
    ``direction`` is +1 or -1. The highlight of the row holding the current
    hit is kept in ``saved_hl`` so the MATCH overlay can be undone exactly.
    """

    def __init__(self) -> None:
        self.last_match = -1
        self.direction = 1
        self.saved_hl_line = -1
        self.saved_hl: list[int] | None = None

    def restore_highlight(self, cfg: EditorConfig) -> None:
        if self.saved_hl is not None:
            row = cfg.row_at(self.saved_hl_line)
            if row is not None:
                row.hl = self.saved_hl
        self.saved_hl = None
        self.saved_hl_line = -1

    def on_key(self, cfg: EditorConfig, query: str, key: int) -> None:
        self.restore_highlight(cfg)

        if key in (ENTER, ESC):
            self.last_match = -1
            self.direction = 1
            return
        if key in (ARROW_RIGHT, ARROW_DOWN):
            self.direction = 1
        elif key in (ARROW_LEFT, ARROW_UP):
            self.direction = -1
        else:
            self.last_match = -1
            self.direction = 1

        if not query:
            return
        if self.last_match == -1:
            self.direction = 1

        current = self.last_match
        for _ in range(cfg.numrows):
            current += self.direction
            if current == -1:
                current = cfg.numrows - 1
            elif current == cfg.numrows:
                current = 0

            row = cfg.rows[current]
            offset = row.render.find(query)
            if offset == -1:
                continue

            self.last_match = current
            cfg.cy = current
            cfg.cx = row_rx_to_cx(row, offset)
            # Past the last row, so the next scroll() puts the hit at the top.
            cfg.rowoff = cfg.numrows

            self.saved_hl_line = current
            self.saved_hl = row.hl.copy()
            end = min(offset + len(query), row.rsize)
            row.hl[offset:end] = [HL_MATCH] * (end - offset)
            break


def find(editor: Editor) -> None:
    cfg = editor.cfg
    saved_cx = cfg.cx
    saved_cy = cfg.cy
    saved_coloff = cfg.coloff
    saved_rowoff = cfg.rowoff

    query = editor.prompt("Search: %s (Use ESC/Arrows/Enter)", SearchState())

    if query is None:
        cfg.cx = saved_cx
        cfg.cy = saved_cy
        cfg.coloff = saved_coloff
        cfg.rowoff = saved_rowoff
