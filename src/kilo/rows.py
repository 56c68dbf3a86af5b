from __future__ import annotations

from .constants import KILO_TAB_STOP
from .models import EditorConfig, Row
from .syntax import update_syntax


def row_cx_to_rx(row: Row, cx: int) -> int:
    rx = 0
    for ch in row.chars[:cx]:
        if ch == "\t":
            rx += (KILO_TAB_STOP - 1) - (rx % KILO_TAB_STOP)
        rx += 1
    return rx


def row_rx_to_cx(row: Row, rx: int) -> int:
    cur_rx = 0
    for cx, ch in enumerate(row.chars):
        if ch == "\t":
            cur_rx += (KILO_TAB_STOP - 1) - (cur_rx % KILO_TAB_STOP)
        cur_rx += 1
        if cur_rx > rx:
            return cx
    return row.size


def render_chars(chars: str) -> str:
    out: list[str] = []
    idx = 0
    for ch in chars:
        if ch == "\t":
            out.append(" ")
            idx += 1
            while idx % KILO_TAB_STOP != 0:
                out.append(" ")
                idx += 1
        else:
            out.append(ch)
            idx += 1
    return "".join(out)


def update_row(cfg: EditorConfig, row: Row) -> None:
    row.render = render_chars(row.chars)
    update_syntax(cfg.syntax, row)


def insert_row(cfg: EditorConfig, at: int, s: str) -> None:
    at = max(0, min(at, cfg.numrows))
    row = Row(chars=s)
    cfg.rows.insert(at, row)
    update_row(cfg, row)
    cfg.dirty += 1


def del_row(cfg: EditorConfig, at: int) -> None:
    if at < 0 or at >= cfg.numrows:
        return
    del cfg.rows[at]
    cfg.dirty += 1


def rows_to_string(cfg: EditorConfig) -> str:
    return "".join(f"{row.chars}\n" for row in cfg.rows)


def row_insert_char(cfg: EditorConfig, row: Row, at: int, c: str) -> None:
    if at < 0 or at > row.size:
        at = row.size
    row.chars = row.chars[:at] + c + row.chars[at:]
    update_row(cfg, row)
    cfg.dirty += 1


def row_append_string(cfg: EditorConfig, row: Row, s: str) -> None:
    row.chars += s
    update_row(cfg, row)
    cfg.dirty += 1


def row_del_char(cfg: EditorConfig, row: Row, at: int) -> None:
    if at < 0 or at >= row.size:
        return
    row.chars = row.chars[:at] + row.chars[at + 1 :]
    update_row(cfg, row)
    cfg.dirty += 1


def row_truncate(cfg: EditorConfig, row: Row, at: int) -> None:
    row.chars = row.chars[:at]
    update_row(cfg, row)
    cfg.dirty += 1
