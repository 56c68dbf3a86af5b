from __future__ import annotations

import time
from typing import TYPE_CHECKING

from .constants import (
    ANSI_CLEAR_LINE,
    ANSI_CURSOR_HOME,
    ANSI_DEFAULT_FG,
    ANSI_HIDE_CURSOR,
    ANSI_INVERT_ON,
    ANSI_RESET,
    ANSI_SHOW_CURSOR,
    HL_NORMAL,
    KILO_MESSAGE_TIMEOUT,
    KILO_VERSION,
)
from .models import EditorConfig
from .rows import row_cx_to_rx
from .syntax import syntax_to_color

if TYPE_CHECKING:
    from .terminal import Terminal


class AppendBuffer:
    """Collects one frame of output so it reaches the terminal in a single write."""

    def __init__(self) -> None:
        self._parts: list[str] = []

    def append(self, s: str) -> None:
        self._parts.append(s)

    def getvalue(self) -> str:
        return "".join(self._parts)

    def flush(self, terminal: Terminal) -> None:
        data = self.getvalue().encode("latin-1", errors="replace")
        self._parts.clear()
        terminal.write(data)


def scroll(cfg: EditorConfig) -> None:
    cfg.rx = 0
    if cfg.cy < cfg.numrows:
        cfg.rx = row_cx_to_rx(cfg.rows[cfg.cy], cfg.cx)

    if cfg.cy < cfg.rowoff:
        cfg.rowoff = cfg.cy
    if cfg.cy >= cfg.rowoff + cfg.screenrows:
        cfg.rowoff = cfg.cy - cfg.screenrows + 1
    if cfg.rx < cfg.coloff:
        cfg.coloff = cfg.rx
    if cfg.rx >= cfg.coloff + cfg.screencols:
        cfg.coloff = cfg.rx - cfg.screencols + 1


def draw_welcome(cfg: EditorConfig, ab: AppendBuffer) -> None:
    welcome = f"Kilo editor -- version {KILO_VERSION}"
    if len(welcome) > cfg.screencols:
        welcome = welcome[: cfg.screencols]
    padding = (cfg.screencols - len(welcome)) // 2
    if padding:
        ab.append("~")
        padding -= 1
    if padding > 0:
        ab.append(" " * padding)
    ab.append(welcome)


def draw_row(cfg: EditorConfig, ab: AppendBuffer, filerow: int) -> None:
    row = cfg.rows[filerow]
    text = row.render[cfg.coloff : cfg.coloff + cfg.screencols]
    hl = row.hl[cfg.coloff : cfg.coloff + cfg.screencols]
    current_color = -1
    for ch, h in zip(text, hl):
        if ord(ch) < 32 or ord(ch) == 127:
            sym = chr(ord("@") + ord(ch)) if ord(ch) <= 26 else "?"
            ab.append(ANSI_INVERT_ON)
            ab.append(sym)
            ab.append(ANSI_RESET)
            if current_color != -1:
                ab.append(f"\x1b[{current_color}m")
        elif h == HL_NORMAL:
            if current_color != -1:
                ab.append(ANSI_DEFAULT_FG)
                current_color = -1
            ab.append(ch)
        else:
            color = syntax_to_color(h)
            if color != current_color:
                ab.append(f"\x1b[{color}m")
                current_color = color
            ab.append(ch)
    ab.append(ANSI_DEFAULT_FG)


def draw_rows(cfg: EditorConfig, ab: AppendBuffer) -> None:
    for y in range(cfg.screenrows):
        filerow = cfg.rowoff + y
        if filerow < cfg.numrows:
            draw_row(cfg, ab, filerow)
        elif cfg.numrows == 0 and y == cfg.screenrows // 3:
            draw_welcome(cfg, ab)
        else:
            ab.append("~")
        ab.append(ANSI_CLEAR_LINE)
        ab.append("\r\n")


def status_text(cfg: EditorConfig) -> tuple[str, str]:
    filename = cfg.filename if cfg.filename else "[No Name]"
    modified = "(modified)" if cfg.dirty else ""
    status = f"{filename:.20} - {cfg.numrows} lines {modified}"
    filetype = cfg.syntax.filetype if cfg.syntax else "no ft"
    rstatus = f"{filetype} | {cfg.cy + 1}/{cfg.numrows}"
    return status, rstatus


def draw_status_bar(cfg: EditorConfig, ab: AppendBuffer) -> None:
    status, rstatus = status_text(cfg)
    status = status[: cfg.screencols]
    ab.append(ANSI_INVERT_ON)
    ab.append(status)
    fill = len(status)
    while fill < cfg.screencols:
        if cfg.screencols - fill == len(rstatus):
            ab.append(rstatus)
            break
        ab.append(" ")
        fill += 1
    ab.append(ANSI_RESET)
    ab.append("\r\n")


def draw_message_bar(cfg: EditorConfig, ab: AppendBuffer) -> None:
    ab.append(ANSI_CLEAR_LINE)
    if cfg.statusmsg and time.time() - cfg.statusmsg_time < KILO_MESSAGE_TIMEOUT:
        ab.append(cfg.statusmsg[: cfg.screencols])


def compose_frame(cfg: EditorConfig, ab: AppendBuffer) -> None:
    scroll(cfg)
    ab.append(ANSI_HIDE_CURSOR)
    ab.append(ANSI_CURSOR_HOME)
    draw_rows(cfg, ab)
    draw_status_bar(cfg, ab)
    draw_message_bar(cfg, ab)
    ab.append(f"\x1b[{cfg.cy - cfg.rowoff + 1};{cfg.rx - cfg.coloff + 1}H")
    ab.append(ANSI_SHOW_CURSOR)


def refresh_screen(cfg: EditorConfig, terminal: Terminal) -> None:
    ab = AppendBuffer()
    compose_frame(cfg, ab)
    ab.flush(terminal)
