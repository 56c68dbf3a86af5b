from __future__ import annotations

import errno
import logging
import os
import signal
import sys
import time
from typing import Protocol

from .constants import (
    ANSI_CLEAR_SCREEN,
    ANSI_CURSOR_HOME,
    ARROW_DOWN,
    ARROW_LEFT,
    ARROW_RIGHT,
    ARROW_UP,
    BACKSPACE,
    CTRL_C,
    CTRL_F,
    CTRL_H,
    CTRL_L,
    CTRL_Q,
    CTRL_S,
    DEL_KEY,
    END_KEY,
    ENTER,
    ESC,
    HOME_KEY,
    KEY_NULL,
    KILO_QUERY_LEN,
    KILO_QUIT_TIMES,
    PAGE_DOWN,
    PAGE_UP,
)
from .models import EditorConfig
from .render import refresh_screen
from .rows import (
    del_row,
    insert_row,
    row_append_string,
    row_del_char,
    row_insert_char,
    row_truncate,
    rows_to_string,
)
from .search import find
from .syntax import select_syntax_highlight
from .terminal import Terminal

log = logging.getLogger(__name__)


class PromptObserver(Protocol):
    def on_key(self, cfg: EditorConfig, query: str, key: int) -> None: ...


class Editor:
    def __init__(self, terminal: Terminal) -> None:
        self.cfg = EditorConfig()
        self.quit_times = KILO_QUIT_TIMES
        self.terminal = terminal
        self.update_window_size()

    def update_window_size(self) -> None:
        try:
            rows, cols = self.terminal.window_size()
        except OSError as exc:
            raise OSError(exc.errno, f"Unable to query screen size: {exc.strerror or exc}") from exc
        self.cfg.screenrows = max(1, rows - 2)
        self.cfg.screencols = max(1, cols)
        log.debug("window size %dx%d", cols, rows)

    def handle_sigwinch(self, _signum: int, _frame) -> None:
        self.update_window_size()
        self.refresh_screen()

    def set_status_message(self, fmt: str, *args: object) -> None:
        self.cfg.statusmsg = fmt % args if args else fmt
        self.cfg.statusmsg_time = time.time()

    def refresh_screen(self) -> None:
        refresh_screen(self.cfg, self.terminal)

    def insert_char(self, c: int) -> None:
        cfg = self.cfg
        if cfg.cy == cfg.numrows:
            insert_row(cfg, cfg.numrows, "")
        row_insert_char(cfg, cfg.rows[cfg.cy], cfg.cx, chr(c & 0xFF))
        cfg.cx += 1

    def insert_newline(self) -> None:
        cfg = self.cfg
        if cfg.cx == 0:
            insert_row(cfg, cfg.cy, "")
        else:
            tail = cfg.rows[cfg.cy].chars[cfg.cx :]
            insert_row(cfg, cfg.cy + 1, tail)
            # insert_row shifted the list; fetch the row again.
            row_truncate(cfg, cfg.rows[cfg.cy], cfg.cx)
        cfg.cy += 1
        cfg.cx = 0

    def del_char(self) -> None:
        cfg = self.cfg
        if cfg.cy == cfg.numrows:
            return
        if cfg.cx == 0 and cfg.cy == 0:
            return

        if cfg.cx > 0:
            row_del_char(cfg, cfg.rows[cfg.cy], cfg.cx - 1)
            cfg.cx -= 1
        else:
            prev = cfg.rows[cfg.cy - 1]
            cfg.cx = prev.size
            row_append_string(cfg, prev, cfg.rows[cfg.cy].chars)
            del_row(cfg, cfg.cy)
            cfg.cy -= 1

    def del_forward(self) -> None:
        before = (self.cfg.cx, self.cfg.cy)
        self.move_cursor(ARROW_RIGHT)
        if (self.cfg.cx, self.cfg.cy) != before:
            self.del_char()

    def open_file(self, filename: str) -> None:
        cfg = self.cfg
        cfg.filename = filename
        select_syntax_highlight(cfg, filename)
        try:
            with open(filename, "rb") as f:
                for line in f:
                    insert_row(cfg, cfg.numrows, line.rstrip(b"\r\n").decode("latin-1"))
        except FileNotFoundError:
            log.info("%s does not exist yet, starting empty", filename)
        except OSError as exc:
            log.warning("opening %s failed: %s", filename, exc)
            self.set_status_message("Can't open file! %s", exc.strerror or exc)
        else:
            log.info("loaded %s (%d lines)", filename, cfg.numrows)
        cfg.dirty = 0

    def save(self) -> None:
        cfg = self.cfg
        if not cfg.filename:
            filename = self.prompt("Save as: %s (ESC to cancel)")
            if filename is None:
                self.set_status_message("Save aborted")
                return
            cfg.filename = filename
            select_syntax_highlight(cfg, filename)

        data = rows_to_string(cfg).encode("latin-1", errors="replace")
        try:
            fd = os.open(cfg.filename, os.O_RDWR | os.O_CREAT, 0o644)
            try:
                os.ftruncate(fd, len(data))
                written = 0
                while written < len(data):
                    n = os.write(fd, data[written:])
                    if n <= 0:
                        raise OSError(errno.EIO, "short write")
                    written += n
            finally:
                os.close(fd)
        except OSError as exc:
            log.warning("saving %s failed: %s", cfg.filename, exc)
            self.set_status_message("Can't save! I/O error: %s", os.strerror(exc.errno or errno.EIO))
            return

        cfg.dirty = 0
        log.info("wrote %d bytes to %s", len(data), cfg.filename)
        self.set_status_message("%d bytes written to disk", len(data))

    def prompt(self, template: str, observer: PromptObserver | None = None) -> str | None:
        buf = ""
        while True:
            self.set_status_message(template, buf)
            self.refresh_screen()

            c = self.terminal.read_key()
            if c == KEY_NULL:
                continue
            if c in (DEL_KEY, CTRL_H, BACKSPACE):
                buf = buf[:-1]
            elif c == ESC:
                self.set_status_message("")
                if observer is not None:
                    observer.on_key(self.cfg, buf, c)
                return None
            elif c == ENTER:
                if buf:
                    self.set_status_message("")
                    if observer is not None:
                        observer.on_key(self.cfg, buf, c)
                    return buf
            elif 32 <= c < 127 and len(buf) < KILO_QUERY_LEN:
                buf += chr(c)

            if observer is not None:
                observer.on_key(self.cfg, buf, c)

    def move_cursor(self, key: int) -> None:
        cfg = self.cfg
        row = cfg.row_at(cfg.cy)

        if key == ARROW_LEFT:
            if cfg.cx != 0:
                cfg.cx -= 1
            elif cfg.cy > 0:
                cfg.cy -= 1
                cfg.cx = cfg.rows[cfg.cy].size
        elif key == ARROW_RIGHT:
            if row is not None and cfg.cx < row.size:
                cfg.cx += 1
            elif row is not None and cfg.cy + 1 < cfg.numrows:
                cfg.cy += 1
                cfg.cx = 0
        elif key == ARROW_UP:
            if cfg.cy != 0:
                cfg.cy -= 1
        elif key == ARROW_DOWN:
            if cfg.cy < cfg.numrows:
                cfg.cy += 1

        row = cfg.row_at(cfg.cy)
        rowlen = row.size if row is not None else 0
        if cfg.cx > rowlen:
            cfg.cx = rowlen

    def page(self, key: int) -> None:
        cfg = self.cfg
        if key == PAGE_UP:
            cfg.cy = cfg.rowoff
        else:
            cfg.cy = min(cfg.rowoff + cfg.screenrows - 1, cfg.numrows)
        for _ in range(cfg.screenrows):
            self.move_cursor(ARROW_UP if key == PAGE_UP else ARROW_DOWN)

    def process_keypress(self) -> None:
        c = self.terminal.read_key()
        if c == KEY_NULL:
            return

        cfg = self.cfg
        if c == ENTER:
            self.insert_newline()
        elif c == CTRL_Q:
            if cfg.dirty and self.quit_times > 0:
                self.set_status_message(
                    "WARNING!!! File has unsaved changes. Press Ctrl-Q %d more times to quit.",
                    self.quit_times,
                )
                self.quit_times -= 1
                return
            self.terminal.write((ANSI_CLEAR_SCREEN + ANSI_CURSOR_HOME).encode())
            raise SystemExit(0)
        elif c == CTRL_S:
            self.save()
        elif c == CTRL_F:
            find(self)
        elif c in (BACKSPACE, CTRL_H):
            self.del_char()
        elif c == DEL_KEY:
            self.del_forward()
        elif c == HOME_KEY:
            cfg.cx = 0
        elif c == END_KEY:
            if cfg.cy < cfg.numrows:
                cfg.cx = cfg.rows[cfg.cy].size
        elif c in (PAGE_UP, PAGE_DOWN):
            self.page(c)
        elif c in (ARROW_UP, ARROW_DOWN, ARROW_LEFT, ARROW_RIGHT):
            self.move_cursor(c)
        elif c in (CTRL_C, CTRL_L, ESC):
            pass
        else:
            self.insert_char(c)

        self.quit_times = KILO_QUIT_TIMES


def configure_logging() -> None:
    path = os.environ.get("KILO_LOG")
    if not path:
        logging.getLogger("kilo").addHandler(logging.NullHandler())
        return
    logging.basicConfig(
        filename=path,
        level=os.environ.get("KILO_LOG_LEVEL", "DEBUG").upper(),
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )


def run(argv: list[str] | None = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) > 1:
        print("Usage: kilo [filename]", file=sys.stderr)
        return 1

    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    if not os.isatty(stdin_fd) or not os.isatty(stdout_fd):
        print("kilo: stdin/stdout must be a tty", file=sys.stderr)
        return 1

    configure_logging()
    terminal = Terminal(stdin_fd, stdout_fd)
    try:
        with terminal.raw_mode():
            editor = Editor(terminal)
            # Set before loading so a load error replaces it.
            editor.set_status_message("HELP: Ctrl-S = save | Ctrl-Q = quit | Ctrl-F = find")
            if args:
                editor.open_file(args[0])
            signal.signal(signal.SIGWINCH, editor.handle_sigwinch)
            while True:
                editor.refresh_screen()
                editor.process_keypress()
    except OSError as exc:
        log.exception("fatal terminal error")
        try:
            os.write(stdout_fd, (ANSI_CLEAR_SCREEN + ANSI_CURSOR_HOME).encode())
        except OSError:
            pass
        print(f"kilo: {exc}", file=sys.stderr)
        return 1
    except SystemExit as exc:
        if isinstance(exc.code, int):
            return exc.code
        return 0
