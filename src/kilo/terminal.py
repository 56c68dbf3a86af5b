from __future__ import annotations

import errno
import fcntl
import logging
import os
import re
import struct
import termios
from contextlib import AbstractContextManager

from .constants import (
    CSI_SIMPLE_MAP,
    CSI_TILDE_MAP,
    ESC,
    KEY_NULL,
    KILO_READ_TIMEOUT,
    SS3_SIMPLE_MAP,
)

log = logging.getLogger(__name__)

CURSOR_REPORT_RE = re.compile(rb"\x1b\[(\d+);(\d+)R")


def _read_byte_once(fd: int) -> int | None:
    try:
        data = os.read(fd, 1)
    except (InterruptedError, BlockingIOError):
        return None
    if not data:
        return None
    return data[0]


def read_key(fd: int) -> int:
    c = _read_byte_once(fd)
    if c is None:
        # VTIME expired with nothing typed.
        return KEY_NULL
    if c != ESC:
        return c

    seq0 = _read_byte_once(fd)
    if seq0 is None:
        return ESC
    seq1 = _read_byte_once(fd)
    if seq1 is None:
        return ESC

    if seq0 == ord("["):
        if ord("0") <= seq1 <= ord("9"):
            seq2 = _read_byte_once(fd)
            if seq2 == ord("~"):
                return CSI_TILDE_MAP.get(seq1, ESC)
            return ESC
        return CSI_SIMPLE_MAP.get(seq1, ESC)
    if seq0 == ord("O"):
        return SS3_SIMPLE_MAP.get(seq1, ESC)
    return ESC


def write_checked(fd: int, data: bytes, what: str) -> None:
    if os.write(fd, data) != len(data):
        raise OSError(errno.EIO, f"short write during {what}")


def _read_report(fd: int, limit: int = 32) -> bytes:
    report = b""
    while len(report) < limit and not report.endswith(b"R"):
        c = _read_byte_once(fd)
        if c is None:
            break
        report += bytes((c,))
    return report


def get_cursor_position(ifd: int, ofd: int) -> tuple[int, int]:
    write_checked(ofd, b"\x1b[6n", "cursor position query")
    report = _read_report(ifd)
    match = CURSOR_REPORT_RE.fullmatch(report)
    if match is None:
        raise OSError(errno.EIO, f"unexpected cursor position report {report!r}")
    row, col = match.groups()
    return int(row), int(col)


def get_window_size(ifd: int, ofd: int) -> tuple[int, int]:
    try:
        packed = fcntl.ioctl(ofd, termios.TIOCGWINSZ, struct.pack("HHHH", 0, 0, 0, 0))
        rows, cols, _, _ = struct.unpack("HHHH", packed)
        if cols:
            return rows, cols
    except OSError:
        log.debug("TIOCGWINSZ unavailable, asking the terminal for its cursor position")

    # Cursor forward/down stop at the screen edge, unlike an absolute move.
    write_checked(ofd, b"\x1b[999C\x1b[999B", "window size query")
    return get_cursor_position(ifd, ofd)


# Indexes into the list returned by termios.tcgetattr().
IFLAG, OFLAG, CFLAG, LFLAG, CC = 0, 1, 2, 3, 6

RAW_IFLAG_OFF = termios.BRKINT | termios.ICRNL | termios.INPCK | termios.ISTRIP | termios.IXON
RAW_OFLAG_OFF = termios.OPOST
RAW_CFLAG_ON = termios.CS8
RAW_LFLAG_OFF = termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG


def raw_attributes(attrs: list) -> list:
    raw = [list(v) if isinstance(v, list) else v for v in attrs]
    raw[IFLAG] &= ~RAW_IFLAG_OFF
    raw[OFLAG] &= ~RAW_OFLAG_OFF
    raw[CFLAG] |= RAW_CFLAG_ON
    raw[LFLAG] &= ~RAW_LFLAG_OFF
    raw[CC][termios.VMIN] = 0
    raw[CC][termios.VTIME] = KILO_READ_TIMEOUT
    return raw


class RawMode(AbstractContextManager["RawMode"]):
    """Puts a tty in raw mode for the duration of a ``with`` block."""

    def __init__(self, fd: int) -> None:
        self.fd = fd
        self.saved: list | None = None

    def __enter__(self) -> "RawMode":
        if not os.isatty(self.fd):
            raise OSError(errno.ENOTTY, "stdin is not a tty")
        self.saved = termios.tcgetattr(self.fd)
        termios.tcsetattr(self.fd, termios.TCSAFLUSH, raw_attributes(self.saved))
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        saved, self.saved = self.saved, None
        if saved is not None:
            termios.tcsetattr(self.fd, termios.TCSAFLUSH, saved)


class Terminal:
    def __init__(self, ifd: int, ofd: int) -> None:
        self.ifd = ifd
        self.ofd = ofd

    def raw_mode(self) -> RawMode:
        return RawMode(self.ifd)

    def read_key(self) -> int:
        return read_key(self.ifd)

    def window_size(self) -> tuple[int, int]:
        return get_window_size(self.ifd, self.ofd)

    def write(self, data: bytes) -> None:
        write_checked(self.ofd, data, "screen refresh")
