from __future__ import annotations

import re

from conftest import FakeTerminal, load
from kilo.editor import Editor
from kilo.render import AppendBuffer, scroll, status_text

ANSI_RE = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]")


def screen_lines(frame: str) -> list[str]:
    return frame.split("\r\n")


def test_single_write_per_frame(editor, term):
    load(editor, ["abc"])
    editor.refresh_screen()
    assert len(term.writes) == 1
    frame = term.last_frame
    assert frame.startswith("\x1b[?25l\x1b[H")
    assert frame.endswith("\x1b[1;1H\x1b[?25h")


def test_append_buffer_flushes_once():
    term = FakeTerminal()
    ab = AppendBuffer()
    ab.append("a")
    ab.append("\xe9")
    ab.flush(term)
    assert term.writes == [b"a\xe9"]
    assert ab.getvalue() == ""


def test_empty_buffer_status_bar(editor, term):
    editor.refresh_screen()
    lines = screen_lines(term.last_frame)
    assert len(lines) == 24
    status = ANSI_RE.sub("", lines[22])
    assert len(status) == 80
    assert status.startswith("[No Name] - 0 lines")
    assert status.endswith("no ft | 1/0")


def test_status_bar_with_file(editor):
    load(editor, ["int main;"], filename="a_rather_long_file_name_here.c")
    editor.cfg.dirty = 2
    left, right = status_text(editor.cfg)
    assert left == "a_rather_long_file_n - 1 lines (modified)"
    assert right == "c | 1/1"


def test_welcome_and_tildes(editor, term):
    editor.refresh_screen()
    lines = screen_lines(term.last_frame)
    assert "Kilo editor -- version" in lines[22 // 3]
    assert ANSI_RE.sub("", lines[0]) == "~"
    load(editor, ["x"])
    editor.refresh_screen()
    lines = screen_lines(term.last_frame)
    assert "Kilo editor" not in term.last_frame
    assert ANSI_RE.sub("", lines[1]) == "~"


def test_colors_change_only_between_classes(editor, term):
    load(editor, ["int x = 12;"], filename="t.c")
    editor.refresh_screen()
    first = screen_lines(term.last_frame)[0]
    first = first.replace("\x1b[?25l\x1b[H", "")
    assert first == "\x1b[32mint\x1b[39m x = \x1b[31m12\x1b[39m;\x1b[39m\x1b[K"


def test_control_characters_shown_inverted(editor, term):
    load(editor, ["a\x01b"])
    editor.refresh_screen()
    assert "a\x1b[7mA\x1b[mb" in term.last_frame


def test_rows_truncated_to_width():
    term = FakeTerminal(rows=5, cols=10)
    editor = Editor(term)
    load(editor, ["0123456789abcdef"])
    editor.refresh_screen()
    assert ANSI_RE.sub("", screen_lines(term.last_frame)[0]) == "0123456789"


def test_cursor_uses_render_column(editor, term):
    load(editor, ["\tab"])
    editor.cfg.cx = 2
    editor.refresh_screen()
    assert term.last_frame.endswith("\x1b[1;10H\x1b[?25h")


def test_scroll_follows_cursor(editor):
    load(editor, [f"{i}" for i in range(50)] + ["x" * 200])
    cfg = editor.cfg
    cfg.cy = 30
    scroll(cfg)
    assert cfg.rowoff == 30 - 22 + 1
    cfg.cy = 3
    scroll(cfg)
    assert cfg.rowoff == 3
    cfg.cy = 50
    cfg.cx = 150
    scroll(cfg)
    assert cfg.rx == 150
    assert cfg.coloff == 150 - 80 + 1
    cfg.cx = 10
    scroll(cfg)
    assert cfg.coloff == 10


def test_message_expires(editor, term, monkeypatch):
    editor.set_status_message("hello %d", 7)
    editor.refresh_screen()
    assert "hello 7" in term.last_frame
    monkeypatch.setattr("kilo.render.time.time", lambda: editor.cfg.statusmsg_time + 6)
    editor.refresh_screen()
    assert "hello 7" not in term.last_frame
