from __future__ import annotations

import pytest

from kilo.editor import Editor
from kilo.rows import insert_row
from kilo.syntax import select_syntax_highlight


class FakeTerminal:
    def __init__(self, rows: int = 24, cols: int = 80) -> None:
        self.size = (rows, cols)
        self.keys: list[int] = []
        self.writes: list[bytes] = []

    def feed(self, *keys: int | str) -> None:
        for key in keys:
            if isinstance(key, str):
                self.keys.extend(ord(ch) for ch in key)
            else:
                self.keys.append(key)

    def read_key(self) -> int:
        if not self.keys:
            raise AssertionError("editor asked for more keys than the test provided")
        return self.keys.pop(0)

    def window_size(self) -> tuple[int, int]:
        return self.size

    def write(self, data: bytes) -> None:
        self.writes.append(data)

    @property
    def last_frame(self) -> str:
        return self.writes[-1].decode("latin-1")


@pytest.fixture
def term() -> FakeTerminal:
    return FakeTerminal()


@pytest.fixture
def editor(term: FakeTerminal) -> Editor:
    return Editor(term)


def load(editor: Editor, lines: list[str], filename: str | None = None) -> Editor:
    if filename is not None:
        editor.cfg.filename = filename
        select_syntax_highlight(editor.cfg, filename)
    for line in lines:
        insert_row(editor.cfg, editor.cfg.numrows, line)
    editor.cfg.dirty = 0
    return editor
