from __future__ import annotations

import logging

from .constants import (
    C_HL_EXTENSIONS,
    C_HL_KEYWORDS,
    C_HL_TYPES,
    HL_COMMENT,
    HL_HIGHLIGHT_NUMBERS,
    HL_HIGHLIGHT_STRINGS,
    HL_KEYWORD,
    HL_MATCH,
    HL_NORMAL,
    HL_NUMBER,
    HL_STRING,
    HL_TYPE,
    PY_HL_EXTENSIONS,
    PY_HL_KEYWORDS,
    PY_HL_TYPES,
    SEPARATORS,
    WHITESPACE,
)
from .models import EditorConfig, EditorSyntax, Row

log = logging.getLogger(__name__)


HLDB: tuple[EditorSyntax, ...] = (
    EditorSyntax(
        filetype="c",
        filematch=C_HL_EXTENSIONS,
        keywords=C_HL_KEYWORDS,
        types=C_HL_TYPES,
        singleline_comment_start="//",
        flags=HL_HIGHLIGHT_NUMBERS | HL_HIGHLIGHT_STRINGS,
    ),
    EditorSyntax(
        filetype="python",
        filematch=PY_HL_EXTENSIONS,
        keywords=PY_HL_KEYWORDS,
        types=PY_HL_TYPES,
        singleline_comment_start="#",
        flags=HL_HIGHLIGHT_NUMBERS | HL_HIGHLIGHT_STRINGS,
    ),
)


def is_separator(c: str) -> bool:
    return not c or c in WHITESPACE or c == "\0" or c in SEPARATORS


def syntax_to_color(hl: int) -> int:
    if hl == HL_COMMENT:
        return 36
    if hl == HL_KEYWORD:
        return 33
    if hl == HL_TYPE:
        return 32
    if hl == HL_STRING:
        return 35
    if hl == HL_NUMBER:
        return 31
    if hl == HL_MATCH:
        return 34
    return 37


def _match_word(syntax: EditorSyntax, text: str, i: int) -> tuple[int, int] | None:
    for words, mark in ((syntax.keywords, HL_KEYWORD), (syntax.types, HL_TYPE)):
        for word in words:
            end = i + len(word)
            if text.startswith(word, i) and is_separator(text[end : end + 1]):
                return len(word), mark
    return None


def update_syntax(syntax: EditorSyntax | None, row: Row) -> None:
    row.hl = [HL_NORMAL] * row.rsize
    if syntax is None:
        return

    scs = syntax.singleline_comment_start
    highlight_strings = bool(syntax.flags & HL_HIGHLIGHT_STRINGS)
    highlight_numbers = bool(syntax.flags & HL_HIGHLIGHT_NUMBERS)

    p = row.render
    hl = row.hl
    prev_sep = True
    in_string = ""
    i = 0
    while i < len(p):
        ch = p[i]
        prev_hl = hl[i - 1] if i > 0 else HL_NORMAL

        if scs and not in_string and p.startswith(scs, i):
            hl[i:] = [HL_COMMENT] * (len(p) - i)
            break

        if in_string:
            hl[i] = HL_STRING
            if ch == "\\" and i + 1 < len(p):
                hl[i + 1] = HL_STRING
                i += 2
                continue
            if ch == in_string:
                in_string = ""
            i += 1
            prev_sep = True
            continue

        if highlight_strings and ch in ("'", '"'):
            in_string = ch
            hl[i] = HL_STRING
            i += 1
            continue

        if highlight_numbers and (
            ("0" <= ch <= "9" and (prev_sep or prev_hl == HL_NUMBER))
            or (ch == "." and prev_hl == HL_NUMBER)
        ):
            hl[i] = HL_NUMBER
            i += 1
            prev_sep = False
            continue

        if prev_sep:
            matched = _match_word(syntax, p, i)
            if matched is not None:
                length, mark = matched
                hl[i : i + length] = [mark] * length
                i += length
                prev_sep = False
                continue

        prev_sep = is_separator(ch)
        i += 1


def update_all_syntax(cfg: EditorConfig) -> None:
    for idx in range(cfg.numrows):
        update_syntax(cfg.syntax, cfg.rows[idx])


def find_syntax(filename: str) -> EditorSyntax | None:
    dot = filename.rfind(".")
    ext = filename[dot:] if dot != -1 else None
    for syntax in HLDB:
        for pattern in syntax.filematch:
            if pattern.startswith("."):
                if ext is not None and ext == pattern:
                    return syntax
            elif pattern in filename:
                return syntax
    return None


def select_syntax_highlight(cfg: EditorConfig, filename: str | None) -> None:
    cfg.syntax = find_syntax(filename) if filename else None
    log.debug("filetype for %r: %s", filename, cfg.syntax.filetype if cfg.syntax else None)
    update_all_syntax(cfg)
