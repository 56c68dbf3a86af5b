from __future__ import annotations

from conftest import load
from kilo.constants import (
    ARROW_DOWN,
    ARROW_LEFT,
    ARROW_RIGHT,
    ARROW_UP,
    BACKSPACE,
    CTRL_F,
    ENTER,
    ESC,
    HL_MATCH,
)
from kilo.search import SearchState, find


def type_query(editor, state: SearchState, query: str) -> None:
    for i in range(1, len(query) + 1):
        state.on_key(editor.cfg, query[:i], ord(query[i - 1]))


def test_forward_search_and_next(editor):
    load(editor, ["a needle b", "c needle d"])
    state = SearchState()
    type_query(editor, state, "needle")
    assert (editor.cfg.cy, editor.cfg.cx) == (0, 2)
    assert editor.cfg.rowoff == 2
    state.on_key(editor.cfg, "needle", ARROW_DOWN)
    assert (editor.cfg.cy, editor.cfg.cx) == (1, 2)
    assert state.last_match == 1


def test_search_wraps_both_ways(editor):
    load(editor, ["x", "hit", "y", "hit"])
    state = SearchState()
    type_query(editor, state, "hit")
    assert editor.cfg.cy == 1
    state.on_key(editor.cfg, "hit", ARROW_RIGHT)
    assert editor.cfg.cy == 3
    state.on_key(editor.cfg, "hit", ARROW_RIGHT)
    assert editor.cfg.cy == 1
    state.on_key(editor.cfg, "hit", ARROW_LEFT)
    assert editor.cfg.cy == 3
    state.on_key(editor.cfg, "hit", ARROW_UP)
    assert editor.cfg.cy == 1


def test_match_column_accounts_for_tabs(editor):
    load(editor, ["\tfoo"])
    state = SearchState()
    type_query(editor, state, "foo")
    assert editor.cfg.cx == 1


def test_match_overlay_is_restored_exactly(editor):
    load(editor, ['int a = "needle";', "other"], filename="t.c")
    row = editor.cfg.rows[0]
    before = row.hl.copy()
    state = SearchState()
    type_query(editor, state, "needle")
    assert row.hl[9:15] == [HL_MATCH] * 6
    assert row.hl[:9] == before[:9]
    # No row matches the longer query, so nothing is highlighted.
    state.on_key(editor.cfg, "needlex", ord("x"))
    assert editor.cfg.rows[0].hl == before
    assert state.saved_hl is None


def test_enter_and_escape_reset_state(editor):
    load(editor, ["abc", "abc"])
    state = SearchState()
    type_query(editor, state, "b")
    state.on_key(editor.cfg, "b", ARROW_DOWN)
    assert state.last_match == 1
    state.on_key(editor.cfg, "b", ENTER)
    assert state.last_match == -1
    assert state.direction == 1
    assert HL_MATCH not in editor.cfg.rows[1].hl


def test_query_change_restarts_from_top(editor):
    load(editor, ["ab", "ab", "abc"])
    state = SearchState()
    type_query(editor, state, "a")
    state.on_key(editor.cfg, "a", ARROW_DOWN)
    assert editor.cfg.cy == 1
    state.on_key(editor.cfg, "ab", ord("b"))
    assert editor.cfg.cy == 0
    state.on_key(editor.cfg, "abc", ord("c"))
    assert editor.cfg.cy == 2


def test_backward_with_no_prior_match_searches_forward(editor):
    load(editor, ["one", "two", "one"])
    state = SearchState()
    state.on_key(editor.cfg, "", ARROW_UP)
    assert editor.cfg.cy == 0
    state.last_match = -1
    state.on_key(editor.cfg, "one", ARROW_LEFT)
    assert editor.cfg.cy == 0
    assert state.direction == 1


def test_find_escape_restores_position(editor, term):
    load(editor, ["first", "second line", "third"])
    editor.cfg.cx = 3
    editor.cfg.cy = 2
    term.feed(CTRL_F, "second", ESC)
    editor.process_keypress()
    assert (editor.cfg.cx, editor.cfg.cy) == (3, 2)
    assert all(HL_MATCH not in row.hl for row in editor.cfg.rows)
    assert editor.cfg.statusmsg == ""


def test_find_enter_keeps_match(editor, term):
    load(editor, ["first", "second line", "third"])
    term.feed(CTRL_F, "line", BACKSPACE, "e", ENTER)
    editor.process_keypress()
    assert (editor.cfg.cx, editor.cfg.cy) == (7, 1)
    assert HL_MATCH not in editor.cfg.rows[1].hl
    editor.refresh_screen()
    assert editor.cfg.rowoff == 1


def test_find_runs_through_prompt_frames(editor, term):
    load(editor, ["zzz"])
    term.feed("q", ESC)
    find(editor)
    assert "Search: q (Use ESC/Arrows/Enter)" in term.writes[-1].decode("latin-1")
