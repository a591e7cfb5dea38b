"""Curses driver for the form.

Reads keys, turns them into form events, and redraws from `render`. All form
logic lives in `lazyjira.form.engine`; this module only talks to the terminal.
"""

from __future__ import annotations

import contextlib
import curses
import logging
from typing import Any

from rich.cells import cell_len, chop_cells
from rich.text import Text

from lazyjira.form.engine import Signal, handle_event
from lazyjira.form.events import (
    Advance,
    Cancel,
    ClearField,
    DeleteBackward,
    FormEvent,
    InsertText,
    Resize,
    Retreat,
)
from lazyjira.form.render import render
from lazyjira.form.state import FieldSpec, FormState, initialize

logger = logging.getLogger(__name__)

ESC = "\x1b"
CTRL_C = "\x03"
CTRL_J = "\n"
CTRL_U = "\x15"

_ENTER_KEYS = {"\r", "\t", curses.KEY_ENTER}
_BACKSPACE_KEYS = {"\x7f", "\x08", curses.KEY_BACKSPACE}

# 256-color index and 8-color fallback for each style role.
_ROLE_COLORS: dict[str, tuple[int, int, bool]] = {
    "form.header": (99, curses.COLOR_BLUE, True),
    "form.error": (204, curses.COLOR_RED, True),
    "form.fill": (99, curses.COLOR_BLUE, False),
    "form.error_fill": (204, curses.COLOR_RED, False),
    "form.highlight": (212, curses.COLOR_MAGENTA, False),
    "form.help": (240, curses.COLOR_WHITE, False),
    "form.status": (36, curses.COLOR_GREEN, True),
}


def decode_key(key: str | int) -> FormEvent | None:
    """Map a single key from ``get_wch`` to a form event.

    Resize and the escape prefix need the screen and are handled by the caller.
    """

    if key in (ESC, CTRL_C):
        return Cancel()
    if key in _ENTER_KEYS:
        return Advance()
    if key == curses.KEY_BTAB:
        return Retreat()
    if key == CTRL_J:
        return InsertText("\n")
    if key in _BACKSPACE_KEYS:
        return DeleteBackward()
    if key == CTRL_U:
        return ClearField()
    if isinstance(key, str) and key.isprintable():
        return InsertText(key)
    return None


def build_palette() -> dict[str, int]:
    """Create curses attributes for each style role. Requires an initialized screen."""

    palette: dict[str, int] = {}
    if not curses.has_colors():
        for role, (_, _, bold) in _ROLE_COLORS.items():
            palette[role] = curses.A_BOLD if bold else curses.A_NORMAL
        return palette

    curses.start_color()
    curses.use_default_colors()
    rich_colors = curses.COLORS >= 256
    for pair, (role, (extended, basic, bold)) in enumerate(_ROLE_COLORS.items(), start=1):
        curses.init_pair(pair, extended if rich_colors else basic, -1)
        palette[role] = curses.color_pair(pair) | (curses.A_BOLD if bold else curses.A_NORMAL)
    return palette


def draw(screen: Any, view: Text, palette: dict[str, int]) -> None:
    """Paint a rendered view, clipped to the screen."""

    screen.erase()
    max_y, max_x = screen.getmaxyx()
    for y, line in enumerate(view.split("\n")):
        if y >= max_y:
            break
        plain = _clip(line.plain, max_x - 1)
        if not plain:
            continue
        screen.addstr(y, 0, plain, _attr(palette, line.style))
        for span in line.spans:
            end = min(span.end, len(plain))
            if span.start < end:
                # Span offsets are characters; curses positions are cells.
                column = cell_len(plain[: span.start])
                screen.addstr(y, column, plain[span.start : end], _attr(palette, span.style))
    screen.refresh()


def _clip(text: str, width: int) -> str:
    if width <= 0:
        return ""
    if cell_len(text) <= width:
        return text
    return chop_cells(text, width)[0]


def _attr(palette: dict[str, int], style: object) -> int:
    if isinstance(style, str):
        return palette.get(style, curses.A_NORMAL)
    return curses.A_NORMAL


def read_event(screen: Any) -> FormEvent | None:
    key = screen.get_wch()
    if key == curses.KEY_RESIZE:
        _, width = screen.getmaxyx()
        return Resize(width=width)
    if key == ESC:
        # alt+enter arrives as ESC immediately followed by enter; anything else is a cancel.
        screen.nodelay(True)
        try:
            follower = screen.get_wch()
        except curses.error:
            return Cancel()
        finally:
            screen.nodelay(False)
        if follower in ("\r", curses.KEY_ENTER):
            return InsertText("\n")
        return Cancel()
    return decode_key(key)


def run_loop(screen: Any, state: FormState, palette: dict[str, int]) -> FormState:
    """Process events until the form terminates and return the final state."""

    _, width = screen.getmaxyx()
    state, _ = handle_event(state, Resize(width=width))
    draw(screen, render(state), palette)

    while True:
        event = read_event(screen)
        if event is None:
            continue
        state, signal = handle_event(state, event)
        if signal is Signal.TERMINATE:
            return state
        draw(screen, render(state), palette)


def _session(screen: Any, fields: tuple[FieldSpec, ...] | None) -> FormState:
    curses.raw()
    curses.nonl()
    curses.set_escdelay(25)
    screen.keypad(True)
    with contextlib.suppress(curses.error):
        curses.curs_set(0)
    return run_loop(screen, initialize(fields), build_palette())


def run_form(fields: tuple[FieldSpec, ...] | None = None) -> FormState:
    """Run the interactive form on the controlling terminal."""

    logger.debug("Starting interactive form")
    state: FormState = curses.wrapper(_session, fields)
    logger.debug("Interactive form finished", extra={"status": state.status.value})
    return state
