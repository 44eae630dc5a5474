"""Curses terminal surface: mode setup/teardown, key polling and painting."""

from __future__ import annotations

import curses
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Protocol

from hostmon.render import COLUMN_GAP, WidgetTree

KEY_ESCAPE = 27
# Milliseconds curses waits after ESC for the rest of an escape sequence.
ESCAPE_DELAY_MS = 25

# Curses colour-pair IDs
C_TITLE = 1
C_HEADER = 2
C_FOOTER = 3


class Terminal(Protocol):
    def enter(self) -> None: ...

    def restore(self) -> None: ...

    def size(self) -> tuple[int, int]: ...

    def draw(self, tree: WidgetTree, *, full_clear: bool) -> None: ...

    def poll_key(self, timeout_ms: int) -> int | None: ...


@contextmanager
def terminal_session(terminal: Terminal) -> Iterator[Terminal]:
    """Hold the terminal in dashboard mode; restore it exactly once on exit."""
    try:
        terminal.enter()
        yield terminal
    finally:
        terminal.restore()


# ── Colour helpers ─────────────────────────────────────────────────────────


def _init_colors() -> None:
    if not curses.has_colors():
        return
    curses.start_color()
    curses.use_default_colors()
    curses.init_pair(C_TITLE, curses.COLOR_CYAN, -1)
    curses.init_pair(C_HEADER, curses.COLOR_YELLOW, -1)
    curses.init_pair(C_FOOTER, curses.COLOR_WHITE, curses.COLOR_BLUE)


def _safe(win: Any, *args: Any) -> None:
    """addstr wrapper that swallows out-of-bounds errors."""
    try:
        win.addstr(*args)
    except curses.error:
        pass


def _clip(text: str, width: int) -> str:
    return text[: max(0, width)]


# ── Surface ────────────────────────────────────────────────────────────────


class CursesTerminal:
    """Alternate screen in cbreak mode with a hidden cursor."""

    def __init__(self) -> None:
        self._stdscr: Any = None

    @property
    def active(self) -> bool:
        return self._stdscr is not None

    def enter(self) -> None:
        self._stdscr = curses.initscr()
        curses.set_escdelay(ESCAPE_DELAY_MS)
        curses.noecho()
        curses.cbreak()
        self._stdscr.keypad(True)
        try:
            curses.curs_set(0)
        except curses.error:
            pass  # terminal cannot hide the cursor
        _init_colors()

    def restore(self) -> None:
        if self._stdscr is None:
            return
        stdscr, self._stdscr = self._stdscr, None
        try:
            stdscr.keypad(False)
            curses.nocbreak()
            curses.echo()
            try:
                curses.curs_set(1)
            except curses.error:
                pass
        finally:
            curses.endwin()

    def size(self) -> tuple[int, int]:
        height, width = self._stdscr.getmaxyx()
        return height, width

    def poll_key(self, timeout_ms: int) -> int | None:
        self._stdscr.timeout(timeout_ms)
        key = self._stdscr.getch()
        return None if key == -1 else key

    def draw(self, tree: WidgetTree, *, full_clear: bool) -> None:
        win = self._stdscr
        if full_clear:
            win.clear()
        else:
            win.erase()
        self._draw_table(win, tree)
        self._draw_footer(win, tree)
        win.refresh()

    def _draw_table(self, win: Any, tree: WidgetTree) -> None:
        table = tree.table
        area = table.area
        if area.height < 3 or area.width < 4:
            return
        try:
            sub = win.subwin(area.height, area.width, area.y, area.x)
            sub.box()
        except curses.error:
            return
        if table.title and len(table.title) + 4 < area.width:
            _safe(sub, 0, 2, table.title, curses.color_pair(C_TITLE) | curses.A_BOLD)

        value_x = 1 + table.label_width + COLUMN_GAP
        lines = [table.header, *table.rows]
        for i, (label, value) in enumerate(lines[: area.height - 2]):
            y = 1 + i
            attr = curses.color_pair(C_HEADER) | curses.A_BOLD if i == 0 else 0
            _safe(sub, y, 1, _clip(label, min(table.label_width, area.width - 2)), attr)
            if table.value_width > 0:
                _safe(sub, y, value_x, _clip(value, table.value_width), attr)

    def _draw_footer(self, win: Any, tree: WidgetTree) -> None:
        area = tree.footer.area
        if area.height < 1 or area.width < 1:
            return
        # Last cell of the screen cannot be written without an error.
        text = _clip(tree.footer.text.ljust(area.width), area.width - 1)
        _safe(win, area.y, area.x, text, curses.color_pair(C_FOOTER))
