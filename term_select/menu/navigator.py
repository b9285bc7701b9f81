from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple

from rich.text import Text

from term_select.config import settings
from term_select.exceptions import EmptyMenuError
from term_select.logging import LoggerFactory, new_session_id
from term_select.menu.model import MenuTree
from term_select.terminal import ConsoleTerminal, Key, Terminal


class Transition(Enum):
    MOVED = "moved"
    ACTIVATE = "activate"
    BACK = "back"
    QUIT = "quit"
    IGNORED = "ignored"


@dataclass
class MenuCursor:
    """Highlighted row of one menu level. Up and Down wrap around."""

    count: int
    index: int = 0

    def __post_init__(self) -> None:
        if self.count < 1:
            raise EmptyMenuError()
        self.index %= self.count

    def move_down(self) -> None:
        self.index = (self.index + 1) % self.count

    def move_up(self) -> None:
        self.index = (self.index - 1 + self.count) % self.count

    def dispatch(self, key: Key) -> Transition:
        if key is Key.ARROW_DOWN:
            self.move_down()
            return Transition.MOVED
        if key is Key.ARROW_UP:
            self.move_up()
            return Transition.MOVED
        if key is Key.ENTER:
            return Transition.ACTIVATE
        if key is Key.ARROW_LEFT:
            return Transition.BACK
        if key is Key.ESCAPE:
            return Transition.QUIT
        return Transition.IGNORED


@dataclass(frozen=True)
class Frame:
    lines: Tuple[Text, ...]
    footer: str
    selected: int


def render_frame(tree: MenuTree, index: int, footer: Optional[str] = None) -> Frame:
    if footer is None:
        footer = settings.get_setting("footer_hint", settings.DEFAULT_FOOTER_HINT)
    lines = tuple(
        tree.highlighter.apply(item.label) if position == index else Text(item.label)
        for position, item in enumerate(tree.items)
    )
    return Frame(lines=lines, footer=footer, selected=index)


def draw_frame(terminal: Terminal, frame: Frame) -> None:
    # Full redraw every time; nothing from the previous frame is kept.
    terminal.cursor_hide()
    terminal.clear_screen()
    for line in frame.lines:
        terminal.write_line(line)
    terminal.write_str(f"\n{frame.footer}")


def display_loop(
    tree: MenuTree,
    terminal: Optional[Terminal] = None,
    carried: Any = None,
) -> None:
    """Show ``tree`` and run until the user leaves it.

    ``carried`` is handed to each action the first time it runs. Whatever an
    action returns is handed to that same action when it is chosen again,
    and becomes the starting value of the sub-menu it opens. Values never
    move between sibling items or back up to a parent menu.

    Left returns to the caller. Escape shows the cursor again and exits the
    process with status 0 from whichever level is active.

    Raises:
        ConfigurationError: the tree is empty or has no highlight style.
        TerminalIOError: drawing or reading a key failed.
    """
    tree.validate()
    if terminal is None:
        terminal = ConsoleTerminal()
    log = LoggerFactory.for_menu(new_session_id())
    log.info(f"Menu session started with {len(tree.items)} top-level items")
    _navigate(tree, terminal, carried, log, depth=0)
    terminal.cursor_show()
    log.info("Menu session finished")


def _navigate(tree: MenuTree, terminal: Terminal, carried: Any, log, *, depth: int) -> None:
    cursor = MenuCursor(count=len(tree.items))
    # Each item sees the tree's starting value until it has run once, then
    # its own last result. Siblings never see each other's results.
    results: dict[int, Any] = {}
    while True:
        draw_frame(terminal, render_frame(tree, cursor.index))
        key = terminal.read_key()
        log.trace(f"Key press {key.value} at depth={depth} index={cursor.index}")

        transition = cursor.dispatch(key)
        if transition is Transition.ACTIVATE:
            item = tree.items[cursor.index]
            log.debug(f"Running action for {item.label!r} at depth={depth}")
            result = item.action(terminal, results.get(cursor.index, carried))
            results[cursor.index] = result
            if item.sub_menu is not None:
                log.debug(f"Entering sub-menu {item.label!r} at depth={depth + 1}")
                _navigate(item.sub_menu, terminal, result, log, depth=depth + 1)
                log.debug(f"Back from sub-menu {item.label!r} to depth={depth}")
        elif transition is Transition.BACK:
            terminal.clear_screen()
            return
        elif transition is Transition.QUIT:
            log.info(f"Quit requested at depth={depth}")
            terminal.cursor_show()
            sys.exit(0)
