"""Arrow-key driven, nested selection menus for the terminal."""

from loguru import logger

from term_select.__version__ import __version__
from term_select.exceptions import (
    ConfigurationError,
    EmptyMenuError,
    MissingHighlightError,
    SharedSubMenuError,
    TermSelectError,
    TerminalIOError,
)
from term_select.menu import (
    Color,
    Highlighter,
    MenuItem,
    MenuTree,
    display_loop,
    menu_entry,
    menu_tree,
)
from term_select.terminal import ConsoleTerminal, Key, Terminal

# Library code stays quiet unless the application calls setup_logging().
logger.disable("term_select")

__all__ = [
    "__version__",
    "Color",
    "ConfigurationError",
    "ConsoleTerminal",
    "EmptyMenuError",
    "Highlighter",
    "Key",
    "MenuItem",
    "MenuTree",
    "MissingHighlightError",
    "SharedSubMenuError",
    "TermSelectError",
    "Terminal",
    "TerminalIOError",
    "display_loop",
    "menu_entry",
    "menu_tree",
]
