import argparse
from pathlib import Path

from term_select.exceptions import ConfigurationError, TerminalIOError
from term_select.logging import LoggerFactory, setup_logging
from term_select.menu import Color, display_loop, menu_entry, menu_tree
from term_select.terminal import ConsoleTerminal

DEMOS = ("hello", "sub-menu")


def _say(message):
    def action(terminal, carried):
        terminal.clear_screen()
        terminal.write_str(message)
        terminal.read_line()
        return None

    return action


def ask_name(terminal, carried):
    terminal.clear_screen()
    terminal.cursor_show()
    name = terminal.read_line("what's your name: ").strip()
    return name or None


def greet(terminal, carried):
    if carried:
        terminal.clear_screen()
        terminal.write_str(f"Hello {carried}")
        terminal.write_str("\n\nHit enter to continue")
        terminal.read_line()
    return None


def build_demo(name, *, color=None, marker=None):
    if name == "hello":
        return menu_tree(
            menu_entry("hello", _say("hello")),
            menu_entry("goodbye", _say("goodbye")),
            color=color or Color.GREEN,
            marker=marker,
        )
    if name == "sub-menu":
        printer = menu_tree(
            menu_entry("Hit enter to print", greet),
            color=Color.RED,
            marker=marker,
        )
        return menu_tree(
            menu_entry("Hit enter to tell us your name", ask_name, sub_menu=printer),
            color=color or Color.GREEN,
            marker=marker,
        )
    raise ValueError(f"Unknown demo: {name}")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Arrow-key terminal menu demos")
    parser.add_argument("--demo", choices=DEMOS, default="sub-menu", help="Demo menu to run")
    parser.add_argument("--color", help="Background color for the selected row")
    parser.add_argument("--marker", help="Glyph shown before the selected row")
    parser.add_argument("-d", "--debug", action="store_true", help="Enable verbose debug output")
    parser.add_argument("--trace", action="store_true", help="Also log every key press")
    parser.add_argument("--log-dir", type=Path, help="Directory for log files")
    args = parser.parse_args(argv)

    setup_logging(debug=args.debug, trace=args.trace, log_dir=args.log_dir)
    log = LoggerFactory.for_system()

    terminal = ConsoleTerminal()
    if not terminal.is_interactive():
        terminal.write_line("Error: the menu requires an interactive TTY (stdin/stdout).")
        return 2

    try:
        tree = build_demo(args.demo, color=args.color, marker=args.marker)
        log.info(f"Starting demo {args.demo!r}")
        display_loop(tree, terminal)
    except ConfigurationError as error:
        log.error(f"Invalid menu: {error}")
        terminal.write_line(f"Error: {error}")
        return 1
    except TerminalIOError as error:
        log.error(f"Terminal failure: {error}")
        return 1
    return 0
