"""Tests for the demo command line entry point."""

import pytest
from loguru import logger

from term_select import main as main_module
from term_select.exceptions import MissingHighlightError
from term_select.menu.model import Color, Highlighter
from term_select.terminal import Key


@pytest.fixture
def run_main(tmp_path, monkeypatch, fake_terminal_factory):
    """Run main() against a scripted terminal, returning (exit_code, terminal)."""

    def _run(argv, keys=(), lines=(), interactive=True):
        terminal = fake_terminal_factory(keys, lines, interactive=interactive)
        monkeypatch.setattr(main_module, "ConsoleTerminal", lambda: terminal)
        code = main_module.main([*argv, "--log-dir", str(tmp_path / "logs")])
        return code, terminal

    return _run


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger.remove()


class TestBuildDemo:
    """Tests for the demo menu trees."""

    def test_hello_demo(self):
        tree = main_module.build_demo("hello")
        assert tree.labels() == ["hello", "goodbye"]
        assert tree.highlighter == Highlighter.bg_color(Color.GREEN)
        tree.validate()

    def test_sub_menu_demo(self):
        tree = main_module.build_demo("sub-menu", marker=">")
        assert tree.labels() == ["Hit enter to tell us your name"]
        sub = tree.items[0].sub_menu
        assert sub.labels() == ["Hit enter to print"]
        assert sub.highlighter == Highlighter.both(Color.RED, ">")
        tree.validate()

    def test_color_override(self):
        tree = main_module.build_demo("hello", color="blue")
        assert tree.highlighter.color is Color.BLUE

    def test_unknown_demo(self):
        with pytest.raises(ValueError, match="Unknown demo"):
            main_module.build_demo("cargo")


class TestDemoActions:
    """Tests for the demo actions and the value they carry."""

    def test_ask_name_returns_stripped_name(self, fake_terminal_factory):
        terminal = fake_terminal_factory(lines=["  Ada  "])
        assert main_module.ask_name(terminal, None) == "Ada"
        assert ("read_line", "what's your name: ") in terminal.events

    def test_ask_name_blank_is_none(self, fake_terminal_factory):
        terminal = fake_terminal_factory(lines=[""])
        assert main_module.ask_name(terminal, None) is None

    def test_greet_uses_carried_name(self, fake_terminal_factory):
        terminal = fake_terminal_factory(lines=[""])
        assert main_module.greet(terminal, "Ada") is None
        assert terminal.footers[0] == "Hello Ada"

    def test_greet_without_name_does_nothing(self, fake_terminal_factory):
        terminal = fake_terminal_factory()
        main_module.greet(terminal, None)
        assert terminal.events == []


class TestMain:
    """Tests for main()."""

    def test_non_interactive_terminal(self, run_main):
        code, terminal = run_main([], interactive=False)
        assert code == 2
        assert "interactive TTY" in str(terminal.events[0][1])

    def test_left_exits_cleanly(self, run_main):
        code, terminal = run_main(["--demo", "hello"], keys=[Key.ARROW_LEFT])
        assert code == 0
        assert terminal.drawn_frames() == [["hello", "goodbye"]]

    def test_sub_menu_demo_greets_by_name(self, run_main):
        keys = [Key.ENTER, Key.ENTER, Key.ARROW_LEFT, Key.ARROW_LEFT]
        code, terminal = run_main(["--demo", "sub-menu"], keys=keys, lines=["Ada", ""])
        assert code == 0
        assert "Hello Ada" in terminal.footers

    def test_escape_exits_process(self, run_main):
        with pytest.raises(SystemExit) as excinfo:
            run_main(["--demo", "hello", "--marker", ">"], keys=[Key.ESCAPE])
        assert excinfo.value.code == 0

    def test_invalid_color_is_reported(self, run_main):
        code, terminal = run_main(["--color", "purple"])
        assert code == 1
        assert any("Unknown color" in str(event[1]) for event in terminal.events if len(event) > 1)

    def test_terminal_failure_returns_error(self, run_main):
        code, terminal = run_main(["--demo", "hello"], keys=[])
        assert code == 1

    def test_configuration_error_is_reported(self, run_main, monkeypatch):
        def broken_loop(tree, terminal):
            raise MissingHighlightError()

        monkeypatch.setattr(main_module, "display_loop", broken_loop)
        code, _ = run_main([])
        assert code == 1
