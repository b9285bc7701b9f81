"""
Pytest configuration and shared fixtures for term-select tests.

This module provides a scripted terminal and settings isolation used across
all test modules.
"""

from typing import Iterable, List, Optional

import pytest

from term_select.config import settings
from term_select.exceptions import TerminalIOError
from term_select.terminal import Key


# ==============================================================================
# Terminal Fixtures
# ==============================================================================


class FakeTerminal:
    """Terminal stub that replays scripted keys and records everything drawn.

    When the scripted keys run out, ``read_key`` fails with a
    TerminalIOError so a runaway loop ends the test instead of hanging it.
    """

    def __init__(
        self,
        keys: Optional[Iterable[Key]] = None,
        lines: Optional[Iterable[str]] = None,
        *,
        interactive: bool = True,
    ) -> None:
        self.keys: List[Key] = list(keys or [])
        self.lines: List[str] = list(lines or [])
        self.interactive = interactive
        self.events: List[tuple] = []
        self.frames: List[list] = []
        self.footers: List[str] = []
        self.cursor_visible = True

    def is_interactive(self) -> bool:
        return self.interactive

    def clear_screen(self) -> None:
        self.events.append(("clear",))
        self.frames.append([])

    def write_line(self, text) -> None:
        self.events.append(("write_line", text))
        if not self.frames:
            self.frames.append([])
        self.frames[-1].append(text)

    def write_str(self, text) -> None:
        self.events.append(("write_str", text))
        self.footers.append(str(text))

    def read_key(self) -> Key:
        if not self.keys:
            raise TerminalIOError("read_key", "no more scripted keys")
        key = self.keys.pop(0)
        self.events.append(("read_key", key))
        return key

    def read_line(self, prompt: str = "") -> str:
        self.events.append(("read_line", prompt))
        if self.lines:
            return self.lines.pop(0)
        return ""

    def cursor_show(self) -> None:
        self.events.append(("cursor_show",))
        self.cursor_visible = True

    def cursor_hide(self) -> None:
        self.events.append(("cursor_hide",))
        self.cursor_visible = False

    # Helpers ----------------------------------------------------------------
    def drawn_frames(self) -> List[List[str]]:
        """Frames that had at least one label, as plain strings."""
        return [[str(line) for line in frame] for frame in self.frames if frame]

    def last_frame(self) -> List[str]:
        return self.drawn_frames()[-1]


@pytest.fixture
def fake_terminal_factory():
    """Fixture returning the FakeTerminal class for custom construction."""
    return FakeTerminal


# ==============================================================================
# Settings Fixtures
# ==============================================================================


@pytest.fixture(autouse=True)
def default_settings(tmp_path, monkeypatch):
    """Isolate every test from the user's settings file."""
    monkeypatch.setattr(settings, "SETTINGS_PATH", tmp_path / "settings.json")
    settings.settings_store.values = dict(settings.DEFAULT_SETTINGS)
    yield settings.settings_store
    settings.settings_store.values = dict(settings.DEFAULT_SETTINGS)


@pytest.fixture
def temp_settings_file(tmp_path):
    """Fixture providing a settings file path inside a temp directory."""
    return tmp_path / "config" / "settings.json"


@pytest.fixture
def sample_settings_data():
    """Fixture providing a sample settings file payload."""
    return {
        "highlight_color": "blue",
        "highlight_marker": "*",
        "require_highlight": False,
    }
