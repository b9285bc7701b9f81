from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, List, Optional

from rich.text import Text

from term_select.config import settings
from term_select.exceptions import (
    ConfigurationError,
    EmptyMenuError,
    MissingHighlightError,
    SharedSubMenuError,
)

if TYPE_CHECKING:
    from term_select.terminal import Terminal

Action = Callable[["Terminal", Any], Any]


class Color(Enum):
    BLACK = "black"
    RED = "red"
    GREEN = "green"
    YELLOW = "yellow"
    BLUE = "blue"
    MAGENTA = "magenta"
    CYAN = "cyan"
    WHITE = "white"

    @property
    def style(self) -> str:
        """Rich style for a row highlighted with this background."""
        if self is Color.BLACK:
            return "white on black"
        return f"black on {self.value}"


@dataclass(frozen=True)
class Highlighter:
    """How the selected row is drawn.

    ``Highlighter()`` with nothing set is "unset"; use ``Highlighter.none()``
    to display a menu without any highlight on purpose.
    """

    color: Optional[Color] = None
    marker: Optional[str] = None
    explicit_none: bool = False

    def __post_init__(self) -> None:
        if self.marker is not None and not self.marker.strip():
            raise ConfigurationError("Highlight marker must be a visible character.")

    @classmethod
    def bg_color(cls, color: Color) -> Highlighter:
        return cls(color=color)

    @classmethod
    def character(cls, marker: str) -> Highlighter:
        return cls(marker=marker)

    @classmethod
    def both(cls, color: Color, marker: str) -> Highlighter:
        return cls(color=color, marker=marker)

    @classmethod
    def none(cls) -> Highlighter:
        return cls(explicit_none=True)

    @property
    def is_set(self) -> bool:
        return self.color is not None or self.marker is not None or self.explicit_none

    def apply(self, label: str) -> Text:
        prefix = f"{self.marker} " if self.marker else ""
        text = Text(f"{prefix}{label}")
        if self.color is not None:
            text.stylize(self.color.style)
        return text


@dataclass
class MenuItem:
    label: str
    action: Action
    sub_menu: Optional[MenuTree] = None


@dataclass
class MenuTree:
    items: List[MenuItem] = field(default_factory=list)
    highlighter: Highlighter = field(default_factory=Highlighter)

    def labels(self) -> List[str]:
        return [item.label for item in self.items]

    def validate(self, *, require_highlight: Optional[bool] = None) -> None:
        """Check this tree and every sub-menu below it before display.

        Raises:
            EmptyMenuError: a tree has no items.
            MissingHighlightError: a tree has an unset highlighter while
                highlighting is required.
            SharedSubMenuError: a sub-menu object is attached twice.
        """
        if require_highlight is None:
            require_highlight = settings.get_bool("require_highlight", True)
        seen = {id(self)}
        pending: list[tuple[MenuTree, str]] = [(self, "")]
        while pending:
            tree, path = pending.pop()
            if not tree.items:
                raise EmptyMenuError(path)
            if require_highlight and not tree.highlighter.is_set:
                raise MissingHighlightError(path)
            for item in tree.items:
                if item.sub_menu is None:
                    continue
                if id(item.sub_menu) in seen:
                    raise SharedSubMenuError(item.label)
                seen.add(id(item.sub_menu))
                child_path = f"{path} › {item.label}" if path else item.label
                pending.append((item.sub_menu, child_path))
