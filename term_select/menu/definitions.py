"""Helpers for building menu trees.

Build the whole tree up front and hand the root to ``display_loop``::

    main = menu_tree(
        menu_entry("Tell us your name", ask_name, sub_menu=menu_tree(
            menu_entry("Print it", greet),
            color="red",
        )),
        color=Color.GREEN,
    )

A sub-menu belongs to exactly one item. To show the same entries under two
parents, build the sub-menu twice.
"""

from __future__ import annotations

from typing import Any, Optional, Union

from term_select.config import settings
from term_select.exceptions import ConfigurationError
from term_select.menu.model import Action, Color, Highlighter, MenuItem, MenuTree


def passthrough(terminal, carried: Any) -> Any:
    return carried


def parse_color(value: Union[Color, str]) -> Color:
    if isinstance(value, Color):
        return value
    try:
        return Color(str(value).strip().lower())
    except ValueError:
        names = ", ".join(color.value for color in Color)
        raise ConfigurationError(f"Unknown color {value!r}; expected one of {names}") from None


def menu_entry(
    label: str,
    action: Optional[Action] = None,
    *,
    sub_menu: Optional[MenuTree] = None,
) -> MenuItem:
    if not label or not label.strip():
        raise ConfigurationError("Menu entries must have a label.")
    return MenuItem(label=label, action=action or passthrough, sub_menu=sub_menu)


def menu_tree(
    *items: MenuItem,
    color: Union[Color, str, None] = None,
    marker: Optional[str] = None,
    highlight: Optional[Highlighter] = None,
) -> MenuTree:
    if highlight is not None:
        if color is not None or marker is not None:
            raise ConfigurationError(
                "Pass either highlight= or color/marker to menu_tree, not both."
            )
        return MenuTree(items=list(items), highlighter=highlight)
    if color is None:
        color = settings.get_setting("highlight_color")
    if marker is None:
        marker = settings.get_setting("highlight_marker")
    highlight = Highlighter(
        color=parse_color(color) if color is not None else None,
        marker=marker or None,
    )
    return MenuTree(items=list(items), highlighter=highlight)
