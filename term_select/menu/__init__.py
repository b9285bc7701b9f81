from term_select.menu.definitions import menu_entry, menu_tree, parse_color, passthrough
from term_select.menu.model import Color, Highlighter, MenuItem, MenuTree
from term_select.menu.navigator import (
    Frame,
    MenuCursor,
    Transition,
    display_loop,
    draw_frame,
    render_frame,
)

__all__ = [
    "Color",
    "Frame",
    "Highlighter",
    "MenuCursor",
    "MenuItem",
    "MenuTree",
    "Transition",
    "display_loop",
    "draw_frame",
    "menu_entry",
    "menu_tree",
    "parse_color",
    "passthrough",
    "render_frame",
]
