"""Custom exceptions for menu construction and terminal I/O.

Exception Hierarchy:
    TermSelectError (base)
        ├── ConfigurationError
        │   ├── EmptyMenuError
        │   ├── MissingHighlightError
        │   └── SharedSubMenuError
        └── TerminalIOError

Usage:
    from term_select.exceptions import EmptyMenuError

    if not tree.items:
        raise EmptyMenuError()
"""


class TermSelectError(Exception):
    """Base exception for all term-select errors."""



class ConfigurationError(TermSelectError):
    """A menu tree was presented for display in an incomplete state."""



class EmptyMenuError(ConfigurationError):
    """A menu tree has no items to display."""

    def __init__(self, path: str = ""):
        self.path = path
        msg = "Menu has no items"
        if path:
            msg += f": {path}"
        super().__init__(msg)


class MissingHighlightError(ConfigurationError):
    """Neither a background color, a marker, nor an explicit opt-out was set."""

    def __init__(self, path: str = ""):
        self.path = path
        msg = (
            "Menu has no highlight style; set a background color, a marker, "
            "or Highlighter.none()"
        )
        if path:
            msg += f": {path}"
        super().__init__(msg)


class SharedSubMenuError(ConfigurationError):
    """The same sub-menu object is attached more than once in a tree."""

    def __init__(self, label: str):
        self.label = label
        super().__init__(f"Sub-menu under {label!r} is already attached elsewhere")


class TerminalIOError(TermSelectError):
    """The terminal failed while rendering or reading a key."""

    def __init__(self, operation: str, reason: str = ""):
        self.operation = operation
        self.reason = reason
        msg = f"Terminal {operation} failed"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)
