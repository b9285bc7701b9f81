from __future__ import annotations

import os
import sys
import uuid
from pathlib import Path
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from loguru import Logger

from loguru import logger

DEFAULT_LOG_DIR = Path(
    os.environ.get(
        "TERM_SELECT_LOG_DIR",
        Path.home() / ".local" / "state" / "term-select" / "logs",
    )
)

# Note: TRACE level already exists in loguru at level 5 (below DEBUG which is 10)


def _should_log_keypress(record) -> bool:
    """Filter key press logs - only show in TRACE mode."""
    message = record["message"].lower()
    tags = record["extra"].get("tags", [])

    if "keys" in tags:
        if "key" in message or "press" in message:
            return record["level"].no <= logger.level("TRACE").no

    return True


def _combined_filter(record) -> bool:
    """Combined filter for all log suppression rules."""
    return _should_log_keypress(record)


def setup_logging(
    *,
    debug: bool = False,
    trace: bool = False,
    log_dir: Path | None = None,
    console: bool = False,
) -> Logger:
    """
    Setup logging sinks for an interactive menu session.

    The menu owns the terminal while it runs, so the stderr sink is opt-in
    and everything else goes to rotating files. The package logs nothing
    until this is called.

    Log Files:
    - operations.log: INFO+ events (7 day retention)
    - debug.log: DEBUG+ events when --debug is enabled (3 day retention)
    - trace.log: TRACE+ events when --trace is enabled (1 day retention)

    Args:
        debug: Enable DEBUG level logging
        trace: Enable TRACE level logging (every key press)
        log_dir: Custom log directory (defaults to ~/.local/state/term-select/logs)
        console: Also log to stderr
    """
    logger.remove()
    logger.configure(extra={"session_id": "-", "tags": [], "source": "APP"})
    logger.enable("term_select")

    if trace:
        console_level = "TRACE"
    elif debug:
        console_level = "DEBUG"
    else:
        console_level = "WARNING"

    if console:
        logger.add(
            sys.stderr,
            level=console_level,
            backtrace=False,
            diagnose=False,
            filter=_combined_filter,
            colorize=True,
            format=(
                "<green>{time:HH:mm:ss}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{extra[source]: <10}</cyan> | "
                "{message}"
            ),
        )

    log_dir = log_dir or DEFAULT_LOG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)

    logger.add(
        log_dir / "operations.log",
        level="INFO",
        rotation="5 MB",
        retention="7 days",
        compression="zip",
        backtrace=False,
        diagnose=False,
        filter=_combined_filter,
        format=(
            "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
            "{level: <8} | "
            "{extra[source]: <10} | "
            "{extra[session_id]: <15} | "
            "{message}"
        ),
    )

    if debug or trace:
        logger.add(
            log_dir / "debug.log",
            level="DEBUG",
            rotation="10 MB",
            retention="3 days",
            compression="zip",
            backtrace=True,
            diagnose=True,
            filter=_combined_filter,
            format=(
                "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
                "{level: <8} | "
                "{extra[source]: <10} | "
                "{extra[session_id]: <15} | "
                "{extra[tags]} | "
                "{message}"
            ),
        )

    if trace:
        logger.add(
            log_dir / "trace.log",
            level="TRACE",
            rotation="50 MB",
            retention="1 day",
            compression="zip",
            backtrace=False,
            diagnose=False,
            format=(
                "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
                "{extra[source]: <10} | "
                "{extra[session_id]: <15} | "
                "{message}"
            ),
        )

    return logger


def get_logger(
    *,
    session_id: str | None = None,
    tags: Iterable[str] | None = None,
    source: str | None = None,
) -> Logger:
    """
    Get a logger with bound context.

    Args:
        session_id: Identifier of the menu session
        tags: Tags for filtering (e.g., ["menu", "keys"])
        source: Source component (e.g., "menu", "terminal")

    Returns:
        Logger with bound context
    """
    extras: dict[str, object] = {}
    if session_id is not None:
        extras["session_id"] = session_id
    if tags is not None:
        extras["tags"] = list(tags)
    if source is not None:
        extras["source"] = source
    return logger.bind(**extras)


def new_session_id() -> str:
    return f"menu-{uuid.uuid4().hex[:8]}"


class LoggerFactory:
    """
    Factory for creating component loggers with automatic context.
    """

    @staticmethod
    def for_menu(session_id: str | None = None) -> Logger:
        """Logger for menu navigation and action dispatch."""
        if session_id is None:
            session_id = "-"
        return logger.bind(
            source="menu", tags=["ui", "menu", "keys"], session_id=session_id
        )

    @staticmethod
    def for_terminal() -> Logger:
        """Logger for the terminal adapter."""
        return logger.bind(source="terminal", tags=["terminal"])

    @staticmethod
    def for_system() -> Logger:
        """Logger for system operations (startup, shutdown, config)."""
        return logger.bind(source="system", tags=["system"])
