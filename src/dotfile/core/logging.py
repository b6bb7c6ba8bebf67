"""Logging configuration for dotfile using stdlib logging with rich."""

import logging
from collections.abc import MutableMapping
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

# Keyword arguments understood by the stdlib logging methods themselves.
_STDLIB_KWARGS = frozenset({"exc_info", "stack_info", "stacklevel", "extra"})


class StructuredLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that renders keyword arguments as context.

    Example:
        logger = get_logger(__name__)
        logger.info("Uploaded packages", system="pacman", count=312)
        # Output: Uploaded packages [count=312 system=pacman]
    """

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        """Split context data out of kwargs and append it to the message.

        Args:
            msg: Log message
            kwargs: Keyword arguments including context data

        Returns:
            Tuple of (formatted_message, cleaned_kwargs)
        """
        context = {k: v for k, v in kwargs.items() if k not in _STDLIB_KWARGS}
        clean_kwargs = {k: v for k, v in kwargs.items() if k in _STDLIB_KWARGS}

        if context:
            msg = f"{msg} [dim][[/dim]{_format_context(context)}[dim]][/dim]"

        return msg, clean_kwargs


def _format_context(context: dict[str, Any]) -> str:
    """Render context as sorted ``key=value`` pairs."""
    items = []
    for key, value in sorted(context.items()):
        if isinstance(value, (set, frozenset, list, tuple)):
            value = ",".join(sorted(str(v) for v in value))
        items.append(f"{key}={value}")
    return " ".join(items)


def setup_logging(verbose: bool = False, trace: bool = False) -> None:
    """Configure logging with rich's RichHandler on stderr.

    Args:
        verbose: Enable debug logging
        trace: Enable debug logging with source locations and local variables
    """
    log_level = logging.DEBUG if verbose or trace else logging.INFO

    console = Console(stderr=True)

    handler = RichHandler(
        console=console,
        show_time=verbose or trace,
        show_path=trace,
        markup=True,
        rich_tracebacks=True,
        tracebacks_show_locals=trace,
        log_time_format="[%Y-%m-%d %H:%M:%S]",
    )

    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[handler],
        force=True,
    )


def get_logger(name: str = "") -> StructuredLoggerAdapter:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__ of the module)

    Returns:
        Logger adapter that accepts context data as keyword arguments
    """
    logger = logging.getLogger(name) if name else logging.getLogger("dotfile")

    return StructuredLoggerAdapter(logger, {})
