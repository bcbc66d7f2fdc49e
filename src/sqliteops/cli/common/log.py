"""Logging setup for the CLI.

Library modules only create loggers; handlers are installed here, once, when
the CLI starts, so log records share the rich console used for output.
"""

from __future__ import annotations

import logging

from rich.logging import RichHandler

from sqliteops.cli.common.output import console


def _resolve_level(level: str) -> int:
    """Map a level name such as 'debug' to its logging constant."""
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved


def configure_logging(level: str = "WARNING") -> None:
    """Route `sqliteops` log records through a RichHandler at the given level."""
    root = logging.getLogger("sqliteops")
    root.setLevel(_resolve_level(level))
    if not any(isinstance(h, RichHandler) for h in root.handlers):
        root.addHandler(
            RichHandler(console=console, show_path=False, rich_tracebacks=True)
        )
