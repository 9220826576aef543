"""Shared logging helpers for discshelf."""

from __future__ import annotations

import logging

# Third-party loggers that are chatty at INFO (one line per HTTP request).
_QUIET_LOGGERS = ("httpx", "httpcore", "hishel")


def configure_logging(*, level: int | str = logging.INFO, force: bool = False) -> None:
    """Initialise the root logger once for CLI use.

    ``level`` accepts a level number or name (``"DEBUG"``). Pass ``force=True`` to
    reconfigure during tests.
    """

    resolved = level.upper() if isinstance(level, str) else level
    logging.basicConfig(
        level=resolved,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    if logging.getLogger().getEffectiveLevel() > logging.DEBUG:
        for name in _QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
