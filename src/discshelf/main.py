#!/usr/bin/env python3

from __future__ import annotations

from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from discshelf.ui.cli import main

if TYPE_CHECKING:
    from types import FrameType


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    print("\nClosed by user (Ctrl+C)")  # noqa: T201
    raise SystemExit(130)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
