"""ANSI terminal output utilities for the docreflow command line."""

import sys

ANSI_RESET  = "\033[0m"
ANSI_BOLD   = "\033[1m"
ANSI_RED    = "\033[31m"
ANSI_GREEN  = "\033[32m"
ANSI_YELLOW = "\033[33m"


def ansi(text: str, *codes: str) -> str:
    """Wrap text in ANSI escape codes when stderr is a TTY (no-op otherwise).

    Every coloured message goes to stderr, so stdout may be piped freely.
    """
    if not sys.stderr.isatty():
        return text
    return "".join(codes) + text + ANSI_RESET


def log(msg: str) -> None:
    """Print a progress line to stderr, keeping stdout for reflowed text."""
    print(msg, file=sys.stderr)


def log_error(msg: str) -> None:
    """Print an error line to stderr."""
    print(ansi("error:", ANSI_BOLD, ANSI_RED) + " " + msg, file=sys.stderr)
