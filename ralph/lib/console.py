"""
Colored status lines for the loop.

Success is green, warnings are yellow, errors are red. Color is dropped when
stdout is not a terminal or NO_COLOR is set.
"""

import os
import sys

# ANSI color codes
COLORS = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "green": "\033[32m",
    "red": "\033[31m",
    "yellow": "\033[33m",
}


def use_color(stream) -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def colorize(message: str, color: str, stream=None) -> str:
    stream = stream or sys.stdout
    if not use_color(stream):
        return message
    return f"{COLORS[color]}{message}{COLORS['reset']}"


def info(message: str = "") -> None:
    print(message)


def success(message: str) -> None:
    print(colorize(message, "green", sys.stdout))


def warning(message: str) -> None:
    print(colorize(message, "yellow", sys.stderr), file=sys.stderr)


def error(message: str) -> None:
    print(colorize(message, "red", sys.stderr), file=sys.stderr)


def banner(message: str) -> None:
    print(colorize(message, "bold", sys.stdout))
