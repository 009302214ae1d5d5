"""
Code Frame Rendering
====================

Turns raw error messages into a (message, line) pair and renders the
source lines around an error location.
"""

from __future__ import annotations

import re
from typing import NamedTuple

# "Line 12: Unexpected token }"
LINE_PREFIX_PATTERN = re.compile(r"^Line (\d+):\s*(.*)$", re.DOTALL)

CONTEXT_LINES = 1


class LineMessage(NamedTuple):
    message: str
    line: int | None


def fixes_line_code(message: str) -> LineMessage:
    """
    Split a "Line N: message" string into its parts.

    Args:
        message: Raw error message

    Returns:
        LineMessage with the bare message and the line number, or None for
        the line when the message carries no "Line N:" prefix.
    """
    match = LINE_PREFIX_PATTERN.match(message)
    if not match:
        return LineMessage(message, None)
    return LineMessage(match.group(2), int(match.group(1)))


def print_code(content: str, line: int, column: int | None = None) -> str:
    """
    Render the lines around ``line`` with a gutter and a marker.

    The target line is prefixed with ">" and, when ``column`` is given, a
    caret is drawn under that column. Out-of-range lines are clamped.

    Args:
        content: Full source text
        line: 1-based line number
        column: 0-based column, optional

    Returns:
        The rendered snippet, without a trailing newline.
    """
    # Split on "\n" only so numbering matches the tokenizer's rows
    lines = [text.rstrip("\r") for text in content.split("\n")]
    line = min(max(line, 1), len(lines))

    start = max(line - CONTEXT_LINES, 1)
    end = min(line + CONTEXT_LINES, len(lines))
    width = len(str(end))

    rendered = []
    for number in range(start, end + 1):
        text = lines[number - 1]
        marker = ">" if number == line else " "
        rendered.append(f"{marker} {number:>{width}} | {text}".rstrip())

        if number == line and column is not None:
            # Keep tabs so the caret lines up with the source text
            padding = "".join("\t" if ch == "\t" else " " for ch in text[:column])
            rendered.append(f"  {' ' * width} | {padding}^")

    return "\n".join(rendered)
