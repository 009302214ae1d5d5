"""
require-deps
============

Static extraction of require(), require.resolve() and require.async()
dependencies, and @require comment annotations, from JavaScript source.
"""

from __future__ import annotations

from .dependency import RequireDependencyParser, parse, parse_with_callback
from .models import (
    DependencyCategory,
    ErrorCode,
    ParseError,
    ParseOptions,
    ParseResult,
)

__version__ = "1.0.0"

__all__ = [
    "parse",
    "parse_with_callback",
    "RequireDependencyParser",
    "DependencyCategory",
    "ErrorCode",
    "ParseError",
    "ParseOptions",
    "ParseResult",
]
