"""
Dependency Extraction Models
============================

Data structures shared by the tokenizer, the dependency walker, the comment
scanner and the parse orchestrator.

This module provides:
- Enums for dependency categories and error codes
- ParseOptions: the switches that govern extraction
- SyntaxTree / Comment / SourceLocation: the tokenizer's output
- DependencyBuckets: per-category collection during a parse
- ParseResult / ParseError: the two mutually exclusive parse outcomes
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from enum import Enum
from functools import cached_property
from typing import Any


class DependencyCategory(str, Enum):
    """
    The three ways a file can declare a dependency.

    Attributes:
        NORMAL: require('x')
        RESOLVE: require.resolve('x')
        ASYNC: require.async('x', callback)
    """

    NORMAL = "normal"
    RESOLVE = "resolve"
    ASYNC = "async"


class ErrorCode(str, Enum):
    """Codes carried by ParseError."""

    ERROR_PARSE_JS = "ERROR_PARSE_JS"
    WRONG_USAGE_REQUIRE = "WRONG_USAGE_REQUIRE"


@dataclass
class ParseOptions:
    """
    Switches that govern dependency extraction.

    Attributes:
        comment_require: Scan comments for @require annotations
        require_resolve: Recognize require.resolve() in code and comments
        require_async: Recognize require.async() in code and comments
        check_require_length: Treat arity violations as errors instead of ignoring them
        allow_non_literal_require: Skip non-literal arguments instead of failing
    """

    comment_require: bool = True
    require_resolve: bool = True
    require_async: bool = True
    check_require_length: bool = False
    allow_non_literal_require: bool = False

    @classmethod
    def option_names(cls) -> list[str]:
        return [f.name for f in fields(cls)]

    def to_dict(self) -> dict[str, bool]:
        """Convert to JSON-serializable dict."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ParseOptions:
        """Load from dict, ignoring keys that are not options."""
        known = set(cls.option_names())
        return cls(**{key: bool(value) for key, value in data.items() if key in known})

    def merged(self, overrides: dict[str, Any]) -> ParseOptions:
        """Return a copy with the non-None values of ``overrides`` applied."""
        data = self.to_dict()
        data.update({key: value for key, value in overrides.items() if value is not None})
        return ParseOptions.from_dict(data)


@dataclass(frozen=True)
class SourceLocation:
    """A position in the caller's content (1-based line, 0-based column)."""

    line: int
    column: int = 0


@dataclass(frozen=True)
class Comment:
    """A comment's text without its delimiters, plus where it starts."""

    value: str
    loc: SourceLocation


@dataclass
class SyntaxTree:
    """
    Output of the tokenizer.

    Attributes:
        root: tree-sitter root node of the wrapped source
        source: The wrapped source as UTF-8 bytes
        prefix_length: Byte length of the wrapper prefix on line 1
        comments: Every comment in document order
    """

    root: Any
    source: bytes
    prefix_length: int = 0
    comments: list[Comment] = field(default_factory=list)

    @cached_property
    def lines(self) -> list[bytes]:
        return self.source.split(b"\n")

    @property
    def line_count(self) -> int:
        """Number of lines in the caller's content (the wrapper adds one)."""
        return max(len(self.lines) - 1, 1)

    def locate(self, point: tuple[int, int]) -> SourceLocation:
        """
        Map a tree-sitter (row, byte column) point back onto the caller's content.

        Points inside the wrapper suffix are clamped to the end of the last
        content line.
        """
        row, column = point[0], point[1]
        if row + 1 > self.line_count:
            row = self.line_count - 1
            column = len(self.lines[row])

        line_bytes = self.lines[row]
        if row == 0:
            line_bytes = line_bytes[self.prefix_length:]
            column = max(column - self.prefix_length, 0)

        text = line_bytes[:column].decode("utf-8", errors="replace")
        return SourceLocation(line=row + 1, column=len(text))


@dataclass
class DependencyBuckets:
    """Raw values collected per category; duplicates allowed until unique()."""

    normal: list[str] = field(default_factory=list)
    resolve: list[str] = field(default_factory=list)
    async_: list[str] = field(default_factory=list)

    def bucket(self, category: DependencyCategory) -> list[str]:
        if category is DependencyCategory.NORMAL:
            return self.normal
        if category is DependencyCategory.RESOLVE:
            return self.resolve
        return self.async_

    def add(self, category: DependencyCategory, value: str) -> None:
        self.bucket(category).append(value)

    @staticmethod
    def unique(values: list[str]) -> list[str]:
        """Drop duplicates, keeping first-seen order."""
        return list(dict.fromkeys(values))


@dataclass
class ParseResult:
    """Dependencies of one file."""

    path: str
    require: list[str] = field(default_factory=list)
    resolve: list[str] = field(default_factory=list)
    async_: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "path": self.path,
            "require": list(self.require),
            "resolve": list(self.resolve),
            "async": list(self.async_),
        }

    @classmethod
    def from_buckets(cls, path: str, buckets: DependencyBuckets) -> ParseResult:
        return cls(
            path=path,
            require=DependencyBuckets.unique(buckets.normal),
            resolve=DependencyBuckets.unique(buckets.resolve),
            async_=DependencyBuckets.unique(buckets.async_),
        )


class ParseError(Exception):
    """
    A terminal parse failure.

    Attributes:
        code: ERROR_PARSE_JS for syntax errors, WRONG_USAGE_REQUIRE for policy violations
        message: Summary line, then a blank line and a code snippet when a location is known
        data: {"path": ..., "error": <the underlying exception>}
    """

    def __init__(self, code: ErrorCode, message: str, data: dict[str, Any]):
        super().__init__(message)
        self.code = code
        self.message = message
        self.data = data

    @property
    def path(self) -> str:
        return self.data.get("path", "")

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "code": self.code.value,
            "message": self.message,
            "data": {
                "path": self.path,
                "error": str(self.data.get("error", "")),
            },
        }
