"""
Require Dependency Parser
=========================

Extracts require(), require.resolve() and require.async() dependencies from
JavaScript source, plus @require annotations in comments.

Stages:
1. Tokenize (syntax errors -> ERROR_PARSE_JS)
2. Walk the tree with the dependency matcher (policy violations -> WRONG_USAGE_REQUIRE)
3. Scan comments when comment_require is enabled
4. Assemble deduplicated buckets

Usage:
    from requiredeps import ParseOptions, parse

    result = parse("lib/index.js", content, ParseOptions(require_resolve=True))
    print(result.require, result.resolve, result.async_)
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from pathlib import Path

from ..code_frame import fixes_line_code, print_code
from ..models import DependencyBuckets, ErrorCode, ParseError, ParseOptions, ParseResult
from ..tokenizer import TokenizeError, tokenize
from .comments import parse_comments
from .matcher import RequireUsageError
from .walker import collect_dependencies

logger = logging.getLogger(__name__)

ParseCallback = Callable[[ParseError | None, ParseResult | None], None]


def parse(path: str, content: str, options: ParseOptions | None = None) -> ParseResult:
    """
    Extract the dependencies of one file.

    Args:
        path: File path, used only in error messages and the result
        content: File content
        options: Extraction switches (defaults when None)

    Returns:
        ParseResult with deduplicated require/resolve/async lists

    Raises:
        ParseError: ERROR_PARSE_JS or WRONG_USAGE_REQUIRE
    """
    options = options or ParseOptions()

    try:
        tree = tokenize(content)
    except TokenizeError as e:
        parsed = fixes_line_code(str(e))
        message = f'Error parsing "{path}": {parsed.message}'
        if parsed.line:
            message += "\n\n" + print_code(content, parsed.line)
        raise ParseError(ErrorCode.ERROR_PARSE_JS, message, {"path": path, "error": e}) from e

    buckets = DependencyBuckets()
    try:
        collect_dependencies(tree, buckets, options)
    except RequireUsageError as e:
        parsed = fixes_line_code(str(e))
        message = (
            "Error parsing dependencies: "
            + parsed.message
            + "\n\n"
            + print_code(content, e.line, e.column)
        )
        raise ParseError(ErrorCode.WRONG_USAGE_REQUIRE, message, {"path": path, "error": e}) from e

    if options.comment_require:
        parse_comments(tree.comments, buckets, options)

    result = ParseResult.from_buckets(path, buckets)
    logger.debug(
        "Parsed %s: %d require, %d resolve, %d async",
        path,
        len(result.require),
        len(result.resolve),
        len(result.async_),
    )
    return result


def parse_with_callback(
    path: str,
    content: str,
    options: ParseOptions | None,
    callback: ParseCallback,
) -> None:
    """
    Callback flavour of parse(): ``callback(error, result)``.

    The callback runs before this function returns. Exactly one of its
    arguments is None.
    """
    try:
        result = parse(path, content, options)
    except ParseError as e:
        callback(e, None)
        return
    callback(None, result)


class RequireDependencyParser:
    """Parses JavaScript files with one fixed set of ParseOptions."""

    def __init__(self, options: ParseOptions | None = None):
        """
        Initialize the parser.

        Args:
            options: Extraction switches shared by every file parsed
        """
        self.options = options or ParseOptions()

    def parse(self, path: str, content: str) -> ParseResult:
        """Parse already-loaded content. Raises ParseError."""
        return parse(path, content, self.options)

    def parse_file(self, file_path: Path | str) -> ParseResult:
        """
        Read and parse a file.

        Raises:
            OSError / UnicodeDecodeError: If the file cannot be read as UTF-8
            ParseError: If the content cannot be parsed
        """
        file_path = Path(file_path)
        content = file_path.read_text(encoding="utf-8")
        return self.parse(str(file_path), content)

    def parse_files(self, files: Iterable[Path | str]) -> dict[str, ParseResult | ParseError]:
        """
        Parse several files, keeping going past parse failures.

        Args:
            files: Paths of the files to parse

        Returns:
            Mapping of path to its ParseResult, or to the ParseError it raised
        """
        results: dict[str, ParseResult | ParseError] = {}
        for file_path in files:
            key = str(file_path)
            try:
                results[key] = self.parse_file(file_path)
            except ParseError as e:
                logger.warning("Skipping %s: %s", key, e.code.value)
                results[key] = e
        return results
