"""
Dependency Node Matcher
=======================

Decides whether a syntax node is a dependency-declaring call and, if so,
validates its argument list against ParseOptions.

Recognized call shapes (purely syntactic, no scope analysis):
- require('x')           -> DependencyCategory.NORMAL
- require.resolve('x')   -> DependencyCategory.RESOLVE (when require_resolve)
- require.async('x', cb) -> DependencyCategory.ASYNC   (when require_async)

A local variable named ``require`` is indistinguishable from the real one
and is matched as well.

Usage:
    result = check_dependency_node(node, options, tree.locate)
    if result is None:
        ...  # not a dependency call
    elif result.outcome is Outcome.COLLECTED:
        buckets.add(result.category, result.value)
    elif result.outcome is Outcome.VIOLATION:
        raise result.violation
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..models import DependencyCategory, ParseOptions, SourceLocation

REQUIRE_NAME = "require"

# Node types that correspond to an ESTree Literal
LITERAL_TYPES = frozenset({"string", "number", "true", "false", "null", "regex"})

ARITY_MISSING_MESSAGE = "Method `require` accepts one and only one parameter."
ARITY_EXCESS_MESSAGE = "Method `require` should not contain more than one parameter."
NON_LITERAL_MESSAGE = "Method `require` only accepts a string literal."

SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
}

Locator = Callable[[tuple[int, int]], SourceLocation]


class Outcome(str, Enum):
    """What happened to a matched call."""

    COLLECTED = "collected"
    SKIPPED = "skipped"
    VIOLATION = "violation"


class RequireUsageError(Exception):
    """A dependency call that breaks the arity or literal-argument policy."""

    def __init__(self, message: str, loc: SourceLocation):
        super().__init__(message)
        self.message = message
        self.loc = loc

    @property
    def line(self) -> int:
        return self.loc.line

    @property
    def column(self) -> int:
        return self.loc.column

    def __str__(self) -> str:
        return f"Line {self.loc.line}: {self.message}"


@dataclass(frozen=True)
class CallShape:
    """
    One recognized callee form.

    Attributes:
        category: Bucket the call feeds
        property_name: None for a bare ``require``, else the member name
        rejects_extra_arguments: Whether more than one argument is an arity violation
        option: ParseOptions field gating this shape, None when always active
    """

    category: DependencyCategory
    property_name: str | None
    rejects_extra_arguments: bool
    option: str | None = None

    def enabled(self, options: ParseOptions) -> bool:
        return self.option is None or bool(getattr(options, self.option))


# Checked in this order; at most one can match a node.
CALL_SHAPES = (
    CallShape(DependencyCategory.NORMAL, None, True),
    CallShape(DependencyCategory.RESOLVE, "resolve", True, "require_resolve"),
    # require.async takes a callback as its second argument
    CallShape(DependencyCategory.ASYNC, "async", False, "require_async"),
)


@dataclass(frozen=True)
class MatchResult:
    """Outcome of checking one dependency call."""

    category: DependencyCategory
    outcome: Outcome
    value: str | None = None
    violation: RequireUsageError | None = None


def point_location(point: tuple[int, int]) -> SourceLocation:
    """Convert a raw (row, column) point without any wrapper correction."""
    return SourceLocation(line=point[0] + 1, column=point[1])


def check_dependency_node(
    node: Any,
    options: ParseOptions,
    locate: Locator = point_location,
) -> MatchResult | None:
    """
    Match ``node`` against the enabled call shapes and validate it.

    Args:
        node: Any tree-sitter node
        options: Extraction switches
        locate: Maps a node point to a location in the caller's content

    Returns:
        MatchResult for a dependency call, None for anything else.
    """
    if node.type != "call_expression":
        return None

    for shape in CALL_SHAPES:
        if shape.enabled(options) and _matches_shape(node, shape):
            return _validate_call(node, shape, options, locate)

    return None


def call_arguments(node: Any) -> list[Any]:
    """Argument nodes of a call, without comments inside the parentheses."""
    arguments = node.child_by_field_name("arguments")
    if arguments is None:
        return []
    return [child for child in arguments.named_children if child.type != "comment"]


def literal_value(node: Any) -> str | None:
    """
    Value of a literal argument, or None when the node is not a literal.

    Strings are decoded; numbers, booleans, null and regexes keep their
    source text.
    """
    node = _unwrap_parentheses(node)
    if node.type not in LITERAL_TYPES:
        return None
    if node.type != "string":
        return _text(node)

    parts = []
    for child in node.named_children:
        if child.type == "escape_sequence":
            parts.append(_decode_escape(_text(child)))
        else:
            parts.append(_text(child))
    return "".join(parts)


def _matches_shape(node: Any, shape: CallShape) -> bool:
    arguments = node.child_by_field_name("arguments")
    # Tagged templates are call_expressions with a template_string argument
    if arguments is None or arguments.type != "arguments":
        return False

    callee = node.child_by_field_name("function")
    if callee is None:
        return False

    if shape.property_name is None:
        return callee.type == "identifier" and _text(callee) == REQUIRE_NAME

    if callee.type != "member_expression":
        return False

    target = callee.child_by_field_name("object")
    prop = callee.child_by_field_name("property")
    return (
        target is not None
        and prop is not None
        and target.type == "identifier"
        and _text(target) == REQUIRE_NAME
        and _text(prop) == shape.property_name
    )


def _validate_call(
    node: Any,
    shape: CallShape,
    options: ParseOptions,
    locate: Locator,
) -> MatchResult:
    args = call_arguments(node)
    callee = node.child_by_field_name("function")

    if not args:
        return _arity_result(shape, options, ARITY_MISSING_MESSAGE, locate(callee.start_point))

    if shape.rejects_extra_arguments and len(args) > 1:
        return _arity_result(shape, options, ARITY_EXCESS_MESSAGE, locate(callee.start_point))

    value = literal_value(args[0])
    if value is None:
        if options.allow_non_literal_require:
            return MatchResult(shape.category, Outcome.SKIPPED)
        violation = RequireUsageError(NON_LITERAL_MESSAGE, locate(args[0].start_point))
        return MatchResult(shape.category, Outcome.VIOLATION, violation=violation)

    return MatchResult(shape.category, Outcome.COLLECTED, value=value)


def _arity_result(
    shape: CallShape,
    options: ParseOptions,
    message: str,
    loc: SourceLocation,
) -> MatchResult:
    if not options.check_require_length:
        return MatchResult(shape.category, Outcome.SKIPPED)
    return MatchResult(shape.category, Outcome.VIOLATION, violation=RequireUsageError(message, loc))


def _unwrap_parentheses(node: Any) -> Any:
    while node.type == "parenthesized_expression":
        inner = [child for child in node.named_children if child.type != "comment"]
        if len(inner) != 1:
            break
        node = inner[0]
    return node


def _text(node: Any) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8")


def _decode_escape(sequence: str) -> str:
    """Decode one JavaScript escape sequence such as \\n, \\x41 or \\u{1F600}."""
    body = sequence[1:]
    if not body:
        return sequence

    try:
        if body.startswith("u{") and body.endswith("}"):
            return chr(int(body[2:-1], 16))
        if body[0] in "xu" and len(body) > 1:
            return chr(int(body[1:], 16))
        if body.isdigit() and all(ch in "01234567" for ch in body):
            return chr(int(body, 8))
    except (ValueError, OverflowError):
        return body

    # Line continuation
    if body[0] in "\r\n\u2028\u2029":
        return ""

    return SIMPLE_ESCAPES.get(body, body)
