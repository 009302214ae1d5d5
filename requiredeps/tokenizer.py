"""
JavaScript Tokenizer
====================

Wraps tree-sitter-javascript: turns source text into a SyntaxTree with
comments gathered at the root, and reports syntax errors with a position.

Content is wrapped in a function body before parsing so files shaped as
CommonJS module bodies are accepted. The wrapper sits on the first line,
so line numbers are unchanged; first-line columns are corrected by
SyntaxTree.locate().

tree-sitter recovers from errors and accepts a superset of script syntax,
so ERROR and MISSING nodes are reported as syntax errors, and module
statements, JSX and misplaced await are rejected after a clean parse.
"""

from __future__ import annotations

import logging

import tree_sitter_javascript
from tree_sitter import Language, Node, Parser

from .models import Comment, SourceLocation, SyntaxTree
from .tree import iter_nodes

logger = logging.getLogger(__name__)

JS_LANGUAGE = Language(tree_sitter_javascript.language())

WRAP_PREFIX = "function __module__() {"
WRAP_SUFFIX = "\n}"

# Parsed by tree-sitter but not valid inside a script function body
SCRIPT_ILLEGAL_TYPES = frozenset({
    "import_statement",
    "export_statement",
    "jsx_element",
    "jsx_self_closing_element",
})

FUNCTION_TYPES = frozenset({
    "function_declaration",
    "function_expression",
    "function",
    "generator_function",
    "generator_function_declaration",
    "arrow_function",
    "method_definition",
})


class TokenizeError(Exception):
    """Source text that tree-sitter could not parse cleanly."""

    def __init__(self, message: str, loc: SourceLocation | None = None):
        super().__init__(message)
        self.message = message
        self.loc = loc

    @property
    def line(self) -> int | None:
        return self.loc.line if self.loc else None

    def __str__(self) -> str:
        if self.loc is None:
            return self.message
        return f"Line {self.loc.line}: {self.message}"


def wrap_content(content: str) -> str:
    """
    Make ``content`` acceptable as a standalone program.

    A leading "#!" line becomes a "//" comment of the same length, then the
    text is placed inside a function body. Wrapping twice is harmless.
    """
    if content.startswith("#!"):
        content = "//" + content[2:]
    return WRAP_PREFIX + content + WRAP_SUFFIX


def tokenize(content: str) -> SyntaxTree:
    """
    Parse JavaScript source into a SyntaxTree.

    Args:
        content: Raw file content

    Returns:
        SyntaxTree with the root node and every comment in document order

    Raises:
        TokenizeError: If the source contains any syntax error, including
            constructs that tree-sitter accepts but a script function body
            does not (module syntax, JSX, await outside an async function)
    """
    source = wrap_content(content).encode("utf-8")
    parser = Parser(JS_LANGUAGE)
    tree = SyntaxTree(
        root=parser.parse(source).root_node,
        source=source,
        prefix_length=len(WRAP_PREFIX.encode("utf-8")),
    )

    if tree.root.has_error:
        raise _syntax_error(tree)

    for node in iter_nodes(tree.root):
        if node.type == "comment":
            tree.comments.append(Comment(value=_comment_value(node), loc=tree.locate(node.start_point)))
        elif node.type in SCRIPT_ILLEGAL_TYPES or _is_misplaced_await(node):
            raise _unexpected_token(tree, node)

    logger.debug("Tokenized %d bytes, %d comments", len(source), len(tree.comments))
    return tree


def _is_misplaced_await(node: Node) -> bool:
    """True for an ``await`` whose nearest enclosing function is not async."""
    if node.type != "await_expression":
        return False

    parent = node.parent
    while parent is not None:
        if parent.type in FUNCTION_TYPES:
            return not any(child.type == "async" for child in parent.children)
        parent = parent.parent
    return True


def _syntax_error(tree: SyntaxTree) -> TokenizeError:
    suffix_start = len(tree.source) - len(WRAP_SUFFIX.encode("utf-8"))
    content_end = len(tree.source[:suffix_start].rstrip())

    for node in iter_nodes(tree.root):
        if node.is_missing:
            return TokenizeError(f'Missing "{node.type}"', tree.locate(node.start_point))
        if node.type == "ERROR":
            # A construct left open at the end of the content, as opposed to
            # a single stray token there
            if node.start_byte < content_end <= node.end_byte and _token_count(node, tree) > 1:
                return TokenizeError("Unexpected end of input", tree.locate(node.end_point))
            return _unexpected_token(tree, node)

    return TokenizeError("Unexpected token")


def _unexpected_token(tree: SyntaxTree, node: Node) -> TokenizeError:
    token = _first_token(node, tree.prefix_length)
    if token is None:
        return TokenizeError("Unexpected end of input", tree.locate(node.end_point))
    text = token.text.decode("utf-8", errors="replace")
    return TokenizeError(f"Unexpected token {text}", tree.locate(token.start_point))


def _first_token(node: Node, prefix_length: int) -> Node | None:
    """First non-empty leaf under ``node`` that is not part of the wrapper prefix."""
    for child in iter_nodes(node):
        if child.child_count == 0 and child.end_byte > child.start_byte >= prefix_length:
            return child
    return None


def _token_count(node: Node, tree: SyntaxTree) -> int:
    """Number of non-empty leaves under ``node`` that belong to the content."""
    suffix_start = len(tree.source) - len(WRAP_SUFFIX.encode("utf-8"))
    return sum(
        1
        for child in iter_nodes(node)
        if child.child_count == 0
        and child.end_byte > child.start_byte >= tree.prefix_length
        and child.end_byte <= suffix_start
    )


def _comment_value(node: Node) -> str:
    text = node.text.decode("utf-8", errors="replace")
    if text.startswith("//"):
        return text[2:]
    if text.startswith("/*"):
        return text[2:-2] if text.endswith("*/") else text[2:]
    return text
