#!/usr/bin/env python3
"""
Tests for the Tree Walker
=========================

Tests the type-blind traversal and the dependency collection it drives:
- Pre-order visiting of nodes, lists and scalar values
- Calls found at any depth (conditionals, functions, object literals)
- Source-order collection and first-violation abort
- Deep nesting without recursion limits
"""

from __future__ import annotations

import pytest
from requiredeps.dependency.matcher import RequireUsageError
from requiredeps.dependency.walker import collect_dependencies
from requiredeps.models import DependencyBuckets, ParseOptions
from requiredeps.tokenizer import tokenize
from requiredeps.tree import iter_nodes


def collect(source: str, options: ParseOptions) -> DependencyBuckets:
    return collect_dependencies(tokenize(source), DependencyBuckets(), options)


class TestIterNodes:
    """Tests for the shape-driven traversal."""

    @pytest.mark.parametrize("value", [None, 0, "require('a')", {}, []])
    def test_scalars_and_empty_values_yield_nothing(self, value):
        """Anything that is not a node or a non-empty sequence is a leaf."""
        assert list(iter_nodes(value)) == []

    def test_root_is_visited_first(self):
        """Nodes are yielded before their children."""
        tree = tokenize("require('a');")
        nodes = list(iter_nodes(tree.root))

        assert nodes[0].type == "program"
        assert len(nodes) > 1

    def test_parents_precede_children(self):
        """Every call_expression is seen before its string argument."""
        tree = tokenize("require('a');")
        types = [node.type for node in iter_nodes(tree.root)]

        assert types.index("call_expression") < types.index("string")

    def test_sequences_are_expanded_in_order(self):
        """Lists are walked element by element."""
        first = tokenize("a;").root
        second = tokenize("b;").root

        nodes = list(iter_nodes([first, [second], "ignored"]))
        roots = [node for node in nodes if node.type == "program"]

        assert len(roots) == 2
        assert nodes[0].type == "program"

    def test_tokenizer_and_walker_share_traversal(self):
        """Both sides use the standalone traversal module."""
        import requiredeps.dependency.walker as walker_module
        import requiredeps.tokenizer as tokenizer_module

        assert tokenizer_module.iter_nodes is iter_nodes
        assert walker_module.iter_nodes is iter_nodes
        assert iter_nodes.__module__ == "requiredeps.tree"


class TestCollectDependencies:
    """Tests for collection over whole trees."""

    def test_finds_calls_at_any_depth(self, plain_options: ParseOptions):
        """Calls inside conditionals, functions and object literals are found."""
        source = """require('a');
if (x) {
  require('b');
}
function load() {
  return { c: require('c'), d: [require('d')] };
}
"""
        buckets = collect(source, plain_options)

        assert buckets.normal == ["a", "b", "c", "d"]

    def test_keeps_duplicates_until_unique(self, plain_options: ParseOptions):
        """Buckets record every occurrence; deduplication happens later."""
        buckets = collect("require('a'); require('a');", plain_options)

        assert buckets.normal == ["a", "a"]
        assert DependencyBuckets.unique(buckets.normal) == ["a"]

    def test_fills_each_category(self, lenient_options: ParseOptions):
        """Each shape lands in its own bucket."""
        buckets = collect(
            "require('a'); require.resolve('b'); require.async('c', function () {});",
            lenient_options,
        )

        assert buckets.normal == ["a"]
        assert buckets.resolve == ["b"]
        assert buckets.async_ == ["c"]

    def test_disabled_categories_stay_empty(self, plain_options: ParseOptions):
        """resolve/async calls contribute nothing when disabled."""
        buckets = collect("require.resolve('b'); require.async('c');", plain_options)

        assert buckets.normal == []
        assert buckets.resolve == []
        assert buckets.async_ == []

    def test_nested_require_inside_argument(self, lenient_options: ParseOptions):
        """A require nested in another require's arguments is still visited."""
        buckets = collect("require.async(require('a'), function () {});", lenient_options)

        assert buckets.normal == ["a"]
        assert buckets.async_ == []

    def test_local_require_variable_is_matched(self, plain_options: ParseOptions):
        """Matching is syntactic; a parameter named require still matches."""
        buckets = collect("function f(require) { require('x'); }", plain_options)

        assert buckets.normal == ["x"]

    def test_ignores_require_inside_strings(self, plain_options: ParseOptions):
        """Text inside string literals is not code."""
        buckets = collect("var s = \"require('a')\";", plain_options)

        assert buckets.normal == []

    def test_stops_at_first_violation(self, strict_options: ParseOptions):
        """The first violation aborts the walk."""
        with pytest.raises(RequireUsageError) as exc_info:
            collect("require('a');\nrequire();\nrequire(x);", strict_options)

        assert exc_info.value.line == 2

    def test_deeply_nested_source(self, plain_options: ParseOptions):
        """Nesting depth is not limited by the interpreter's recursion limit."""
        depth = 1100
        source = "[" * depth + "require('deep')" + "]" * depth + ";"

        buckets = collect(source, plain_options)

        assert buckets.normal == ["deep"]
