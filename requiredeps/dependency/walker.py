"""
Syntax Tree Walker
==================

Drives the dependency matcher over every node of a syntax tree, in the
pre-order produced by requiredeps.tree.iter_nodes.
"""

from __future__ import annotations

import logging

from ..models import DependencyBuckets, ParseOptions, SyntaxTree
from ..tree import iter_nodes
from .matcher import Outcome, check_dependency_node

logger = logging.getLogger(__name__)


def collect_dependencies(
    tree: SyntaxTree,
    buckets: DependencyBuckets,
    options: ParseOptions,
) -> DependencyBuckets:
    """
    Run the matcher over every node and fill ``buckets``.

    Args:
        tree: Tokenizer output
        buckets: Collection target, appended to in visit order
        options: Extraction switches

    Returns:
        The same buckets, for chaining.

    Raises:
        RequireUsageError: On the first violation the options do not tolerate
    """
    visited = 0
    for node in iter_nodes(tree.root):
        visited += 1
        result = check_dependency_node(node, options, tree.locate)
        if result is None:
            continue

        if result.outcome is Outcome.VIOLATION:
            raise result.violation
        if result.outcome is Outcome.COLLECTED:
            buckets.add(result.category, result.value)

    logger.debug("Walked %d nodes", visited)
    return buckets
