"""
Dependency Extraction Module
============================

Walks JavaScript syntax trees and comments to find require(),
require.resolve() and require.async() dependencies.
"""

from __future__ import annotations

from .comments import parse_comments
from .matcher import MatchResult, Outcome, RequireUsageError, check_dependency_node
from ..tree import iter_nodes
from .walker import collect_dependencies
from .parser import RequireDependencyParser, parse, parse_with_callback

__all__ = [
    "RequireDependencyParser",
    "parse",
    "parse_with_callback",
    "check_dependency_node",
    "collect_dependencies",
    "iter_nodes",
    "parse_comments",
    "MatchResult",
    "Outcome",
    "RequireUsageError",
]
