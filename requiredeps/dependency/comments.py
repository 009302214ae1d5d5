"""
Comment Annotation Scanner
==========================

Finds dependency annotations inside comments:

    // @require('./a')
    /* @require.resolve("./b") */
    /** @require.async('./c') */

Malformed annotations simply do not match.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from ..models import Comment, DependencyBuckets, DependencyCategory, ParseOptions

logger = logging.getLogger(__name__)

# ( 'id' or ( "id"
LEFT_PARENTHESIS_STRING = r"""\s*\(\s*(['"])([A-Za-z0-9_/\-.]+)\1\s*"""
PARENTHESIS_STRING = LEFT_PARENTHESIS_STRING + r"\)"

REQUIRE_PATTERN = re.compile(r"@require" + PARENTHESIS_STRING)
REQUIRE_RESOLVE_PATTERN = re.compile(r"@require\.resolve" + PARENTHESIS_STRING)
# No closing parenthesis required, so @require.async('x', fn) still matches
REQUIRE_ASYNC_PATTERN = re.compile(r"@require\.async" + LEFT_PARENTHESIS_STRING)


def parse_by_regex(content: str, pattern: re.Pattern[str], matches: list[str]) -> list[str]:
    """Append the identifier of every occurrence of ``pattern`` to ``matches``."""
    for match in pattern.finditer(content):
        matches.append(match.group(2))
    return matches


def parse_comments(
    comments: Iterable[Comment],
    buckets: DependencyBuckets,
    options: ParseOptions,
) -> DependencyBuckets:
    """
    Collect annotation-declared dependencies from ``comments``.

    @require is always scanned; @require.resolve and @require.async only
    when the matching option is enabled.
    """
    scanned = 0
    for comment in comments:
        scanned += 1
        parse_by_regex(comment.value, REQUIRE_PATTERN, buckets.bucket(DependencyCategory.NORMAL))

        if options.require_resolve:
            parse_by_regex(
                comment.value, REQUIRE_RESOLVE_PATTERN, buckets.bucket(DependencyCategory.RESOLVE)
            )

        if options.require_async:
            parse_by_regex(
                comment.value, REQUIRE_ASYNC_PATTERN, buckets.bucket(DependencyCategory.ASYNC)
            )

    logger.debug("Scanned %d comments for annotations", scanned)
    return buckets
