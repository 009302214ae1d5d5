"""
Shared fixtures for the require-deps test suite.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from requiredeps.config import clear_config_cache
from requiredeps.models import ParseOptions


@pytest.fixture
def temp_dir(tmp_path: Path) -> Path:
    """A fresh directory for files written by a test."""
    return tmp_path


@pytest.fixture
def strict_options() -> ParseOptions:
    """Every category enabled, every violation reported."""
    return ParseOptions(
        comment_require=True,
        require_resolve=True,
        require_async=True,
        check_require_length=True,
        allow_non_literal_require=False,
    )


@pytest.fixture
def lenient_options() -> ParseOptions:
    """Every category enabled, every violation tolerated."""
    return ParseOptions(
        comment_require=True,
        require_resolve=True,
        require_async=True,
        check_require_length=False,
        allow_non_literal_require=True,
    )


@pytest.fixture
def plain_options() -> ParseOptions:
    """Only bare require() in code; no comments, resolve or async."""
    return ParseOptions(
        comment_require=False,
        require_resolve=False,
        require_async=False,
        check_require_length=False,
        allow_non_literal_require=False,
    )


@pytest.fixture(autouse=True)
def _reset_config_cache():
    clear_config_cache()
    yield
    clear_config_cache()
