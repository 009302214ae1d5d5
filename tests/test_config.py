#!/usr/bin/env python3
"""
Tests for Parse Options Configuration
=====================================

Tests loading ParseOptions from requiredeps.{json,yaml,yml}, validation of
config contents, caching and option merging.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from requiredeps.config import (
    ParseConfigLoader,
    clear_config_cache,
    load_parse_options,
)
from requiredeps.models import ParseOptions


class TestParseConfigLoader:
    """Tests for reading config files."""

    def test_defaults_without_config_file(self, temp_dir: Path):
        """No config file means default options."""
        loader = ParseConfigLoader(temp_dir)
        options = loader.load()

        assert options == ParseOptions()
        assert not loader.has_config_file()

    def test_loads_json(self, temp_dir: Path):
        """JSON values override defaults."""
        (temp_dir / "requiredeps.json").write_text(
            json.dumps({"check_require_length": True, "require_async": False})
        )

        loader = ParseConfigLoader(temp_dir)
        options = loader.load()

        assert loader.has_config_file()
        assert options.check_require_length is True
        assert options.require_async is False
        assert options.comment_require is True

    def test_loads_yaml(self, temp_dir: Path):
        """YAML config files are supported."""
        (temp_dir / "requiredeps.yaml").write_text(
            "allow_non_literal_require: true\nrequire_resolve: false\n"
        )

        options = ParseConfigLoader(temp_dir).load()

        assert options.allow_non_literal_require is True
        assert options.require_resolve is False

    def test_loads_yml(self, temp_dir: Path):
        """The .yml extension is searched too."""
        (temp_dir / "requiredeps.yml").write_text("comment_require: false\n")

        assert ParseConfigLoader(temp_dir).load().comment_require is False

    def test_empty_yaml_uses_defaults(self, temp_dir: Path):
        """An empty YAML file is an empty config."""
        (temp_dir / "requiredeps.yaml").write_text("")

        assert ParseConfigLoader(temp_dir).load() == ParseOptions()

    def test_json_takes_precedence(self, temp_dir: Path):
        """requiredeps.json is found before the YAML variants."""
        (temp_dir / "requiredeps.json").write_text('{"require_async": false}')
        (temp_dir / "requiredeps.yaml").write_text("require_async: true\n")

        loader = ParseConfigLoader(temp_dir)
        loader.load()

        assert loader.config_file == temp_dir.resolve() / "requiredeps.json"
        assert loader.options.require_async is False

    def test_rejects_unknown_keys(self, temp_dir: Path):
        """Unknown keys are listed in the error."""
        (temp_dir / "requiredeps.json").write_text('{"bogus": true, "other": 1}')

        with pytest.raises(ValueError, match="Unknown keys: bogus, other"):
            ParseConfigLoader(temp_dir).load()

    def test_rejects_non_boolean_values(self, temp_dir: Path):
        """Option values must be booleans."""
        (temp_dir / "requiredeps.json").write_text('{"comment_require": "yes"}')

        with pytest.raises(ValueError, match="'comment_require' must be a boolean"):
            ParseConfigLoader(temp_dir).load()

    def test_rejects_non_object(self, temp_dir: Path):
        """The top level must be a mapping."""
        (temp_dir / "requiredeps.json").write_text("[true]")

        with pytest.raises(ValueError, match="Config must be an object"):
            ParseConfigLoader(temp_dir).load()

    def test_rejects_invalid_json(self, temp_dir: Path):
        """Malformed JSON is reported as a ValueError."""
        (temp_dir / "requiredeps.json").write_text("{not json")

        with pytest.raises(ValueError, match="Invalid JSON in requiredeps.json"):
            ParseConfigLoader(temp_dir).load()

    def test_rejects_invalid_yaml(self, temp_dir: Path):
        """Malformed YAML is reported as a ValueError."""
        (temp_dir / "requiredeps.yaml").write_text("a: [unclosed\n")

        with pytest.raises(ValueError, match="Invalid YAML in requiredeps.yaml"):
            ParseConfigLoader(temp_dir).load()


class TestLoadParseOptions:
    """Tests for the cached loader."""

    def test_caches_by_directory(self, temp_dir: Path):
        """A second load does not re-read the file."""
        config = temp_dir / "requiredeps.json"
        config.write_text('{"require_async": false}')
        assert load_parse_options(temp_dir).require_async is False

        config.write_text('{"require_async": true}')
        assert load_parse_options(temp_dir).require_async is False

        clear_config_cache()
        assert load_parse_options(temp_dir).require_async is True

    def test_returns_independent_copies(self, temp_dir: Path):
        """Mutating a returned object does not touch the cache."""
        first = load_parse_options(temp_dir)
        first.require_async = False

        assert load_parse_options(temp_dir).require_async is True


class TestParseOptions:
    """Tests for ParseOptions helpers."""

    def test_round_trip(self):
        """to_dict / from_dict preserve every field."""
        options = ParseOptions(comment_require=False, check_require_length=True)

        assert ParseOptions.from_dict(options.to_dict()) == options

    def test_merged_ignores_none(self):
        """None overrides leave the current value in place."""
        merged = ParseOptions().merged({"require_async": None, "require_resolve": False})

        assert merged.require_async is True
        assert merged.require_resolve is False

    def test_option_names(self):
        """The five options are exposed in declaration order."""
        assert ParseOptions.option_names() == [
            "comment_require",
            "require_resolve",
            "require_async",
            "check_require_length",
            "allow_non_literal_require",
        ]
