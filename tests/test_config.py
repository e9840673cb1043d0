"""
Tests for evaluation configuration.
"""

import dataclasses
import logging
import tempfile
from pathlib import Path

import pytest
from pydantic import ValidationError

from backend.exprtree import (
    DEFAULT_PLACEHOLDER_PREFIX,
    EvaluationContext,
    EvaluatorConfig,
    evaluate,
    get_default_context,
    literal,
    new_placeholder,
    reset_default_context,
    set_default_placeholder_prefix,
)


class TestEvaluatorConfig:
    """Tests for EvaluatorConfig model."""

    def test_default_prefix(self):
        """Test the default placeholder prefix."""
        assert EvaluatorConfig().placeholder_prefix == "$"

    def test_empty_prefix(self):
        """Test an empty prefix is rejected."""
        with pytest.raises(ValidationError):
            EvaluatorConfig(placeholder_prefix="")

    def test_non_string_prefix(self):
        """Test a non-string prefix is rejected."""
        with pytest.raises(ValidationError):
            EvaluatorConfig(placeholder_prefix=1)


class TestEvaluationContext:
    """Tests for EvaluationContext."""

    def test_defaults(self):
        """Test a default context."""
        ctx = EvaluationContext()
        assert ctx.placeholder_prefix == DEFAULT_PLACEHOLDER_PREFIX

    def test_invalid_prefix(self):
        """Test construction validates the prefix."""
        with pytest.raises(ValidationError):
            EvaluationContext(placeholder_prefix="")

    def test_frozen(self):
        """Test a context cannot be changed after creation."""
        ctx = EvaluationContext()
        with pytest.raises(dataclasses.FrozenInstanceError):
            ctx.placeholder_prefix = "#"

    def test_from_dict(self):
        """Test loading from a flat mapping."""
        assert EvaluationContext.from_dict({"placeholder_prefix": "#"}).placeholder_prefix == "#"

    def test_from_dict_section(self):
        """Test loading from a nested exprtree section."""
        ctx = EvaluationContext.from_dict({"exprtree": {"placeholder_prefix": "@"}})
        assert ctx.placeholder_prefix == "@"

    def test_from_dict_empty(self):
        """Test empty configuration falls back to defaults."""
        assert EvaluationContext.from_dict(None) == EvaluationContext()
        assert EvaluationContext.from_dict({"exprtree": None}) == EvaluationContext()

    def test_from_yaml(self):
        """Test loading from YAML content."""
        ctx = EvaluationContext.from_yaml("exprtree:\n  placeholder_prefix: '#$#'\n")
        assert ctx.placeholder_prefix == "#$#"

    def test_from_file(self):
        """Test loading from a YAML file."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "exprtree.yaml"
            path.write_text("placeholder_prefix: '%'\n", encoding="utf-8")
            ctx = EvaluationContext.from_file(path)
        assert ctx.placeholder_prefix == "%"

    def test_new_placeholder(self):
        """Test placeholder strings use the context prefix."""
        assert EvaluationContext(placeholder_prefix="#$#").new_placeholder(10) == "#$#10"

    def test_new_placeholder_rejects_non_positive(self):
        """Test placeholder positions must be positive integers."""
        ctx = EvaluationContext()
        for pos in (0, -1, True, 1.0, "1"):
            with pytest.raises(ValueError):
                ctx.new_placeholder(pos)


class TestDefaultContext:
    """Tests for the process-wide default context."""

    def teardown_method(self):
        reset_default_context()

    def test_initial_default(self):
        """Test the default context uses the default prefix."""
        assert get_default_context().placeholder_prefix == "$"

    def test_set_default_prefix(self):
        """Test changing the default prefix affects later evaluations."""
        set_default_placeholder_prefix("#$#")
        assert new_placeholder(10) == "#$#10"
        assert evaluate(literal("#$#1"), ["a"]) == "a"
        assert evaluate(literal("$1"), ["a"]) == "$1"

    def test_explicit_context_wins(self):
        """Test an explicit context overrides the default."""
        set_default_placeholder_prefix("#")
        assert evaluate(literal("$1"), ["a"], context=EvaluationContext()) == "a"

    def test_invalid_default_keeps_previous(self):
        """Test a rejected prefix leaves the default unchanged."""
        with pytest.raises(ValidationError):
            set_default_placeholder_prefix("")
        assert get_default_context().placeholder_prefix == "$"

    def test_change_is_logged(self, caplog):
        """Test prefix changes are logged."""
        caplog.set_level(logging.INFO, logger="backend.exprtree.config")
        set_default_placeholder_prefix("@")
        assert "placeholder prefix" in caplog.text
