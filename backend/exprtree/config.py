"""
Evaluation Configuration.

An EvaluationContext carries the settings every evaluation reads. Callers
may pass one explicitly; otherwise the process-wide default is used. The
default is meant to be configured once at startup.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .models import EvaluatorConfig

logger = logging.getLogger(__name__)

DEFAULT_PLACEHOLDER_PREFIX = "$"

# Top-level key for the evaluator section in a shared config file
CONFIG_SECTION = "exprtree"


@dataclass(frozen=True)
class EvaluationContext:
    """
    Settings threaded through an evaluation.

    Attributes:
        placeholder_prefix: Marker preceding a 1-based argument position.
    """

    placeholder_prefix: str = DEFAULT_PLACEHOLDER_PREFIX

    def __post_init__(self) -> None:
        EvaluatorConfig(placeholder_prefix=self.placeholder_prefix)

    @classmethod
    def from_config(cls, config: EvaluatorConfig) -> EvaluationContext:
        """Create a context from a validated config model."""
        return cls(placeholder_prefix=config.placeholder_prefix)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> EvaluationContext:
        """
        Create a context from a configuration mapping.

        The mapping may hold the settings directly or nest them under
        an ``exprtree`` section.

        Raises:
            pydantic.ValidationError: If a setting is invalid.
        """
        data = data or {}
        if CONFIG_SECTION in data:
            data = data[CONFIG_SECTION] or {}
        return cls.from_config(EvaluatorConfig.model_validate(data))

    @classmethod
    def from_yaml(cls, yaml_content: str) -> EvaluationContext:
        """Create a context from YAML content."""
        return cls.from_dict(yaml.safe_load(yaml_content))

    @classmethod
    def from_file(cls, path: Path) -> EvaluationContext:
        """Create a context from a YAML file."""
        with open(path, "r", encoding="utf-8") as f:
            return cls.from_yaml(f.read())

    def new_placeholder(self, pos: int) -> str:
        """
        Build the placeholder literal for a positional argument.

        Args:
            pos: 1-based argument position.

        Returns:
            The placeholder string, e.g. '$2'.
        """
        if isinstance(pos, bool) or not isinstance(pos, int) or pos < 1:
            raise ValueError(f"Placeholder position must be a positive integer, got {pos!r}")
        return f"{self.placeholder_prefix}{pos}"


_default_context = EvaluationContext()


def get_default_context() -> EvaluationContext:
    """Return the process-wide default context."""
    return _default_context


def set_default_placeholder_prefix(prefix: str) -> EvaluationContext:
    """
    Replace the process-wide placeholder prefix.

    Not synchronized with concurrent evaluations.

    Returns:
        The new default context.
    """
    global _default_context
    _default_context = EvaluationContext(placeholder_prefix=prefix)
    logger.info("Default placeholder prefix set to %r", prefix)
    return _default_context


def reset_default_context() -> EvaluationContext:
    """Restore the default context to its initial settings."""
    return set_default_placeholder_prefix(DEFAULT_PLACEHOLDER_PREFIX)
