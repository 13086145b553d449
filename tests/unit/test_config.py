"""Tests for sqlbind.config."""

from __future__ import annotations

import pytest

from sqlbind.config import DEFAULT_BIND_CONFIG, BindConfig
from sqlbind.exceptions import ImproperConfigurationError
from sqlbind.parameters import PLACEHOLDER_PATTERN, ParameterStyle


def test_defaults() -> None:
    config = BindConfig()
    assert config.parameter_style is ParameterStyle.QMARK
    assert config.strict_binding is True
    assert config.placeholder_pattern == PLACEHOLDER_PATTERN
    assert config.log_statements is False
    assert config == DEFAULT_BIND_CONFIG


def test_string_parameter_style_is_coerced() -> None:
    assert BindConfig(parameter_style="numeric").parameter_style is ParameterStyle.NUMERIC


def test_unknown_parameter_style() -> None:
    with pytest.raises(ImproperConfigurationError, match="Unsupported parameter style"):
        BindConfig(parameter_style="named_at")


def test_empty_pattern() -> None:
    with pytest.raises(ImproperConfigurationError):
        BindConfig(placeholder_pattern="")


def test_replace_returns_new_instance() -> None:
    config = BindConfig()
    relaxed = config.replace(strict_binding=False)
    assert relaxed is not config
    assert relaxed.strict_binding is False
    assert config.strict_binding is True
    assert relaxed.parameter_style is config.parameter_style


def test_replace_rejects_unknown_field() -> None:
    with pytest.raises(TypeError, match="is not a field"):
        BindConfig().replace(dialect="sqlite")


def test_equality_and_hash() -> None:
    assert BindConfig(strict_binding=False) == BindConfig(strict_binding=False)
    assert BindConfig(strict_binding=False) != BindConfig()
    assert hash(BindConfig()) == hash(DEFAULT_BIND_CONFIG)
    assert BindConfig() != object()


def test_repr() -> None:
    assert "strict_binding=True" in repr(BindConfig())
