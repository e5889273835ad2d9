"""Tests for common.exceptions module."""

import pytest

from common.exceptions import (
    ConfigurationError,
    InvalidConfigValueError,
    ProviderIntegrationError,
)


class TestProviderIntegrationError:
    """Tests for ProviderIntegrationError base exception."""

    def test_basic_creation(self):
        """Test basic exception creation."""
        error = ProviderIntegrationError("Something went wrong")
        assert error.message == "Something went wrong"
        assert error.details == {}
        assert error.cause is None
        assert str(error) == "Something went wrong"

    def test_with_details(self):
        """Test details are shown in the string form."""
        error = ProviderIntegrationError("Error", details={"key": "value"})
        assert str(error) == "Error | Details: {'key': 'value'}"

    def test_with_cause(self):
        """Test the original exception is kept."""
        cause = ValueError("original")
        error = ProviderIntegrationError("Wrapped", cause=cause)
        assert error.cause is cause

    def test_repr(self):
        """Test repr names the class and fields."""
        error = ProviderIntegrationError("Error", details={"a": 1})
        assert repr(error) == "ProviderIntegrationError(message='Error', details={'a': 1}, cause=None)"

    def test_with_context(self):
        """Test context is merged into a copy."""
        error = ProviderIntegrationError("Error", details={"key": "value"})
        enriched = error.with_context(field="notifications")
        assert enriched.details == {"key": "value", "field": "notifications"}
        assert error.details == {"key": "value"}
        assert enriched.message == error.message

    def test_catch_all(self):
        """Test subclasses are caught by the base."""
        with pytest.raises(ProviderIntegrationError):
            raise InvalidConfigValueError("bad", config_key="k")


class TestConfigurationErrors:
    """Tests for configuration exceptions."""

    def test_configuration_error(self):
        """Test the config key is recorded."""
        error = ConfigurationError("Invalid", config_key="strict_arity")
        assert error.config_key == "strict_arity"
        assert error.details["config_key"] == "strict_arity"

    def test_invalid_value(self):
        """Test value and expectation are recorded."""
        error = InvalidConfigValueError(
            "Invalid value",
            config_key="strict_arity",
            value="maybe",
            expected="boolean",
        )
        assert isinstance(error, ConfigurationError)
        assert error.value == "maybe"
        assert error.expected == "boolean"
        assert error.details == {"value": "maybe", "expected": "boolean", "config_key": "strict_arity"}

    def test_invalid_value_with_context(self):
        """Test subclasses with keyword-only arguments can be enriched."""
        error = InvalidConfigValueError("Invalid", config_key="k", value=1)
        enriched = error.with_context(source="env")
        assert isinstance(enriched, InvalidConfigValueError)
        assert enriched.config_key == "k"
        assert enriched.details["source"] == "env"
