"""Tests for ClientConfiguration."""

import logging

import pytest

from azurestack_teamcity.models.client import ClientConfiguration


def test_from_parameters_reads_named_parameters() -> None:
    """Maps DSL parameter names to fields."""
    config = ClientConfiguration.from_parameters(
        {
            "clientId": "id",
            "clientSecret": "secret",
            "subscriptionId": "sub",
            "tenantId": "tenant",
            "endpoint": "https://management.local.azurestack.external",
        }
    )

    assert config.client_id == "id"
    assert config.client_secret.get_secret_value() == "secret"
    assert config.subscription_id == "sub"
    assert config.tenant_id == "tenant"
    assert config.endpoint == "https://management.local.azurestack.external"
    assert config.is_configured


def test_from_parameters_defaults_missing_to_empty_string() -> None:
    """Absent parameters become empty strings rather than errors."""
    config = ClientConfiguration.from_parameters({})

    assert config.client_id == ""
    assert config.client_secret.get_secret_value() == ""
    assert config.subscription_id == ""
    assert config.tenant_id == ""
    assert config.endpoint == ""
    assert not config.is_configured


def test_from_parameters_warns_about_blank_values(
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Logs which parameters are unconfigured."""
    with caplog.at_level(logging.WARNING):
        ClientConfiguration.from_parameters({"clientId": "id", "endpoint": "  "})

    assert "Credentials are not configured" in caplog.text
    assert "clientSecret, subscriptionId, tenantId, endpoint" in caplog.text


def test_missing_parameters_lists_dsl_names() -> None:
    """Reports blank fields by their parameter names."""
    config = ClientConfiguration(client_id="id", tenant_id="tenant")

    assert config.missing_parameters() == ["clientSecret", "subscriptionId", "endpoint"]


def test_secret_is_masked_in_repr_and_dump() -> None:
    """The client secret is never rendered in clear text."""
    config = ClientConfiguration(client_secret="hunter2")

    assert "hunter2" not in repr(config)
    assert config.model_dump(mode="json")["client_secret"] == "**********"


def test_is_frozen() -> None:
    """Configuration cannot change after construction."""
    config = ClientConfiguration(client_id="id")

    with pytest.raises(ValueError, match="frozen"):
        config.client_id = "other"  # type: ignore[misc]
