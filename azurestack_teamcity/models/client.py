"""Credentials of the Service Principal used for testing."""

import logging
from collections.abc import Mapping

from pydantic import Field, SecretStr

from azurestack_teamcity.models.base import Model

log = logging.getLogger(__name__)

PARAMETER_NAMES: Mapping[str, str] = {
    "client_id": "clientId",
    "client_secret": "clientSecret",
    "subscription_id": "subscriptionId",
    "tenant_id": "tenantId",
    "endpoint": "endpoint",
}


class ClientConfiguration(Model):
    """Identity and secret fields for an Azure Stack test environment.

    Blank values are allowed: they mean the environment is unconfigured and
    the CI platform's secret store is expected to provide them.
    """

    client_id: str = Field(default="", description="Service Principal client ID")
    client_secret: SecretStr = Field(
        default=SecretStr(""), description="Service Principal client secret"
    )
    subscription_id: str = Field(default="", description="Azure subscription ID")
    tenant_id: str = Field(default="", description="Azure tenant ID")
    endpoint: str = Field(default="", description="Azure Stack metadata endpoint")

    @classmethod
    def from_parameters(cls, parameters: Mapping[str, str]) -> "ClientConfiguration":
        """Build the configuration from named DSL parameters.

        Missing parameters default to an empty string.
        """
        values = {
            field: parameters.get(name, "") for field, name in PARAMETER_NAMES.items()
        }
        config = cls(**values)

        if missing := config.missing_parameters():
            log.warning(
                "Credentials are not configured, missing parameters: %s",
                ", ".join(missing),
            )
        return config

    def missing_parameters(self) -> list[str]:
        """Return the DSL names of blank parameters."""
        return [
            name
            for field, name in PARAMETER_NAMES.items()
            if not self._plain_value(field).strip()
        ]

    @property
    def is_configured(self) -> bool:
        """Whether every credential field holds a value."""
        return not self.missing_parameters()

    def _plain_value(self, field: str) -> str:
        value = getattr(self, field)
        if isinstance(value, SecretStr):
            return value.get_secret_value()
        return value
