"""Default scheduling, parallelism and environment settings."""

from collections.abc import Mapping

from pydantic import Field

from azurestack_teamcity.models.base import Model
from azurestack_teamcity.models.location import LocationConfiguration
from azurestack_teamcity.models.test_configuration import (
    ServiceOverride,
    TestConfiguration,
)

PROVIDER_NAME = "azurestack"

# Service packages of the provider mapped to their display names, sorted by
# display name.
SERVICES: Mapping[str, str] = {
    "authorization": "Authorization",
    "compute": "Compute",
    "dns": "DNS",
    "keyvault": "KeyVault",
    "loadbalancer": "Load Balancer",
    "network": "Network",
    "resource": "Resources",
    "storage": "Storage",
}


class Settings(Model):
    """Global settings used when generating the project."""

    provider_name: str = PROVIDER_NAME
    default_start_hour: int = Field(
        default=0, ge=0, le=23, description="Hour (UTC) at which tests are triggered"
    )
    default_parallelism: int = Field(
        default=20, ge=1, description="Parallelism per service package"
    )
    default_terraform_core_version: str = Field(
        default="1.0.3", description="Terraform Core version used for testing"
    )
    default_days_of_week: str = Field(
        default="2,3,4,5,6", description="Cron days of the week, Monday - Friday"
    )
    default_days_of_month: str = Field(
        default="*", description="Cron days of the month"
    )
    default_timeout: int = Field(default=12, ge=1, description="Test timeout in hours")
    use_teamcity_go_test: bool = Field(
        default=False, description="Report tests through the Go test build feature"
    )
    pull_request_services: str = Field(
        default="resource", description="Services tested by the pull request build"
    )
    locations: Mapping[str, LocationConfiguration] = Field(
        default_factory=lambda: {
            "stack": LocationConfiguration(
                primary="ppe5", secondary="ppe5", ternary="ppe5", rotate=False
            ),
        },
        description="Regions per environment",
    )
    run_nightly: Mapping[str, bool] = Field(
        default_factory=lambda: {"stack": True},
        description="Environments whose tests run nightly",
    )
    service_overrides: Mapping[str, ServiceOverride] = Field(
        default_factory=lambda: {
            # these tests all conflict with one another
            "authorization": ServiceOverride(parallelism=1),
        },
        description="Services run with a custom test configuration",
    )
    services: Mapping[str, str] = Field(default_factory=lambda: dict(SERVICES))
    excluded_services: frozenset[str] = Field(
        default_factory=frozenset, description="Service packages not generated"
    )

    def default_test_configuration(self) -> TestConfiguration:
        """Return the test configuration used when a service has no override."""
        return TestConfiguration(
            parallelism=self.default_parallelism,
            start_hour=self.default_start_hour,
            days_of_week=self.default_days_of_week,
            days_of_month=self.default_days_of_month,
            timeout=self.default_timeout,
        )

    def test_configuration_for(self, service: str) -> TestConfiguration:
        """Resolve the test configuration of a service package."""
        defaults = self.default_test_configuration()
        if (override := self.service_overrides.get(service)) is None:
            return defaults
        return override.resolve(defaults)

    def nightly_enabled(self, environment: str) -> bool:
        return self.run_nightly.get(environment, False)

    def services_to_build(self) -> Mapping[str, str]:
        """Service packages to generate, sorted by display name, minus excluded."""
        return {
            package: display_name
            for package, display_name in sorted(
                self.services.items(), key=lambda item: item[1]
            )
            if package not in self.excluded_services
        }


DEFAULT_SETTINGS = Settings()
