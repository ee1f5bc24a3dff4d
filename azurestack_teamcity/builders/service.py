"""Build configuration running the acceptance tests of one service package."""

from dataclasses import dataclass

from azurestack_teamcity import components
from azurestack_teamcity.models.build import (
    BuildType,
    FailureConditions,
    ScheduleTrigger,
)
from azurestack_teamcity.models.client import ClientConfiguration
from azurestack_teamcity.models.location import LocationConfiguration
from azurestack_teamcity.models.test_configuration import TestConfiguration
from azurestack_teamcity.settings import Settings
from azurestack_teamcity.vcs_root import provider_checkout


@dataclass(frozen=True, kw_only=True)
class ServiceDetails:
    """A service package of the provider within an environment."""

    package_name: str
    display_name: str
    environment: str

    def build_configuration(
        self,
        settings: Settings,
        test_config: TestConfiguration,
        client_config: ClientConfiguration,
        locations: LocationConfiguration,
    ) -> BuildType:
        """Create the build type for this service.

        The nightly trigger is attached only when the environment runs
        nightly and the service does not disable triggers; without it the
        build type can still be run manually.
        """
        use_go_test = settings.use_teamcity_go_test
        triggers: list[ScheduleTrigger] = []
        nightly = settings.nightly_enabled(self.environment)
        if nightly and not test_config.disable_triggers:
            triggers.append(
                components.run_nightly(
                    test_config.start_hour,
                    test_config.days_of_week,
                    test_config.days_of_month,
                )
            )

        return BuildType(
            id=self.unique_id(settings.provider_name),
            name=f"{self.display_name} - Acceptance Tests",
            vcs=provider_checkout(),
            steps=[
                components.configure_go_env(),
                components.download_terraform_binary(
                    settings.default_terraform_core_version
                ),
                *components.run_acceptance_tests(self.package_name, use_go_test),
            ],
            failure_conditions=FailureConditions(
                error_message=True,
                execution_timeout_min=60 * test_config.timeout,
            ),
            features=components.go_test_feature(use_go_test),
            params=[
                *components.acceptance_test_parameters(
                    test_config.parallelism, test_config.timeout
                ),
                components.acceptance_tests_flag(),
                components.terraform_core_binary_testing(
                    settings.default_terraform_core_version
                ),
                components.terraform_should_panic_for_schema_errors(),
                components.read_only_settings(),
                components.working_directory(self.package_name),
                *components.configure_azure_specific_test_parameters(
                    client_config, locations
                ),
            ],
            triggers=triggers,
        )

    def unique_id(self, provider_name: str) -> str:
        """Stable identifier; TeamCity needs it consistent between generations."""
        return "_".join(
            [
                provider_name.upper(),
                "SERVICE",
                self.environment.upper(),
                self.package_name.upper(),
            ]
        )
