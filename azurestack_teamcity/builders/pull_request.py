"""Build configuration for testing pull requests on demand."""

from dataclasses import dataclass

from azurestack_teamcity import components
from azurestack_teamcity.models.build import BuildType, FailureConditions, Parameter
from azurestack_teamcity.models.client import ClientConfiguration
from azurestack_teamcity.models.location import LocationConfiguration
from azurestack_teamcity.settings import Settings
from azurestack_teamcity.vcs_root import provider_checkout

PULL_REQUEST_DISPLAY_NAME = "! Run Pull Request"


@dataclass(frozen=True, kw_only=True)
class PullRequest:
    """Manually triggered build running the tests of selected services."""

    display_name: str = PULL_REQUEST_DISPLAY_NAME
    environment: str

    def build_configuration(
        self,
        settings: Settings,
        client_config: ClientConfiguration,
        locations: LocationConfiguration,
    ) -> BuildType:
        use_go_test = settings.use_teamcity_go_test
        return BuildType(
            id=self.unique_id(settings.provider_name),
            name=self.display_name,
            vcs=provider_checkout(),
            steps=[
                components.configure_go_env(),
                components.download_terraform_binary(
                    settings.default_terraform_core_version
                ),
                components.run_acceptance_tests_for_pull_request(use_go_test),
            ],
            failure_conditions=FailureConditions(error_message=True),
            features=components.go_test_feature(use_go_test),
            params=[
                *components.acceptance_test_parameters(
                    settings.default_parallelism, settings.default_timeout
                ),
                components.acceptance_tests_flag(),
                components.terraform_should_panic_for_schema_errors(),
                components.read_only_settings(),
                Parameter(name="SERVICES", value=settings.pull_request_services),
                *components.configure_azure_specific_test_parameters(
                    client_config, locations
                ),
            ],
        )

    def unique_id(self, provider_name: str) -> str:
        return f"{provider_name.upper()}_PR_{self.environment.upper()}"
