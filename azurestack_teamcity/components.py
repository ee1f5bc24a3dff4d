"""Reusable fragments of build configurations: steps, features, params, triggers."""

from collections.abc import Sequence

from pydantic import SecretStr

from azurestack_teamcity.models.build import (
    GO_TEST_FEATURE_TYPE,
    BuildFeature,
    BuildStep,
    Parameter,
    ScheduleTrigger,
)
from azurestack_teamcity.models.client import ClientConfiguration
from azurestack_teamcity.models.location import LocationConfiguration

ACCEPTANCE_TEST_PREFIX = "TestAcc"
MAIN_BRANCH_FILTER = "+:refs/heads/main"


def hidden_variable(name: str, value: str, description: str) -> Parameter:
    """Text parameter hidden from the build UI."""
    return Parameter(name=name, value=value, display="hidden", description=description)


def hidden_password_variable(name: str, value: str, description: str) -> Parameter:
    """Password parameter whose value is masked by the CI platform."""
    return Parameter(
        name=name,
        value=SecretStr(value),
        kind="password",
        display="hidden",
        description=description,
    )


def configure_azure_specific_test_parameters(
    config: ClientConfiguration, locations: LocationConfiguration
) -> Sequence[Parameter]:
    """Credential and region environment variables for the acceptance tests.

    Blank credentials are still emitted so the variables exist (masked) and
    can be filled in by the platform.
    """
    return [
        hidden_password_variable(
            "env.ARM_CLIENT_ID",
            config.client_id,
            "The ID of the Service Principal used for Testing",
        ),
        hidden_password_variable(
            "env.ARM_CLIENT_SECRET",
            config.client_secret.get_secret_value(),
            "The Client Secret of the Service Principal used for Testing",
        ),
        hidden_variable(
            "env.ARM_METADATA_HOST",
            config.endpoint,
            "The Azure Stack Endpoint to use",
        ),
        hidden_password_variable(
            "env.ARM_SUBSCRIPTION_ID",
            config.subscription_id,
            "The ID of the Azure Subscription used for Testing",
        ),
        hidden_password_variable(
            "env.ARM_TENANT_ID",
            config.tenant_id,
            "The ID of the Azure Tenant used for Testing",
        ),
        hidden_variable(
            "env.ARM_TEST_LOCATION",
            locations.primary,
            "The Primary region which should be used for testing",
        ),
        hidden_variable(
            "env.ARM_TEST_LOCATION_ALT",
            locations.secondary,
            "The Secondary region which should be used for testing",
        ),
        hidden_variable(
            "env.ARM_TEST_LOCATION_ALT2",
            locations.ternary,
            "The Ternary region which should be used for testing",
        ),
        hidden_variable(
            "env.ARM_THREEPOINTZERO_BETA_RESOURCES",
            "true",
            "Opt into the use of 3.0 beta resources",
        ),
    ]


def acceptance_test_parameters(
    parallelism: int, timeout: int, prefix: str = ACCEPTANCE_TEST_PREFIX
) -> Sequence[Parameter]:
    return [
        Parameter(name="PARALLELISM", value=str(parallelism)),
        Parameter(name="TEST_PREFIX", value=prefix),
        Parameter(name="TIMEOUT", value=str(timeout)),
    ]


def acceptance_tests_flag() -> Parameter:
    return hidden_variable(
        "env.TF_ACC", "1", "Set to a value to run the Acceptance Tests"
    )


def terraform_core_binary_testing(version: str) -> Parameter:
    return hidden_variable(
        "env.TF_ACC_TERRAFORM_VERSION",
        version,
        "The version of Terraform Core which should be used for testing",
    )


def terraform_should_panic_for_schema_errors() -> Parameter:
    return hidden_variable(
        "env.TF_SCHEMA_PANIC_ON_ERROR",
        "true",
        "Panic if unknown/unmatched fields are set into the state",
    )


def read_only_settings() -> Parameter:
    return hidden_variable(
        "teamcity.ui.settings.readOnly",
        "true",
        "Requires build configurations be edited via Kotlin",
    )


def service_path(package_name: str) -> str:
    """Path of a service package inside the provider repository."""
    return f"./internal/services/{package_name}"


def working_directory(package_name: str) -> Parameter:
    return hidden_variable(
        "SERVICE_PATH",
        service_path(package_name),
        "The path at which to run - automatically updated",
    )


def go_test_feature(enabled: bool) -> Sequence[BuildFeature]:
    """Go test reporting, present only when enabled."""
    if not enabled:
        return []
    return [BuildFeature(type=GO_TEST_FEATURE_TYPE, params={"test.format": "json"})]


def configure_go_env() -> BuildStep:
    return BuildStep(
        name="Configure Go Version",
        script_content="goenv install -s $(goenv local) && goenv rehash",
    )


def download_terraform_binary(version: str) -> BuildStep:
    url = (
        f"https://releases.hashicorp.com/terraform/{version}"
        f"/terraform_{version}_linux_amd64.zip"
    )
    return BuildStep(
        name=f"Download Terraform Core v{version}",
        script_content=(
            f"mkdir -p tools && wget -O tf.zip {url} "
            "&& unzip tf.zip && mv terraform tools/"
        ),
    )


def run_acceptance_tests(package_name: str, use_go_test: bool) -> Sequence[BuildStep]:
    """Steps running the acceptance tests of one service package.

    Some packages keep their tests in a ``tests`` subfolder; the first step
    points SERVICE_PATH at it when present.
    """
    package_path = service_path(package_name)
    set_tests_path = (
        f"##teamcity[setParameter name='SERVICE_PATH' value='{package_path}/tests']"
    )
    steps = [
        BuildStep(
            name="Determine Working Directory for this Package",
            script_content=(
                f'if [ -d "{package_path}/tests" ]; '
                f'then echo "{set_tests_path}"; fi'
            ),
        )
    ]

    if use_go_test:
        steps.append(
            BuildStep(
                name="Run Tests",
                script_content=(
                    'go test -v "%SERVICE_PATH%" -timeout="%TIMEOUT%h" '
                    '-test.parallel="%PARALLELISM%" -run="%TEST_PREFIX%" -json'
                ),
            )
        )
        return steps

    steps.extend(
        [
            BuildStep(
                name="Compile Test Binary",
                script_content="go test -c -o test-binary",
                working_dir="%SERVICE_PATH%",
            ),
            BuildStep(
                name="Run via jen20/teamcity-go-test",
                script_content=(
                    './test-binary -test.list="%TEST_PREFIX%" | teamcity-go-test '
                    '-test ./test-binary -parallelism "%PARALLELISM%" '
                    '-timeout "%TIMEOUT%h"'
                ),
                working_dir="%SERVICE_PATH%",
            ),
        ]
    )
    return steps


def run_acceptance_tests_for_pull_request(use_go_test: bool) -> BuildStep:
    command = (
        'go test -v "./internal/services/%SERVICES%/..." -timeout="%TIMEOUT%h" '
        '-test.parallel="%PARALLELISM%" -run="%TEST_PREFIX%"'
    )
    if use_go_test:
        command += " -json"
    return BuildStep(name="Run Tests", script_content=command)


def run_nightly(
    start_hour: int, days_of_week: str, days_of_month: str
) -> ScheduleTrigger:
    """Cron trigger running the tests on the main branch."""
    return ScheduleTrigger(
        branch_filter=MAIN_BRANCH_FILTER,
        hours=str(start_hour),
        day_of_week=days_of_week,
        day_of_month=days_of_month,
    )
