"""Tests for the pull request build configuration."""

from azurestack_teamcity.builders.pull_request import PullRequest
from azurestack_teamcity.models.location import LocationConfiguration
from azurestack_teamcity.settings import Settings
from azurestack_teamcity.testing.factories import sample_client_configuration

LOCATIONS = LocationConfiguration(primary="ppe5", secondary="ppe5", ternary="ppe5")


def test_pull_request_build_type() -> None:
    """Builds an on-demand build with default parallelism and no trigger."""
    settings = Settings(default_parallelism=7, pull_request_services="network")

    build_type = PullRequest(environment="stack").build_configuration(
        settings, sample_client_configuration(), LOCATIONS
    )

    assert build_type.id == "AZURESTACK_PR_STACK"
    assert build_type.name == "! Run Pull Request"
    assert build_type.parallelism == 7
    assert build_type.param("SERVICES").plain_value() == "network"
    assert build_type.triggers == []
    assert build_type.fail_on_error
    assert build_type.uses_clean_checkout
    assert build_type.failure_conditions.execution_timeout_min is None
    assert "env.ARM_CLIENT_ID" in build_type.environment_variables


def test_pull_request_default_services() -> None:
    """Without settings the pull request build tests the resource package."""
    build_type = PullRequest(environment="stack").build_configuration(
        Settings(), sample_client_configuration(), LOCATIONS
    )

    assert build_type.param("SERVICES").plain_value() == "resource"
