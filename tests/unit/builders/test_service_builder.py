"""Tests for the service build configuration."""

from azurestack_teamcity.builders.service import ServiceDetails
from azurestack_teamcity.models.location import LocationConfiguration
from azurestack_teamcity.models.test_configuration import ServiceOverride
from azurestack_teamcity.settings import Settings
from azurestack_teamcity.testing.factories import (
    TestConfigurationFactory,
    sample_client_configuration,
)

LOCATIONS = LocationConfiguration(primary="ppe5", secondary="ppe5", ternary="ppe5")

SERVICE = ServiceDetails(
    package_name="loadbalancer", display_name="Load Balancer", environment="stack"
)


def test_id_and_name() -> None:
    """Id is upper-cased provider, environment and package."""
    build_type = SERVICE.build_configuration(
        Settings(),
        TestConfigurationFactory.build(),
        sample_client_configuration(),
        LOCATIONS,
    )

    assert build_type.id == "AZURESTACK_SERVICE_STACK_LOADBALANCER"
    assert build_type.name == "Load Balancer - Acceptance Tests"


def test_required_flags_always_set() -> None:
    """Clean checkout and fail-on-error are always on."""
    build_type = SERVICE.build_configuration(
        Settings(),
        TestConfigurationFactory.build(),
        sample_client_configuration(),
        LOCATIONS,
    )

    assert build_type.fail_on_error
    assert build_type.uses_clean_checkout
    assert build_type.vcs.root_id == "providerRepository"


def test_parameters_from_test_configuration() -> None:
    """Parallelism, timeout and execution timeout follow the test configuration."""
    test_config = TestConfigurationFactory.build(parallelism=3, timeout=2)

    build_type = SERVICE.build_configuration(
        Settings(), test_config, sample_client_configuration(), LOCATIONS
    )

    assert build_type.parallelism == 3
    assert build_type.param("TIMEOUT").plain_value() == "2"
    assert build_type.param("TEST_PREFIX").plain_value() == "TestAcc"
    assert (
        build_type.param("SERVICE_PATH").plain_value()
        == "./internal/services/loadbalancer"
    )
    assert build_type.param("env.TF_ACC_TERRAFORM_VERSION").plain_value() == "1.0.3"
    assert build_type.failure_conditions.execution_timeout_min == 120


def test_nightly_trigger_uses_schedule() -> None:
    """Attaches a cron trigger from the test configuration."""
    test_config = TestConfigurationFactory.build(
        start_hour=3, days_of_week="1", days_of_month="15"
    )

    build_type = SERVICE.build_configuration(
        Settings(), test_config, sample_client_configuration(), LOCATIONS
    )

    (trigger,) = build_type.schedule_triggers
    assert trigger.hours == "3"
    assert trigger.day_of_week == "1"
    assert trigger.day_of_month == "15"


def test_no_trigger_when_environment_not_nightly() -> None:
    """Environments excluded from nightly runs get no trigger."""
    settings = Settings(run_nightly={"stack": False})

    build_type = SERVICE.build_configuration(
        settings,
        TestConfigurationFactory.build(),
        sample_client_configuration(),
        LOCATIONS,
    )

    assert build_type.triggers == []
    assert build_type.fail_on_error


def test_no_trigger_when_service_disables_triggers() -> None:
    """Services may opt out of the nightly trigger."""
    test_config = ServiceOverride(disable_triggers=True).resolve(
        Settings().default_test_configuration()
    )

    build_type = SERVICE.build_configuration(
        Settings(), test_config, sample_client_configuration(), LOCATIONS
    )

    assert build_type.triggers == []


def test_go_test_feature_follows_toggle() -> None:
    """The reporting feature is present only when enabled."""
    test_config = TestConfigurationFactory.build()
    client_config = sample_client_configuration()

    enabled = SERVICE.build_configuration(
        Settings(use_teamcity_go_test=True), test_config, client_config, LOCATIONS
    )
    disabled = SERVICE.build_configuration(
        Settings(use_teamcity_go_test=False), test_config, client_config, LOCATIONS
    )

    assert enabled.has_test_reporting_feature
    assert not disabled.has_test_reporting_feature


def test_environment_variables_include_credentials() -> None:
    """Credential variables are attached and masked."""
    build_type = SERVICE.build_configuration(
        Settings(),
        TestConfigurationFactory.build(),
        sample_client_configuration(),
        LOCATIONS,
    )

    env = build_type.environment_variables
    assert env["env.ARM_CLIENT_SECRET"].masked
    assert env["env.ARM_CLIENT_SECRET"].plain_value() == "clientSecret"
    assert env["env.ARM_TEST_LOCATION"].plain_value() == "ppe5"
    assert env["env.TF_ACC"].plain_value() == "1"
