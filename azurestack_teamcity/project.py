"""Assembly of the TeamCity project for an Azure Stack environment."""

import logging
from collections.abc import Sequence

from azurestack_teamcity.builders.pull_request import PullRequest
from azurestack_teamcity.builders.service import ServiceDetails
from azurestack_teamcity.models.build import BuildType, Project
from azurestack_teamcity.models.client import ClientConfiguration
from azurestack_teamcity.models.location import LocationConfiguration
from azurestack_teamcity.settings import DEFAULT_SETTINGS, Settings
from azurestack_teamcity.vcs_root import PROVIDER_REPOSITORY

log = logging.getLogger(__name__)


class UnknownEnvironmentError(KeyError):
    """Raised when no locations are configured for an environment."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else super().__str__()


def azure_stack(
    environment: str,
    client_config: ClientConfiguration,
    settings: Settings | None = None,
) -> Project:
    """Build the project for an environment.

    Args:
        environment: Environment name (e.g., "stack")
        client_config: Credentials exposed to the tests
        settings: Generation settings (default: built-in settings)

    Returns:
        The pull request build type followed by one build type per service

    Raises:
        UnknownEnvironmentError: If the environment has no locations

    """
    settings = settings or DEFAULT_SETTINGS
    locations = locations_for(environment, settings)

    build_types = [
        pull_request_build_configuration(
            environment, client_config, settings, locations
        ),
        *build_configurations_for_services(
            environment, client_config, settings, locations
        ),
    ]
    log.info(
        "Generated %d build type(s) for environment %s", len(build_types), environment
    )
    return Project(
        environment=environment,
        vcs_roots=[PROVIDER_REPOSITORY],
        build_types=build_types,
    )


def locations_for(environment: str, settings: Settings) -> LocationConfiguration:
    """Return the regions configured for an environment."""
    try:
        return settings.locations[environment]
    except KeyError:
        available = sorted(settings.locations)
        raise UnknownEnvironmentError(
            f"Environment '{environment}' not found. "
            f"Available environments: {available}"
        ) from None


def build_configurations_for_services(
    environment: str,
    client_config: ClientConfiguration,
    settings: Settings,
    locations: LocationConfiguration,
) -> Sequence[BuildType]:
    """Create one build type per service package that is not excluded."""
    build_types: list[BuildType] = []
    for package_name, display_name in settings.services_to_build().items():
        test_config = settings.test_configuration_for(package_name)
        service = ServiceDetails(
            package_name=package_name,
            display_name=display_name,
            environment=environment,
        )
        log.debug(
            "Service %s: parallelism=%d timeout=%dh",
            package_name,
            test_config.parallelism,
            test_config.timeout,
        )
        build_types.append(
            service.build_configuration(
                settings, test_config, client_config, test_config.locations(locations)
            )
        )
    return build_types


def pull_request_build_configuration(
    environment: str,
    client_config: ClientConfiguration,
    settings: Settings,
    locations: LocationConfiguration,
) -> BuildType:
    return PullRequest(environment=environment).build_configuration(
        settings, client_config, locations
    )
