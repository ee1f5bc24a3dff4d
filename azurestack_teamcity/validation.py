"""Checks that a generated project satisfies the required invariants."""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from azurestack_teamcity.models.build import BuildType, Project
from azurestack_teamcity.settings import DEFAULT_SETTINGS, Settings

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class Violation:
    """A violated invariant and the build type (or project) that broke it."""

    build_type_id: str
    message: str

    def __str__(self) -> str:
        return self.message


class ProjectValidationError(Exception):
    """Raised when a generated project violates an invariant."""

    def __init__(self, violation: Violation) -> None:
        super().__init__(f"{violation.build_type_id}: {violation.message}")
        self.violation = violation


def check_fail_on_error(build_type: BuildType) -> str | None:
    if not build_type.fail_on_error:
        return f"Build '{build_type.id}' should fail on errors!"
    return None


def check_clean_checkout(build_type: BuildType) -> str | None:
    if not build_type.uses_clean_checkout:
        return f"Build '{build_type.id}' doesn't use clean checkout"
    return None


def check_test_reporting_feature(build_type: BuildType) -> str | None:
    if not build_type.has_test_reporting_feature:
        return f"Build '{build_type.name}' doesn't have Go Test Json enabled"
    return None


def validate_project(
    project: Project, settings: Settings | None = None
) -> Sequence[Violation]:
    """Collect every violation in the project, in build type order.

    The reporting feature is required only when Go test reporting is
    enabled; a trigger is required only when the environment runs nightly.
    """
    settings = settings or DEFAULT_SETTINGS
    checks: list[Callable[[BuildType], str | None]] = [check_fail_on_error]
    if settings.use_teamcity_go_test:
        checks.append(check_test_reporting_feature)
    checks.append(check_clean_checkout)

    violations = [
        Violation(build_type_id=build_type.id, message=message)
        for build_type in project.build_types
        for check in checks
        if (message := check(build_type)) is not None
    ]

    if settings.nightly_enabled(project.environment) and not any(
        build_type.schedule_triggers for build_type in project.build_types
    ):
        violations.append(
            Violation(
                build_type_id=project.environment,
                message="The Build Configuration should have a Trigger",
            )
        )

    for violation in violations:
        log.debug("Violation in %s: %s", violation.build_type_id, violation.message)
    return violations


def check_project(project: Project, settings: Settings | None = None) -> None:
    """Raise for the first violated invariant.

    Raises:
        ProjectValidationError: If any invariant is violated

    """
    if violations := validate_project(project, settings):
        raise ProjectValidationError(violations[0])
