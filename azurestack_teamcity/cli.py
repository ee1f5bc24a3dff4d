"""CLI entry point generating and validating the TeamCity project."""

import argparse
import json
import logging
import os
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from azurestack_teamcity.models.build import Project
from azurestack_teamcity.models.client import PARAMETER_NAMES, ClientConfiguration
from azurestack_teamcity.project import UnknownEnvironmentError, azure_stack
from azurestack_teamcity.settings import DEFAULT_SETTINGS, Settings
from azurestack_teamcity.settings_loader import SettingsError, load_settings
from azurestack_teamcity.validation import Violation, validate_project

ENVIRONMENT_VARIABLE_PREFIX = "TEAMCITY_"

EXIT_OK = 0
EXIT_VIOLATIONS = 1
EXIT_CONFIGURATION_ERROR = 2


class InvalidParameterError(ValueError):
    """Raised when a command line parameter isn't in KEY=VALUE form."""


def parse_parameters(raw_parameters: Sequence[str]) -> Mapping[str, str]:
    """Parse KEY=VALUE pairs; later pairs win."""
    parameters: dict[str, str] = {}
    for raw in raw_parameters:
        key, sep, value = raw.partition("=")
        if not sep or not key.strip():
            raise InvalidParameterError(
                f"Invalid parameter '{raw}', expected KEY=VALUE"
            )
        parameters[key.strip()] = value
    return parameters


def collect_parameters(
    cli_parameters: Mapping[str, str], environ: Mapping[str, str]
) -> Mapping[str, str]:
    """Merge command line parameters with TEAMCITY_* environment variables.

    Command line values take precedence; parameters given nowhere are left
    out and later default to an empty string.
    """
    parameters: dict[str, str] = {}
    for field, name in PARAMETER_NAMES.items():
        env_name = f"{ENVIRONMENT_VARIABLE_PREFIX}{field.upper()}"
        if name in cli_parameters:
            parameters[name] = cli_parameters[name]
        elif env_name in environ:
            parameters[name] = environ[env_name]
    return parameters


def log_project_summary(
    log: logging.Logger, project: Project, violations: Sequence[Violation]
) -> None:
    """Log the generated build types and any violations."""
    log.info("=" * 80)
    log.info("Project Summary (environment=%s):", project.environment)
    log.info("=" * 80)

    for build_type in project.build_types:
        log.info(
            "%s: %s (parallelism=%s, triggers=%d)",
            build_type.id,
            build_type.name,
            build_type.parallelism,
            len(build_type.schedule_triggers),
        )

    for violation in violations:
        log.error("%s: %s", violation.build_type_id, violation.message)


def format_output(
    project: Project, violations: Sequence[Violation]
) -> dict[str, Any]:
    """Format the project for JSON output, with secrets masked."""
    return {
        "project": project.model_dump(mode="json"),
        "violations": [
            {"build_type_id": v.build_type_id, "message": v.message}
            for v in violations
        ],
    }


def run(
    environment: str,
    raw_parameters: Sequence[str],
    settings_path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> int:
    """Generate and validate the project and return exit code."""
    log = logging.getLogger("azurestack_teamcity")

    try:
        settings: Settings = (
            load_settings(settings_path) if settings_path else DEFAULT_SETTINGS
        )
        parameters = collect_parameters(
            parse_parameters(raw_parameters),
            os.environ if environ is None else environ,
        )
        client_config = ClientConfiguration.from_parameters(parameters)
        project = azure_stack(environment, client_config, settings)
    except (
        FileNotFoundError,
        SettingsError,
        InvalidParameterError,
        UnknownEnvironmentError,
    ) as e:
        log.error("Configuration error: %s", e)
        return EXIT_CONFIGURATION_ERROR

    violations = validate_project(project, settings)
    log_project_summary(log, project, violations)

    print(json.dumps(format_output(project, violations), indent=2))

    return EXIT_VIOLATIONS if violations else EXIT_OK


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Generate the TeamCity project for Azure Stack acceptance tests"
    )
    parser.add_argument(
        "--environment",
        default="stack",
        help="Azure environment to generate the project for",
    )
    parser.add_argument(
        "--param",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help=(
            "DSL parameter (clientId, clientSecret, subscriptionId, tenantId, endpoint)"
        ),
    )
    parser.add_argument(
        "--settings",
        type=Path,
        default=None,
        help="YAML file overriding the default settings",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    sys.exit(
        run(
            environment=args.environment,
            raw_parameters=args.param,
            settings_path=args.settings,
        )
    )


if __name__ == "__main__":  # pragma: no cover
    main()
