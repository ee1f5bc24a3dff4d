"""Models describing the generated TeamCity project."""

from collections.abc import Mapping, Sequence
from typing import Literal

from pydantic import Field, SecretStr

from azurestack_teamcity.models.base import Model

type ParameterKind = Literal["text", "password"]
type ParameterDisplay = Literal["normal", "hidden"]

GO_TEST_FEATURE_TYPE = "golang"
SCHEDULE_TRIGGER_TYPE = "schedulingTrigger"


class Parameter(Model):
    """A build parameter; names prefixed with ``env.`` become environment variables."""

    name: str
    value: SecretStr | str
    kind: ParameterKind = "text"
    display: ParameterDisplay = "normal"
    description: str = ""

    @property
    def masked(self) -> bool:
        """Whether the CI platform masks this value in logs and UI."""
        return self.kind == "password"

    @property
    def is_environment_variable(self) -> bool:
        return self.name.startswith("env.")

    def plain_value(self) -> str:
        """Return the value, revealing it if it is a secret."""
        if isinstance(self.value, SecretStr):
            return self.value.get_secret_value()
        return self.value


class BuildStep(Model):
    """A command line build step."""

    name: str
    script_content: str
    working_dir: str | None = None


class BuildFeature(Model):
    """A build feature such as Go test reporting."""

    type: str
    params: Mapping[str, str] = Field(default_factory=dict)


class ScheduleTrigger(Model):
    """A cron-style schedule trigger."""

    type: Literal["schedulingTrigger"] = SCHEDULE_TRIGGER_TYPE
    enabled: bool = True
    branch_filter: str
    hours: str
    day_of_week: str
    day_of_month: str
    timezone: str = "SERVER"


class VcsSettings(Model):
    """VCS attachment of a build type."""

    root_id: str
    clean_checkout: bool


class FailureConditions(Model):
    """Conditions under which a build fails."""

    error_message: bool
    execution_timeout_min: int | None = None


class BuildType(Model):
    """A single schedulable unit of CI work."""

    id: str
    name: str
    vcs: VcsSettings
    steps: Sequence[BuildStep] = Field(default_factory=list)
    failure_conditions: FailureConditions
    features: Sequence[BuildFeature] = Field(default_factory=list)
    params: Sequence[Parameter] = Field(default_factory=list)
    triggers: Sequence[ScheduleTrigger] = Field(default_factory=list)

    @property
    def environment_variables(self) -> Mapping[str, Parameter]:
        """Environment variable parameters, in declaration order."""
        return {p.name: p for p in self.params if p.is_environment_variable}

    @property
    def fail_on_error(self) -> bool:
        return self.failure_conditions.error_message

    @property
    def uses_clean_checkout(self) -> bool:
        return self.vcs.clean_checkout

    @property
    def has_test_reporting_feature(self) -> bool:
        return any(f.type == GO_TEST_FEATURE_TYPE for f in self.features)

    @property
    def schedule_triggers(self) -> Sequence[ScheduleTrigger]:
        return [t for t in self.triggers if t.type == SCHEDULE_TRIGGER_TYPE]

    @property
    def parallelism(self) -> int | None:
        """The PARALLELISM parameter as an integer, if set."""
        for param in self.params:
            if param.name == "PARALLELISM":
                return int(param.plain_value())
        return None

    def param(self, name: str) -> Parameter:
        """Look up a parameter by name.

        Raises:
            KeyError: If the build type has no such parameter

        """
        for param in self.params:
            if param.name == name:
                return param
        raise KeyError(f"Build '{self.id}' has no parameter '{name}'")


class GitVcsRoot(Model):
    """A Git VCS root."""

    id: str
    name: str
    url: str
    branch: str
    branch_spec: str
    agent_clean_policy: Literal["ALWAYS", "ON_BRANCH_CHANGE", "NEVER"]
    agent_clean_files_policy: Literal[
        "ALL_UNTRACKED", "IGNORED_ONLY", "NON_IGNORED_ONLY"
    ]
    auth_method: Literal["anonymous", "password", "uploadedKey"]


class Project(Model):
    """The TeamCity project for one environment."""

    environment: str
    vcs_roots: Sequence[GitVcsRoot] = Field(default_factory=list)
    build_types: Sequence[BuildType] = Field(default_factory=list)

    def build_type(self, build_type_id: str) -> BuildType:
        """Look up a build type by its identifier.

        Raises:
            KeyError: If the project has no such build type

        """
        for build_type in self.build_types:
            if build_type.id == build_type_id:
                return build_type
        raise KeyError(f"Build type '{build_type_id}' not found")
