"""Base model configuration for all configuration values."""

from pydantic import BaseModel, ConfigDict


class Model(BaseModel):
    """Immutable model; unknown fields are rejected."""

    model_config = ConfigDict(frozen=True, extra="forbid")
