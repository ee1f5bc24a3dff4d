"""Regions used by the acceptance tests."""

from pydantic import Field

from azurestack_teamcity.models.base import Model


class LocationConfiguration(Model):
    """Named regions for one environment."""

    primary: str = Field(..., description="Primary region")
    secondary: str = Field(..., description="Secondary region")
    ternary: str = Field(..., description="Third region")
    rotate: bool = Field(
        default=False, description="Whether tests rotate between the regions"
    )
