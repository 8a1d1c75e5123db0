"""Finalized project snapshot."""

from pydantic import BaseModel, ConfigDict, Field

from ciproject.models.feature import CustomFeature, IssueTrackerIntegration
from ciproject.models.pipeline import BuildPipeline, FrozenParams

DEFAULT_DSL_VERSION = "2021.2"


class Project(BaseModel):
    """Immutable result of ``ConfigBuilder.build()``."""

    model_config = ConfigDict(frozen=True)

    version: str = Field(default=DEFAULT_DSL_VERSION, description="Settings DSL version")
    build_types: tuple[BuildPipeline, ...] = Field(
        default=(), description="Build types in registration order"
    )
    params: FrozenParams = Field(
        default_factory=dict, validate_default=True, description="Project parameters"
    )
    features: tuple[IssueTrackerIntegration | CustomFeature, ...] = Field(
        default=(), description="Project features"
    )

    def get_build_type(self, id: str) -> BuildPipeline | None:
        """Look up a build type by id."""
        for pipeline in self.build_types:
            if pipeline.id == id:
                return pipeline
        return None
