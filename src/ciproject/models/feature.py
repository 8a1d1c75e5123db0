"""Project features (integrations attached at project scope)."""

from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from ciproject.models.pipeline import FrozenParams

ISSUE_TRACKER_KIND = "IssueTrackerIntegration"


class IssueTrackerIntegration(BaseModel):
    """GitHub issue tracker integration."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["IssueTrackerIntegration"] = ISSUE_TRACKER_KIND
    id: str = Field(..., description="Feature id, unique within the project")
    display_name: str = Field(..., description="Name shown in the CI server")
    repository_url: str = Field(..., description="Repository hosting the issues")

    @property
    def attributes(self) -> dict[str, str]:
        return {
            "displayName": self.display_name,
            "repositoryURL": self.repository_url,
        }


class CustomFeature(BaseModel):
    """Any other feature kind, passed through to the CI server as-is."""

    model_config = ConfigDict(frozen=True)

    kind: str = Field(..., description="Feature type understood by the CI server")
    id: str = Field(..., description="Feature id, unique within the project")
    attributes: FrozenParams = Field(
        default_factory=dict, validate_default=True, description="Feature parameters"
    )


Feature = Union[IssueTrackerIntegration, CustomFeature]


def feature_from_dict(data: dict) -> Feature:
    """Build the feature variant matching ``data["kind"]``."""
    kind = data.get("kind")
    if kind == ISSUE_TRACKER_KIND:
        attributes = data.get("attributes", {})
        return IssueTrackerIntegration(
            id=data.get("id"),
            display_name=data.get("display_name", attributes.get("displayName")),
            repository_url=data.get("repository_url", attributes.get("repositoryURL")),
        )
    return CustomFeature.model_validate(data)
