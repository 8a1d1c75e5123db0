"""Repository information models."""

from pydantic import BaseModel, Field


class RepositoryInfo(BaseModel):
    """Information about a GitHub repository."""

    owner: str = Field(..., description="Repository owner/organization")
    name: str = Field(..., description="Repository name")
    default_branch: str = Field(default="main", description="Default branch (e.g., main)")
    html_url: str = Field(..., description="Repository web URL")

    @property
    def full_name(self) -> str:
        """Get ``owner/name``."""
        return f"{self.owner}/{self.name}"
