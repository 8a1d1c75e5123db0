"""Data models for ciproject."""

from ciproject.models.feature import CustomFeature, Feature, IssueTrackerIntegration
from ciproject.models.pipeline import BuildPipeline, ExecutionMode, Step
from ciproject.models.project import Project
from ciproject.models.repository import RepositoryInfo

__all__ = [
    "BuildPipeline",
    "CustomFeature",
    "ExecutionMode",
    "Feature",
    "IssueTrackerIntegration",
    "Project",
    "RepositoryInfo",
    "Step",
]
