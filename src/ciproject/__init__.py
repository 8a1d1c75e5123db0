"""Typed project-configuration builder for a TeamCity-style CI server."""

from ciproject.builder import ConfigBuilder
from ciproject.errors import (
    ClosedBuilderError,
    ConfigError,
    DefinitionError,
    DuplicateIdError,
    DuplicateParameterError,
    MalformedReferenceError,
    ValidationError,
)
from ciproject.models import (
    BuildPipeline,
    CustomFeature,
    ExecutionMode,
    IssueTrackerIntegration,
    Project,
    Step,
)

__version__ = "0.1.0"

__all__ = [
    "BuildPipeline",
    "ClosedBuilderError",
    "ConfigBuilder",
    "ConfigError",
    "CustomFeature",
    "DefinitionError",
    "DuplicateIdError",
    "DuplicateParameterError",
    "ExecutionMode",
    "IssueTrackerIntegration",
    "MalformedReferenceError",
    "Project",
    "Step",
    "ValidationError",
]
