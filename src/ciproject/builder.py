"""Accumulate-then-finalize builder for a CI project."""

from ciproject.errors import (
    ClosedBuilderError,
    DuplicateIdError,
    DuplicateParameterError,
    ValidationError,
)
from ciproject.models import BuildPipeline, Feature, Project
from ciproject.models.project import DEFAULT_DSL_VERSION
from ciproject.validation import validate_project


class ConfigBuilder:
    """
    Collect build types, parameters and features for one project.

    Duplicate ids and parameter names are rejected as soon as they are
    added. Everything else is checked by ``build()``, which reports every
    violation at once and, on success, freezes the builder.
    """

    def __init__(self, version: str = DEFAULT_DSL_VERSION):
        """
        Initialize an empty, open builder.

        Args:
            version: Settings DSL version written to the output
        """
        self.version = version
        self._pipelines: list[BuildPipeline] = []
        self._params: dict[str, str] = {}
        self._features: list[Feature] = []
        self._project: Project | None = None

    @property
    def closed(self) -> bool:
        return self._project is not None

    @property
    def pipelines(self) -> tuple[BuildPipeline, ...]:
        return tuple(self._pipelines)

    @property
    def parameters(self) -> dict[str, str]:
        return dict(self._params)

    @property
    def features(self) -> tuple[Feature, ...]:
        return tuple(self._features)

    def _ensure_open(self, operation: str) -> None:
        if self.closed:
            raise ClosedBuilderError(operation)

    def declare_parameter(self, name: str, value: str) -> "ConfigBuilder":
        """
        Declare a project parameter.

        Raises:
            ValueError: If name is empty
            DuplicateParameterError: If name is already declared
        """
        self._ensure_open("declare_parameter")
        if not name:
            raise ValueError("Parameter name must not be empty")
        if name in self._params:
            raise DuplicateParameterError(name)
        self._params[name] = value
        return self

    def add_build_pipeline(self, pipeline: BuildPipeline) -> "ConfigBuilder":
        """
        Register a build type. Registration order is kept.

        Raises:
            DuplicateIdError: If another build type has the same id
        """
        self._ensure_open("add_build_pipeline")
        if any(existing.id == pipeline.id for existing in self._pipelines):
            raise DuplicateIdError("build type", pipeline.id)
        self._pipelines.append(pipeline)
        return self

    def add_feature(self, feature: Feature) -> "ConfigBuilder":
        """
        Attach a project feature.

        Raises:
            DuplicateIdError: If another feature has the same id
        """
        self._ensure_open("add_feature")
        if any(existing.id == feature.id for existing in self._features):
            raise DuplicateIdError("feature", feature.id)
        self._features.append(feature)
        return self

    def merge(self, other: "ConfigBuilder") -> "ConfigBuilder":
        """
        Replay another builder's declarations into this one, in order.

        Collisions raise the same errors as the individual calls would,
        before anything is added.
        """
        self._ensure_open("merge")
        for name in other._params:
            if name in self._params:
                raise DuplicateParameterError(name)
        pipeline_ids = {p.id for p in self._pipelines}
        for pipeline in other._pipelines:
            if pipeline.id in pipeline_ids:
                raise DuplicateIdError("build type", pipeline.id)
        feature_ids = {f.id for f in self._features}
        for feature in other._features:
            if feature.id in feature_ids:
                raise DuplicateIdError("feature", feature.id)

        for name, value in other._params.items():
            self.declare_parameter(name, value)
        for pipeline in other._pipelines:
            self.add_build_pipeline(pipeline)
        for feature in other._features:
            self.add_feature(feature)
        return self

    def build(self) -> Project:
        """
        Validate the project and return an immutable snapshot.

        A second call returns the snapshot produced by the first one.

        Raises:
            ValidationError: Listing every violation found
        """
        if self._project is not None:
            return self._project

        errors = validate_project(self._pipelines, self._params, self._features)
        if errors:
            raise ValidationError(errors)

        self._project = Project(
            version=self.version,
            build_types=tuple(self._pipelines),
            params=dict(self._params),
            features=tuple(self._features),
        )
        return self._project
