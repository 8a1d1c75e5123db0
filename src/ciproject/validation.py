"""Structural checks run by ``ConfigBuilder.build()``."""

import re
from collections.abc import Iterable

from ciproject.errors import (
    ConfigError,
    DuplicateIdError,
    DuplicateParameterError,
    MalformedReferenceError,
)
from ciproject.models import BuildPipeline, Feature

# Latin letter first, then letters, digits and underscores.
EXTERNAL_ID_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9_]*$")
MAX_EXTERNAL_ID_LENGTH = 225


def is_external_id(value: str) -> bool:
    """Check whether ``value`` is a well-formed external id."""
    return (
        isinstance(value, str)
        and len(value) <= MAX_EXTERNAL_ID_LENGTH
        and EXTERNAL_ID_PATTERN.match(value) is not None
    )


def _check_unique(scope: str, ids: Iterable[str], errors: list[ConfigError]) -> None:
    seen: set[str] = set()
    for id in ids:
        if id in seen:
            errors.append(DuplicateIdError(scope, id))
        seen.add(id)


def validate_pipeline(pipeline: BuildPipeline) -> list[ConfigError]:
    """Collect every violation inside a single build type."""
    errors: list[ConfigError] = []
    context = f"build type '{pipeline.id}'"

    if not is_external_id(pipeline.id):
        errors.append(MalformedReferenceError(pipeline.id, "build type id"))

    seen_templates: set[str] = set()
    for template in pipeline.templates:
        if not is_external_id(template):
            errors.append(MalformedReferenceError(template, f"templates of {context}"))
        elif template in seen_templates:
            errors.append(DuplicateIdError(f"template in {context}", template))
        seen_templates.add(template)

    seen_steps: set[str] = set()
    for index, step in enumerate(pipeline.steps):
        if not step.id:
            errors.append(
                MalformedReferenceError(step.id, f"step #{index + 1} of {context}")
            )
        elif step.id in seen_steps:
            errors.append(DuplicateIdError(f"step in {context}", step.id))
        seen_steps.add(step.id)

        if not step.type:
            errors.append(
                MalformedReferenceError(step.type, f"type of step '{step.id}' in {context}")
            )

    return errors


def validate_project(
    pipelines: Iterable[BuildPipeline],
    params: Iterable[str],
    features: Iterable[Feature],
) -> list[ConfigError]:
    """
    Walk the whole project graph and collect every violation.

    Template references are only checked for syntax; whether they exist is
    up to the CI server.
    """
    pipelines = list(pipelines)
    errors: list[ConfigError] = []

    _check_unique("build type", (p.id for p in pipelines), errors)
    for pipeline in pipelines:
        errors.extend(validate_pipeline(pipeline))

    seen_params: set[str] = set()
    for name in params:
        if name in seen_params:
            errors.append(DuplicateParameterError(name))
        seen_params.add(name)

    feature_ids = []
    for feature in features:
        if not feature.id:
            errors.append(MalformedReferenceError(feature.id, f"{feature.kind} feature id"))
        else:
            feature_ids.append(feature.id)
    _check_unique("feature", feature_ids, errors)

    return errors
