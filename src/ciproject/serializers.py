"""Output formats for a finalized project."""

import json
from typing import Any

from ciproject.models import BuildPipeline, IssueTrackerIntegration, Project, Step

DSL_PACKAGE = "jetbrains.buildServer.configs.kotlin.v2019_2"
INDENT = "    "

# Names a build type object must not take: DSL types and Kotlin keywords
RESERVED_OBJECT_NAMES = frozenset(
    {
        "AbsoluteId", "BuildStep", "BuildType", "DslContext", "Project",
        "RelativeId", "Template", "VcsRoot", "project", "version",
        "as", "break", "class", "continue", "do", "else", "false", "for", "fun",
        "if", "in", "interface", "is", "null", "object", "package", "return",
        "super", "this", "throw", "true", "try", "typealias", "typeof", "val",
        "var", "when", "while",
    }
)


def step_to_dict(step: Step) -> dict[str, Any]:
    return {
        "name": step.name,
        "id": step.id,
        "type": step.type,
        "executionMode": step.execution_mode.value,
        "params": dict(step.params),
    }


def pipeline_to_dict(pipeline: BuildPipeline) -> dict[str, Any]:
    data: dict[str, Any] = {"id": pipeline.id, "name": pipeline.name}
    if pipeline.description is not None:
        data["description"] = pipeline.description
    data["templates"] = list(pipeline.templates)
    data["steps"] = [step_to_dict(step) for step in pipeline.steps]
    return data


def project_to_dict(project: Project) -> dict[str, Any]:
    """Convert a project into the plain ``{"project": {...}}`` tree."""
    return {
        "project": {
            "version": project.version,
            "buildTypes": [pipeline_to_dict(p) for p in project.build_types],
            "params": dict(project.params),
            "features": [
                {"kind": f.kind, "id": f.id, "attributes": dict(f.attributes)}
                for f in project.features
            ],
        }
    }


def to_json(project: Project, indent: int = 2) -> str:
    """Serialize a project to JSON."""
    return json.dumps(project_to_dict(project), indent=indent)


def kotlin_string(value: str) -> str:
    """Quote ``value`` as a Kotlin string literal."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("$", "\\$")
    escaped = escaped.replace("\n", "\\n")
    return f'"{escaped}"'


def _step_lines(step: Step) -> list[str]:
    lines = [
        "step {",
        f"{INDENT}name = {kotlin_string(step.name)}",
        f"{INDENT}id = {kotlin_string(step.id)}",
        f"{INDENT}type = {kotlin_string(step.type)}",
        f"{INDENT}executionMode = BuildStep.ExecutionMode.{step.execution_mode.value}",
    ]
    for key, value in step.params.items():
        lines.append(f"{INDENT}param({kotlin_string(key)}, {kotlin_string(value)})")
    lines.append("}")
    return lines


def object_names(pipelines) -> dict[str, str]:
    """
    Map build type ids to Kotlin object names.

    Ids are used as-is unless they clash with a reserved name, in which
    case a numeric suffix is added (``Project`` becomes ``Project_1``).
    """
    ids = {pipeline.id for pipeline in pipelines}
    taken: set[str] = set()
    names: dict[str, str] = {}
    for pipeline in pipelines:
        name = pipeline.id
        suffix = 0
        while name in RESERVED_OBJECT_NAMES or name in taken or (
            name != pipeline.id and name in ids
        ):
            suffix += 1
            name = f"{pipeline.id}_{suffix}"
        taken.add(name)
        names[pipeline.id] = name
    return names


def _build_type_lines(pipeline: BuildPipeline, object_name: str) -> list[str]:
    body: list[str] = []
    if pipeline.templates:
        refs = ", ".join(f"AbsoluteId({kotlin_string(t)})" for t in pipeline.templates)
        body.append(f"templates({refs})")
    body.append(f"id({kotlin_string(pipeline.id)})")
    body.append(f"name = {kotlin_string(pipeline.name)}")
    if pipeline.description is not None:
        body.append(f"description = {kotlin_string(pipeline.description)}")

    if pipeline.steps:
        body.append("")
        body.append("steps {")
        for step in pipeline.steps:
            body.extend(INDENT + line for line in _step_lines(step))
        body.append("}")

    lines = [f"object {object_name} : BuildType({{"]
    lines.extend(INDENT + line if line else line for line in body)
    lines.append("})")
    return lines


def _feature_lines(feature) -> list[str]:
    if isinstance(feature, IssueTrackerIntegration):
        return [
            "githubIssues {",
            f"{INDENT}id = {kotlin_string(feature.id)}",
            f"{INDENT}displayName = {kotlin_string(feature.display_name)}",
            f"{INDENT}repositoryURL = {kotlin_string(feature.repository_url)}",
            "}",
        ]

    lines = [
        "feature {",
        f"{INDENT}id = {kotlin_string(feature.id)}",
        f"{INDENT}type = {kotlin_string(feature.kind)}",
    ]
    for key, value in feature.attributes.items():
        lines.append(f"{INDENT}param({kotlin_string(key)}, {kotlin_string(value)})")
    lines.append("}")
    return lines


def to_kotlin_dsl(project: Project) -> str:
    """Render a project as a TeamCity ``settings.kts`` script."""
    names = object_names(project.build_types)
    imports = [f"import {DSL_PACKAGE}.*"]
    if any(isinstance(f, IssueTrackerIntegration) for f in project.features):
        imports.append(f"import {DSL_PACKAGE}.projectFeatures.githubIssues")

    body: list[str] = [""]
    for pipeline in project.build_types:
        body.append(f"buildType({names[pipeline.id]})")

    if project.params:
        body.append("")
        body.append("params {")
        for name, value in project.params.items():
            body.append(f"{INDENT}param({kotlin_string(name)}, {kotlin_string(value)})")
        body.append("}")

    if project.features:
        body.append("")
        body.append("features {")
        for feature in project.features:
            body.extend(INDENT + line for line in _feature_lines(feature))
        body.append("}")

    lines = imports + ["", f"version = {kotlin_string(project.version)}", "", "project {"]
    lines.extend(INDENT + line if line else line for line in body)
    lines.append("}")

    for pipeline in project.build_types:
        lines.append("")
        lines.extend(_build_type_lines(pipeline, names[pipeline.id]))

    return "\n".join(lines) + "\n"
