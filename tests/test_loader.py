import json
from pathlib import Path

import pytest

from ciproject import ExecutionMode, IssueTrackerIntegration
from ciproject.errors import DefinitionError, DuplicateIdError, ValidationError
from ciproject.loader import builder_from_dict, load_definition
from ciproject.serializers import project_to_dict

DEFINITION = {
    "params": {"git_main_branch": "main", "github_repository_name": "GradleUtils"},
    "buildTypes": [
        {
            "id": "Build",
            "name": "Build",
            "templates": ["T1", "T2", "T3"],
            "steps": [
                {
                    "name": "Build",
                    "id": "RUNNER_2",
                    "type": "ExecuteGradleTask",
                    "executionMode": "ALWAYS",
                    "params": {"gradle_tasks": "%gradle_build_task%"},
                }
            ],
        },
        {"name": "Pull Requests", "templates": ["T1", "T4", "T2"]},
    ],
    "features": [
        {
            "kind": "IssueTrackerIntegration",
            "id": "PROJECT_EXT_4",
            "displayName": "MinecraftForge/GradleUtils",
            "repositoryURL": "https://github.com/MinecraftForge/GradleUtils",
        }
    ],
}


def _write(tmp_path, data) -> Path:
    path = tmp_path / "project.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_load_definition(tmp_path):
    project = load_definition(_write(tmp_path, DEFINITION)).build()

    assert [p.id for p in project.build_types] == ["Build", "PullRequests"]
    assert project.build_types[0].steps[0].execution_mode is ExecutionMode.ALWAYS
    assert project.params["github_repository_name"] == "GradleUtils"
    (feature,) = project.features
    assert isinstance(feature, IssueTrackerIntegration)
    assert feature.display_name == "MinecraftForge/GradleUtils"


def test_serialized_output_loads_back(gradleutils_builder):
    project = gradleutils_builder.build()

    assert builder_from_dict(project_to_dict(project)).build() == project


def test_duplicate_build_type_in_file(tmp_path):
    data = dict(DEFINITION, buildTypes=DEFINITION["buildTypes"] + [{"id": "Build", "name": "Again"}])

    with pytest.raises(DuplicateIdError, match="Build"):
        load_definition(_write(tmp_path, data))


def test_invalid_references_surface_at_build(tmp_path):
    data = dict(DEFINITION, buildTypes=[{"id": "Build", "name": "Build", "templates": ["bad id"]}])
    builder = load_definition(_write(tmp_path, data))

    with pytest.raises(ValidationError):
        builder.build()


def test_missing_file(tmp_path):
    with pytest.raises(DefinitionError, match="missing.json"):
        load_definition(tmp_path / "missing.json")


def test_invalid_json(tmp_path):
    path = tmp_path / "project.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(DefinitionError, match="invalid JSON"):
        load_definition(path)


@pytest.mark.parametrize(
    "data",
    [
        [],
        {"params": ["a", "b"]},
        {"buildTypes": [{"id": "Build"}]},
        {"features": [{"kind": "IssueTrackerIntegration", "id": "PROJECT_EXT_4"}]},
        {"params": {"": "x"}},
        {"project": []},
        {"buildTypes": [42]},
        {"buildTypes": {"id": "Build"}},
        {"features": ["PROJECT_EXT_4"]},
    ],
)
def test_malformed_documents(tmp_path, data):
    with pytest.raises(DefinitionError):
        load_definition(_write(tmp_path, data))


def test_repeated_parameter_key_is_rejected(tmp_path):
    path = tmp_path / "project.json"
    path.write_text('{"params": {"a": "1", "a": "2"}}', encoding="utf-8")

    with pytest.raises(DefinitionError, match="duplicate key 'a'"):
        load_definition(path)


def test_repeated_key_in_step_params_is_rejected(tmp_path):
    path = tmp_path / "project.json"
    path.write_text(
        '{"buildTypes": [{"id": "Build", "name": "Build", "steps": [{"name": "Build",'
        ' "id": "RUNNER_1", "type": "gradle", "params": {"t": "1", "t": "2"}}]}]}',
        encoding="utf-8",
    )

    with pytest.raises(DefinitionError, match="duplicate key 't'"):
        load_definition(path)
