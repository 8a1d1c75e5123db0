"""Load JSON project definitions into a ConfigBuilder."""

import json
from pathlib import Path
from typing import Any

from ciproject.builder import ConfigBuilder
from ciproject.errors import DefinitionError
from ciproject.models import BuildPipeline
from ciproject.models.feature import feature_from_dict
from ciproject.models.project import DEFAULT_DSL_VERSION

# camelCase keys of the output format -> model field names
FIELD_ALIASES = {
    "buildTypes": "build_types",
    "executionMode": "execution_mode",
    "displayName": "display_name",
    "repositoryURL": "repository_url",
}


class DuplicateKeyError(ValueError):
    """A JSON object repeats one of its keys."""


def _reject_duplicate_keys(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    data: dict[str, Any] = {}
    for key, value in pairs:
        if key in data:
            raise DuplicateKeyError(f"duplicate key '{key}'")
        data[key] = value
    return data


def _rename(data: dict[str, Any]) -> dict[str, Any]:
    return {FIELD_ALIASES.get(key, key): value for key, value in data.items()}


def _pipeline_from_dict(data: dict[str, Any]) -> BuildPipeline:
    data = _rename(data)
    data["steps"] = [_rename(step) for step in data.get("steps", [])]
    return BuildPipeline.model_validate(data)


def _replay(data: dict[str, Any], source: Any) -> ConfigBuilder:
    data = _rename(data.get("project", data))

    builder = ConfigBuilder(version=data.get("version", DEFAULT_DSL_VERSION))

    params = data.get("params", {})
    if not isinstance(params, dict):
        raise DefinitionError(source, "'params' must be an object")
    for name, value in params.items():
        builder.declare_parameter(name, str(value))

    for entry in data.get("build_types", []):
        builder.add_build_pipeline(_pipeline_from_dict(entry))
    for entry in data.get("features", []):
        builder.add_feature(feature_from_dict(_rename(entry)))

    return builder


def builder_from_dict(data: dict[str, Any], source: Any = "<dict>") -> ConfigBuilder:
    """
    Replay a definition document through a new builder.

    Accepts both the bare project body and the ``{"project": {...}}`` tree
    produced by ``serializers.project_to_dict``.

    Raises:
        DefinitionError: If the document does not have the expected shape
        DuplicateIdError, DuplicateParameterError: On colliding declarations
    """
    if not isinstance(data, dict):
        raise DefinitionError(source, "top-level value must be an object")

    # pydantic's ValidationError is a ValueError
    try:
        return _replay(data, source)
    except (ValueError, AttributeError, TypeError) as e:
        raise DefinitionError(source, str(e)) from e


def load_definition(path: Path) -> ConfigBuilder:
    """
    Load a JSON project definition file.

    Objects that repeat a key are rejected rather than keeping the last value.

    Args:
        path: Path to the definition file

    Returns:
        Open ConfigBuilder holding the file's declarations
    """
    try:
        data = json.loads(
            path.read_text(encoding="utf-8"), object_pairs_hook=_reject_duplicate_keys
        )
    except OSError as e:
        raise DefinitionError(path, str(e)) from e
    except DuplicateKeyError as e:
        raise DefinitionError(path, str(e)) from e
    except json.JSONDecodeError as e:
        raise DefinitionError(path, f"invalid JSON: {e}") from e

    return builder_from_dict(data, source=path)
