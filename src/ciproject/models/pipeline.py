"""Build pipeline (build type) and step models."""

import re
from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Annotated, Any

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    model_validator,
)

# Read-only string mapping; dumps back to a plain dict
FrozenParams = Annotated[
    Mapping[str, str],
    AfterValidator(lambda value: MappingProxyType(dict(value))),
    PlainSerializer(dict),
]


class ExecutionMode(str, Enum):
    """Whether a step runs depending on the outcome of earlier steps."""

    DEFAULT = "DEFAULT"
    ALWAYS = "ALWAYS"
    ON_SUCCESS = "ON_SUCCESS"


class Step(BaseModel):
    """A single build step, dispatched to the runner named by ``type``."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Human-readable step name")
    id: str = Field(..., description="Step id, unique within its build type")
    type: str = Field(..., description="Runner type handling this step")
    params: FrozenParams = Field(
        default_factory=dict,
        validate_default=True,
        description="Runner parameters, in declaration order"
    )
    execution_mode: ExecutionMode = Field(
        default=ExecutionMode.DEFAULT, description="Step execution policy"
    )


def derive_id(name: str) -> str:
    """
    Derive a build type id from its display name.

    Words are capitalised and joined, everything that is not a letter or
    digit is dropped: ``"Pull Requests"`` becomes ``"PullRequests"``.
    """
    words = re.findall(r"[A-Za-z0-9]+", name)
    return "".join(word[:1].upper() + word[1:] for word in words)


class BuildPipeline(BaseModel):
    """A named, independently triggerable build type."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Build type id, unique within the project")
    name: str = Field(..., description="Display name")
    description: str | None = Field(default=None, description="Optional description")
    templates: tuple[str, ...] = Field(
        default=(),
        description="Template ids, applied in order (later templates win)",
    )
    steps: tuple[Step, ...] = Field(default=(), description="Ordered build steps")

    @model_validator(mode="before")
    @classmethod
    def _default_id(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("id") and data.get("name"):
            data = {**data, "id": derive_id(data["name"])}
        return data
