from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class RecipeOption:
    name: str
    type: str
    display_name: str | None = None
    description: str | None = None
    required: bool = False
    example: Any = None
    value: Any = None


@dataclass(frozen=True)
class RecipeDescriptor:
    name: str
    display_name: str
    description: str | None = None
    tags: frozenset[str] = field(default_factory=frozenset)
    options: tuple[RecipeOption, ...] = ()
    recipe_list: tuple[RecipeDescriptor, ...] = ()
    source: str = ""

    @property
    def simple_name(self) -> str:
        return self.name.rsplit(".", 1)[-1]


@dataclass(frozen=True)
class CategoryDescriptor:
    package_name: str
    display_name: str
    description: str | None = None


@dataclass(frozen=True)
class RecipeOrigin:
    group_id: str
    artifact_id: str
    version: str
    artifact_uri: str

    @property
    def coordinates(self) -> str:
        return f"{self.group_id}:{self.artifact_id}:{self.version}"
