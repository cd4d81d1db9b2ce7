from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .domain import RecipeDescriptor
from .errors import RecipeNameError


RECIPES_REL = Path("reference") / "recipes"
SUMMARY_FILENAME = "SUMMARY_snippet.md"
CATEGORY_INDEX_FILENAME = "README.md"


@dataclass(frozen=True)
class OutputPaths:
    root: Path
    recipes_dir: Path
    summary: Path


def resolve_output_paths(destination: str | Path) -> OutputPaths:
    root = Path(destination)
    return OutputPaths(
        root=root,
        recipes_dir=root / RECIPES_REL,
        summary=root / SUMMARY_FILENAME,
    )


def recipe_path(name: str, root_namespace: str) -> str:
    prefix = f"{root_namespace}."
    if not name.startswith(prefix):
        raise RecipeNameError(name)
    return name[len(prefix) :].replace(".", "/").lower()


def recipe_category(recipe: RecipeDescriptor, root_namespace: str) -> str:
    path = recipe_path(recipe.name, root_namespace)
    slash = path.rfind("/")
    if slash == -1:
        return ""
    return path[:slash]


def recipe_link(recipe: RecipeDescriptor, root_namespace: str) -> str:
    return f"/{RECIPES_REL.as_posix()}/{recipe_path(recipe.name, root_namespace)}"


def recipe_file(recipes_dir: Path, recipe: RecipeDescriptor, root_namespace: str) -> Path:
    return recipes_dir / f"{recipe_path(recipe.name, root_namespace)}.md"


def category_index_file(recipes_dir: Path, category_path: str) -> Path:
    return recipes_dir / category_path / CATEGORY_INDEX_FILENAME


def category_package(category_path: str, root_namespace: str) -> str:
    return f"{root_namespace}.{category_path.replace('/', '.')}"
