from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Iterable, Optional, Protocol
import sys
import zipfile

import yaml

from .domain import CategoryDescriptor, RecipeDescriptor, RecipeOption, RecipeOrigin
from .errors import DescriptorError
from .origins import artifact_path, artifact_uri


CATALOG_ENTRY = "META-INF/rewrite/catalog.yml"
ARCHIVE_SUFFIXES = (".jar", ".zip")


@dataclass(frozen=True)
class _Catalog:
    where: str
    data: dict[str, Any]


class DescriptorSource(Protocol):
    def list_recipe_descriptors(self) -> list[RecipeDescriptor]: ...

    def list_category_descriptors(self) -> list[CategoryDescriptor]: ...


class CatalogDescriptorSource:
    """Descriptors read from standalone catalog files."""

    def __init__(self, paths: Iterable[str | Path]) -> None:
        self._catalogs = [_read_catalog_file(Path(path)) for path in paths]

    def list_recipe_descriptors(self) -> list[RecipeDescriptor]:
        recipes: list[RecipeDescriptor] = []
        for catalog in self._catalogs:
            recipes.extend(_parse_recipes(catalog, default_source=""))
        known = {recipe.name: recipe.display_name for recipe in recipes if recipe.display_name}
        return [_fill_display_names(recipe, known) for recipe in recipes]

    def list_category_descriptors(self) -> list[CategoryDescriptor]:
        categories: list[CategoryDescriptor] = []
        for catalog in self._catalogs:
            categories.extend(_parse_categories(catalog))
        return categories


class ArtifactDescriptorSource:
    """Descriptors scanned from coordinate-addressed artifacts.

    Classpath entries only contribute display names for recipes that are
    composed into a documented recipe; their own recipes are not listed.
    """

    def __init__(self, origins: Iterable[RecipeOrigin], classpath: Iterable[str | Path] = ()) -> None:
        self._recipes: list[RecipeDescriptor] = []
        self._categories: list[CategoryDescriptor] = []
        for origin in origins:
            path = artifact_path(origin)
            catalog = _read_artifact_catalog(path)
            if catalog is None:
                continue
            self._recipes.extend(_parse_recipes(catalog, default_source=_default_source(path)))
            self._categories.extend(_parse_categories(catalog))

        known: dict[str, str] = {}
        for entry in classpath:
            path = Path(entry)
            catalog = _read_artifact_catalog(path)
            if catalog is None:
                continue
            for recipe in _parse_recipes(catalog, default_source=_default_source(path)):
                known.setdefault(recipe.name, recipe.display_name)
        for recipe in self._recipes:
            if recipe.display_name:
                known[recipe.name] = recipe.display_name
        self._recipes = [_fill_display_names(recipe, known) for recipe in self._recipes]

    def list_recipe_descriptors(self) -> list[RecipeDescriptor]:
        return list(self._recipes)

    def list_category_descriptors(self) -> list[CategoryDescriptor]:
        return list(self._categories)


class RuntimeClasspathDescriptorSource:
    """Descriptors found on the running interpreter's import path.

    Every directory or archive on ``sys.path`` carrying a catalog entry is
    scanned; entries that do not exist are skipped.
    """

    def __init__(self, entries: Optional[Iterable[str | Path]] = None) -> None:
        self._recipes: list[RecipeDescriptor] = []
        self._categories: list[CategoryDescriptor] = []
        for entry in sys.path if entries is None else entries:
            path = Path(entry or ".")
            if not path.exists():
                continue
            catalog = _read_artifact_catalog(path)
            if catalog is None:
                continue
            self._recipes.extend(_parse_recipes(catalog, default_source=_default_source(path)))
            self._categories.extend(_parse_categories(catalog))
        known = {recipe.name: recipe.display_name for recipe in self._recipes if recipe.display_name}
        self._recipes = [_fill_display_names(recipe, known) for recipe in self._recipes]

    def list_recipe_descriptors(self) -> list[RecipeDescriptor]:
        return list(self._recipes)

    def list_category_descriptors(self) -> list[CategoryDescriptor]:
        return list(self._categories)


def exclude_namespaces(recipes: Iterable[RecipeDescriptor], prefixes: Iterable[str]) -> list[RecipeDescriptor]:
    excluded = tuple(prefixes)
    if not excluded:
        return list(recipes)
    return [recipe for recipe in recipes if not recipe.name.startswith(excluded)]


def _default_source(path: Path) -> str:
    if path.suffix.lower() in ARCHIVE_SUFFIXES:
        return f"jar:{artifact_uri(path)}!{CATALOG_ENTRY}"
    return artifact_uri(path)


def _read_artifact_catalog(path: Path) -> Optional[_Catalog]:
    if path.is_dir():
        catalog_path = path / CATALOG_ENTRY
        if not catalog_path.exists():
            return None
        return _read_catalog_file(catalog_path)
    if path.suffix.lower() in ARCHIVE_SUFFIXES:
        return _read_archive_catalog(path)
    if path.suffix.lower() in (".yml", ".yaml"):
        return _read_catalog_file(path)
    if not path.exists():
        raise DescriptorError(f"Artifact not found: {path}")
    return None


def _read_archive_catalog(path: Path) -> Optional[_Catalog]:
    try:
        with zipfile.ZipFile(path) as archive:
            if CATALOG_ENTRY not in archive.namelist():
                return None
            text = archive.read(CATALOG_ENTRY).decode("utf-8")
    except FileNotFoundError as exc:
        raise DescriptorError(f"Artifact not found: {path}") from exc
    except (OSError, zipfile.BadZipFile, UnicodeDecodeError) as exc:
        raise DescriptorError(f"Failed to read artifact: {path}") from exc
    return _load_catalog(text, f"{path}!{CATALOG_ENTRY}")


def _read_catalog_file(path: Path) -> _Catalog:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise DescriptorError(f"Descriptor catalog not found: {path}") from exc
    return _load_catalog(text, str(path))


def _load_catalog(text: str, where: str) -> _Catalog:
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as exc:
        raise DescriptorError(f"{where}: invalid YAML") from exc
    if not isinstance(data, dict):
        raise DescriptorError(f"{where}: catalog must be a mapping")
    return _Catalog(where=where, data=data)


def _parse_categories(catalog: _Catalog) -> list[CategoryDescriptor]:
    categories: list[CategoryDescriptor] = []
    for entry in _list_of_mappings(catalog.data.get("categories"), catalog.where, "categories"):
        package_name = entry.get("packageName")
        if not package_name:
            raise DescriptorError(f"{catalog.where}: category is missing 'packageName'")
        categories.append(
            CategoryDescriptor(
                package_name=str(package_name),
                display_name=str(entry.get("displayName") or package_name),
                description=_optional_str(entry.get("description")),
            )
        )
    return categories


def _parse_recipes(catalog: _Catalog, default_source: str) -> list[RecipeDescriptor]:
    return [
        _parse_recipe(entry, catalog.where, default_source)
        for entry in _list_of_mappings(catalog.data.get("recipes"), catalog.where, "recipes")
    ]


def _parse_recipe(entry: dict[str, Any], where: str, default_source: str) -> RecipeDescriptor:
    name = entry.get("name")
    if not name:
        raise DescriptorError(f"{where}: recipe is missing 'name'")
    name = str(name)
    return RecipeDescriptor(
        name=name,
        display_name=str(entry.get("displayName") or ""),
        description=_optional_str(entry.get("description")),
        tags=frozenset(_tags(entry.get("tags"))),
        options=tuple(
            _parse_option(option, where, name)
            for option in _list_of_mappings(entry.get("options"), where, f"{name} options")
        ),
        recipe_list=tuple(
            _parse_recipe(child, where, default_source)
            for child in _list_of_mappings(entry.get("recipeList"), where, f"{name} recipeList")
        ),
        source=str(entry.get("source") or default_source),
    )


def _parse_option(entry: dict[str, Any], where: str, recipe_name: str) -> RecipeOption:
    name = entry.get("name")
    if not name:
        raise DescriptorError(f"{where}: option of {recipe_name} is missing 'name'")
    return RecipeOption(
        name=str(name),
        type=str(entry.get("type") or "String"),
        display_name=_optional_str(entry.get("displayName")),
        description=_optional_str(entry.get("description")),
        required=bool(entry.get("required", False)),
        example=entry.get("example"),
        value=entry.get("value"),
    )


def _fill_display_names(recipe: RecipeDescriptor, known: dict[str, str]) -> RecipeDescriptor:
    children = tuple(_fill_display_names(child, known) for child in recipe.recipe_list)
    display_name = recipe.display_name or known.get(recipe.name) or recipe.simple_name
    return replace(recipe, display_name=display_name, recipe_list=children)


def _list_of_mappings(value: Any, where: str, label: str) -> list[dict[str, Any]]:
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(item, dict) for item in value):
        raise DescriptorError(f"{where}: {label} must be a list of mappings")
    return value


def _tags(value: Any) -> list[str]:
    if isinstance(value, list):
        return [str(tag) for tag in value]
    if isinstance(value, str):
        return [value]
    return []


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)
