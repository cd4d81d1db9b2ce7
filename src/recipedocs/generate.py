from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .categories import Category, build_categories, dropped_recipes
from .config import EffectiveConfig
from .descriptors import DescriptorSource, exclude_namespaces
from .domain import RecipeOrigin
from .errors import OutputError
from .origins import resolve_origin
from .paths import category_index_file, recipe_file, resolve_output_paths
from .render import category_index, recipe_markdown, render_summary


@dataclass(frozen=True)
class GenerateResult:
    summary: Path
    recipe_docs: list[Path] = field(default_factory=list)
    category_docs: list[Path] = field(default_factory=list)


def generate_docs(
    destination: str | Path,
    source: DescriptorSource,
    origins: dict[str, RecipeOrigin],
    cfg: EffectiveConfig,
    verbose: bool = False,
) -> GenerateResult:
    output = resolve_output_paths(destination)
    _make_dirs(output.recipes_dir)

    recipes = exclude_namespaces(source.list_recipe_descriptors(), cfg.namespace.excluded)
    categories = build_categories(recipes, source.list_category_descriptors(), cfg.namespace)
    if verbose:
        for recipe in dropped_recipes(recipes, cfg.namespace):
            print(f"No category for {recipe.name}; left out of the navigation")

    recipe_docs: list[Path] = []
    for recipe in recipes:
        origin = resolve_origin(recipe, origins)
        path = recipe_file(output.recipes_dir, recipe, cfg.namespace.root)
        write_document(path, recipe_markdown(recipe, origin, cfg), verbose)
        recipe_docs.append(path)

    write_document(output.summary, render_summary(categories, cfg.namespace.root), verbose)

    category_docs: list[Path] = []
    for category in categories:
        category_docs.extend(_write_category_index(output.recipes_dir, category, verbose))

    return GenerateResult(summary=output.summary, recipe_docs=recipe_docs, category_docs=category_docs)


def _write_category_index(recipes_dir: Path, category: Category, verbose: bool) -> list[Path]:
    if not category.path:
        return []
    path = category_index_file(recipes_dir, category.path)
    write_document(path, category_index(category), verbose)
    written = [path]
    for subcategory in category.subcategories:
        written.extend(_write_category_index(recipes_dir, subcategory, verbose))
    return written


def write_document(path: Path, content: str, verbose: bool = False) -> None:
    _make_dirs(path.parent)
    try:
        with path.open("w", encoding="utf-8") as fh:
            fh.write(content)
    except OSError as exc:
        raise OutputError(f"Failed to write {path}") from exc
    if verbose:
        print(f"Wrote {path}")


def _make_dirs(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise OutputError(f"Failed to create directory {path}") from exc
