from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

from .config import NamespaceConfig
from .domain import CategoryDescriptor, RecipeDescriptor
from .paths import category_package, recipe_category


@dataclass(frozen=True)
class Category:
    simple_name: str
    path: str
    descriptor: Optional[CategoryDescriptor]
    recipes: tuple[RecipeDescriptor, ...]
    subcategories: tuple[Category, ...]

    @property
    def display_name(self) -> str:
        if self.descriptor is not None:
            return self.descriptor.display_name
        return self.simple_name[:1].upper() + self.simple_name[1:]


@dataclass
class _CategoryBuilder:
    path: str
    recipes: list[RecipeDescriptor] = field(default_factory=list)
    subcategories: dict[str, _CategoryBuilder] = field(default_factory=dict)

    def build(self, descriptors: list[CategoryDescriptor], root_namespace: str) -> Category:
        subcategories = [child.build(descriptors, root_namespace) for child in self.subcategories.values()]
        return Category(
            simple_name=self.path[self.path.rfind("/") + 1 :],
            path=self.path,
            descriptor=find_category_descriptor(self.path, descriptors, root_namespace),
            recipes=tuple(sorted(self.recipes, key=lambda recipe: sort_key(recipe.display_name))),
            subcategories=tuple(sorted(subcategories, key=lambda category: sort_key(category.display_name))),
        )


def sort_key(display_name: str) -> str:
    # Backticks are markdown formatting and must not affect ordering.
    return display_name.replace("`", "")


def build_categories(
    recipes: Iterable[RecipeDescriptor],
    descriptors: Iterable[CategoryDescriptor],
    namespace: NamespaceConfig,
) -> list[Category]:
    """Group recipes into a category tree keyed by their package path.

    Nodes are created in first-seen order and sorted by display name once all
    recipes are placed. Recipes that sit directly under the root namespace
    have no category and are left out (see ``dropped_recipes``).
    """
    descriptor_list = list(descriptors)
    roots: dict[str, _CategoryBuilder] = {}
    for recipe in recipes:
        category_path = recipe_category(recipe, namespace.root)
        if not category_path:
            continue
        _put_recipe(roots, category_path, recipe)
    return [builder.build(descriptor_list, namespace.root) for builder in roots.values()]


def _put_recipe(roots: dict[str, _CategoryBuilder], category_path: str, recipe: RecipeDescriptor) -> None:
    segments = category_path.split("/")
    level = roots
    for index, segment in enumerate(segments):
        if segment not in level:
            level[segment] = _CategoryBuilder(path="/".join(segments[: index + 1]))
        node = level[segment]
        if index == len(segments) - 1:
            node.recipes.append(recipe)
        level = node.subcategories


def dropped_recipes(recipes: Iterable[RecipeDescriptor], namespace: NamespaceConfig) -> list[RecipeDescriptor]:
    return [recipe for recipe in recipes if not recipe_category(recipe, namespace.root)]


def find_category_descriptor(
    category_path: str,
    descriptors: Iterable[CategoryDescriptor],
    root_namespace: str,
) -> Optional[CategoryDescriptor]:
    package = category_package(category_path, root_namespace)
    for descriptor in descriptors:
        if descriptor.package_name == package:
            return descriptor
    return None


def iter_categories(categories: Iterable[Category]) -> Iterable[Category]:
    for category in categories:
        yield category
        yield from iter_categories(category.subcategories)
