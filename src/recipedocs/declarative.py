from __future__ import annotations

from typing import Any

import yaml

from .domain import RecipeDescriptor, RecipeOption


RECIPE_TYPE = "specs.openrewrite.org/v1beta/recipe"


def recipe_yaml(recipe: RecipeDescriptor) -> str:
    """Declarative rendering of a composite recipe."""
    document: dict[str, Any] = {
        "type": RECIPE_TYPE,
        "name": recipe.name,
        "displayName": recipe.display_name,
    }
    if recipe.description:
        document["description"] = recipe.description
    if recipe.tags:
        document["tags"] = sorted(recipe.tags)
    document["recipeList"] = [_recipe_entry(child.name, _option_values(child.options)) for child in recipe.recipe_list]
    return dump_document(document)


def example_recipe_yaml(example_name: str, recipe: RecipeDescriptor) -> str:
    options = {option.name: option.example for option in recipe.options}
    document: dict[str, Any] = {
        "type": RECIPE_TYPE,
        "name": example_name,
        "displayName": f"{recipe.display_name} example",
        "recipeList": [_recipe_entry(recipe.name, options)],
    }
    return dump_document(document)


def dump_document(document: dict[str, Any]) -> str:
    return yaml.safe_dump(
        document,
        sort_keys=False,
        explicit_start=True,
        default_flow_style=False,
        allow_unicode=True,
        width=4096,
    ).rstrip("\n")


def _recipe_entry(name: str, options: dict[str, Any]) -> Any:
    if not options:
        return name
    return {name: options}


def _option_values(options: tuple[RecipeOption, ...]) -> dict[str, Any]:
    return {option.name: option.value for option in options if option.value is not None}
