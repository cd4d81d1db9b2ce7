from __future__ import annotations

import re
from typing import Any, Iterable

from .categories import Category
from .config import EffectiveConfig
from .declarative import recipe_yaml
from .domain import RecipeDescriptor, RecipeOption, RecipeOrigin
from .origins import issue_tracker_url, registry_url, source_url
from .paths import RECIPES_REL, recipe_link, recipe_path
from .usage import usage_lines


METHOD_PATTERN_RE = re.compile(r"method patterns?", re.IGNORECASE)
METHOD_PATTERN_DOC = "/reference/method-patterns"


def render_summary(categories: Iterable[Category], root_namespace: str) -> str:
    return "".join(summary_snippet(category, root_namespace) for category in categories)


def summary_snippet(category: Category, root_namespace: str, depth: int = 0) -> str:
    """Navigation bullets for a category, its recipes and its subcategories."""
    indent = "  " * (depth + 1)
    lines = [f"{indent}* [{category.display_name}]({RECIPES_REL.as_posix()}/{category.path}/README.md)"]
    for recipe in category.recipes:
        # Headings show backticks literally rather than as code.
        title = recipe.display_name.replace("`", "")
        lines.append(f"{indent}  * [{title}]({recipe_link(recipe, root_namespace)}.md)")
    text = "\n".join(lines) + "\n"
    for subcategory in category.subcategories:
        text += summary_snippet(subcategory, root_namespace, depth + 1)
    return text


def category_index(category: Category) -> str:
    lines = [f"# {category.display_name}"]
    if category.descriptor is not None and category.descriptor.description:
        lines.append("")
        lines.append(f"_{category.descriptor.description}_")
    lines.append("")
    if category.recipes:
        lines.append("## Recipes")
        lines.append("")
        for recipe in category.recipes:
            # Gitbook only keeps relative links ending in .md intact.
            lines.append(f"* [{recipe.display_name}]({recipe.simple_name.lower()}.md)")
        lines.append("")
    if category.subcategories:
        lines.append("## Subcategories")
        lines.append("")
        for subcategory in category.subcategories:
            lines.append(f"* [{subcategory.display_name}](/{RECIPES_REL.as_posix()}/{subcategory.path})")
        lines.append("")
    return "\n".join(lines) + "\n"


def recipe_markdown(recipe: RecipeDescriptor, origin: RecipeOrigin, cfg: EffectiveConfig) -> str:
    lines = [f"# {recipe.display_name}", ""]
    lines.append(f"**{escape_markdown(recipe.name)}**")
    lines.append("")
    if recipe.description:
        lines.append(f"_{recipe.description}_")
        lines.append("")

    if recipe.tags:
        lines.append("### Tags")
        lines.append("")
        for tag in sorted(recipe.tags):
            lines.append(f"* {tag}")
        lines.append("")

    lines.extend(_source_lines(origin, cfg))

    if recipe.options:
        lines.extend(_options_lines(recipe.options))

    lines.append("## Usage")
    lines.append("")
    lines.extend(usage_lines(recipe, origin, cfg.origin, cfg.plugins))

    if recipe.recipe_list:
        lines.append("")
        lines.extend(_definition_lines(recipe, cfg.namespace.root))

    return "\n".join(lines) + "\n"


def escape_markdown(name: str) -> str:
    return name.replace("_", "\\_")


def option_description(option: RecipeOption) -> str:
    description = option.description or ""
    if not option.required:
        description = f"*Optional*. {description}"
    return METHOD_PATTERN_RE.sub(lambda match: f"[{match.group(0)}]({METHOD_PATTERN_DOC})", description)


def print_value(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(print_value(item) for item in value) + "]"
    if isinstance(value, dict):
        return "{" + ", ".join(f"{print_value(key)}={print_value(item)}" for key, item in value.items()) + "}"
    return str(value)


def _source_lines(origin: RecipeOrigin, cfg: EffectiveConfig) -> list[str]:
    return [
        "## Source",
        "",
        f"[Github]({source_url(origin, cfg.origin)}), "
        f"[Issue Tracker]({issue_tracker_url(origin, cfg.origin)}), "
        f"[Maven Central]({registry_url(origin, cfg.origin)})",
        "",
        f"* groupId: {origin.group_id}",
        f"* artifactId: {origin.artifact_id}",
        f"* version: {origin.version}",
        "",
    ]


def _options_lines(options: tuple[RecipeOption, ...]) -> list[str]:
    lines = ["## Options", "", "| Type | Name | Description |", "| -- | -- | -- |"]
    for option in options:
        lines.append(f"| `{option.type}` | {option.name} | {option_description(option)} |")
    lines.append("")
    return lines


def _definition_lines(recipe: RecipeDescriptor, root_namespace: str) -> list[str]:
    depth = recipe_path(recipe.name, root_namespace).count("/")
    to_recipes = "../" * depth
    lines = ["## Definition", "", "{% tabs %}", '{% tab title="Recipe List" %}']
    for child in recipe.recipe_list:
        lines.append(f"* [{child.display_name}]({to_recipes}{recipe_path(child.name, root_namespace)}.md)")
        for option in child.options:
            if option.value is not None:
                lines.append(f"  * {option.name}: `{print_value(option.value)}`")
    lines.append("")
    lines.extend(["{% endtab %}", "", '{% tab title="Yaml Recipe List" %}', "```yaml"])
    lines.append(recipe_yaml(recipe))
    lines.extend(["```", "{% endtab %}", "{% endtabs %}"])
    return lines
