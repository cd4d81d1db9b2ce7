from __future__ import annotations

from enum import Enum

from .config import OriginConfig, PluginConfig
from .declarative import example_recipe_yaml
from .domain import RecipeDescriptor, RecipeOrigin
from .origins import is_core_origin


GRADLE_PLUGIN_ID = "org.openrewrite.rewrite"
MAVEN_PLUGIN_GROUP_ID = "org.openrewrite.maven"
MAVEN_PLUGIN_ARTIFACT_ID = "rewrite-maven-plugin"
EXAMPLE_RECIPE_PACKAGE = "com.yourorg"


class UsageVariant(Enum):
    CONFIGURE_WITH_DEPENDENCY = "configure-with-dependency"
    CONFIGURE = "configure"
    DIRECT_WITH_DEPENDENCY = "direct-with-dependency"
    DIRECT = "direct"


# (requires configuration, requires dependency) -> variant
USAGE_TABLE: dict[tuple[bool, bool], UsageVariant] = {
    (True, True): UsageVariant.CONFIGURE_WITH_DEPENDENCY,
    (True, False): UsageVariant.CONFIGURE,
    (False, True): UsageVariant.DIRECT_WITH_DEPENDENCY,
    (False, False): UsageVariant.DIRECT,
}


def select_usage(recipe: RecipeDescriptor, origin: RecipeOrigin, origin_cfg: OriginConfig) -> UsageVariant:
    requires_configuration = any(option.required for option in recipe.options)
    requires_dependency = not is_core_origin(origin, origin_cfg)
    return USAGE_TABLE[(requires_configuration, requires_dependency)]


def example_recipe_name(recipe: RecipeDescriptor) -> str:
    return f"{EXAMPLE_RECIPE_PACKAGE}.{recipe.simple_name}Example"


def usage_lines(
    recipe: RecipeDescriptor,
    origin: RecipeOrigin,
    origin_cfg: OriginConfig,
    plugins: PluginConfig,
) -> list[str]:
    variant = select_usage(recipe, origin, origin_cfg)
    return _RENDERERS[variant](recipe, origin, plugins)


def _configure_with_dependency(recipe: RecipeDescriptor, origin: RecipeOrigin, plugins: PluginConfig) -> list[str]:
    example = example_recipe_name(recipe)
    lines = _configure_intro(recipe, example)
    lines.append(
        f"Now that `{example}` has been defined activate it and take a dependency on "
        f"{origin.coordinates} in your build file:"
    )
    lines.append("")
    lines.extend(build_tabs(example, plugins, origin))
    lines.append("")
    lines.append(_command_line_hint(example))
    return lines


def _configure(recipe: RecipeDescriptor, origin: RecipeOrigin, plugins: PluginConfig) -> list[str]:
    example = example_recipe_name(recipe)
    lines = _configure_intro(recipe, example)
    lines.append(f"Now that `{example}` has been defined activate it in your build file:")
    lines.append("")
    lines.extend(build_tabs(example, plugins, None))
    lines.append("")
    lines.append(_command_line_hint(example))
    return lines


def _direct_with_dependency(recipe: RecipeDescriptor, origin: RecipeOrigin, plugins: PluginConfig) -> list[str]:
    lines = [
        "This recipe has no required configuration options and can be activated directly after "
        f"taking a dependency on {origin.coordinates} in your build file:",
        "",
    ]
    lines.extend(build_tabs(recipe.name, plugins, origin))
    lines.append("")
    lines.append(_command_line_hint(recipe.name))
    return lines


def _direct(recipe: RecipeDescriptor, origin: RecipeOrigin, plugins: PluginConfig) -> list[str]:
    lines = [
        "This recipe has no required configuration parameters and comes from a rewrite core library. "
        "It can be activated directly without adding any dependencies.",
        "",
    ]
    lines.extend(build_tabs(recipe.name, plugins, None))
    lines.append("")
    lines.append(_command_line_hint(recipe.name))
    return lines


_RENDERERS = {
    UsageVariant.CONFIGURE_WITH_DEPENDENCY: _configure_with_dependency,
    UsageVariant.CONFIGURE: _configure,
    UsageVariant.DIRECT_WITH_DEPENDENCY: _direct_with_dependency,
    UsageVariant.DIRECT: _direct,
}


def _configure_intro(recipe: RecipeDescriptor, example: str) -> list[str]:
    return [
        "This recipe has required configuration parameters. "
        "Recipes with required configuration parameters cannot be activated directly. "
        "To activate this recipe you must create a new recipe which fills in the required parameters. "
        "In your rewrite.yml create a new recipe with a unique name. "
        f"For example: `{example}`.",
        "Here's how you can define and customize such a recipe within your rewrite.yml:",
        "",
        '{% code title="rewrite.yml" %}',
        "```yaml",
        example_recipe_yaml(example, recipe),
        "```",
        "{% endcode %}",
        "",
    ]


def _command_line_hint(active_recipe: str) -> str:
    return (
        "Recipes can also be activated directly from the command line by adding the argument "
        f"`-DactiveRecipe={active_recipe}`"
    )


def build_tabs(active_recipe: str, plugins: PluginConfig, dependency: RecipeOrigin | None) -> list[str]:
    lines = ["{% tabs %}", '{% tab title="Gradle" %}', '{% code title="build.gradle" %}']
    lines.extend(gradle_snippet(active_recipe, plugins.gradle_version, dependency))
    lines.extend(["{% endcode %}", "{% endtab %}", ""])
    lines.extend(['{% tab title="Maven" %}', '{% code title="pom.xml" %}'])
    lines.extend(maven_snippet(active_recipe, plugins.maven_version, dependency))
    lines.extend(["{% endcode %}", "{% endtab %}", "{% endtabs %}"])
    return lines


def gradle_snippet(active_recipe: str, plugin_version: str, dependency: RecipeOrigin | None) -> list[str]:
    lines = [
        "```groovy",
        "plugins {",
        f'    id("{GRADLE_PLUGIN_ID}") version("{plugin_version}")',
        "}",
        "",
        "rewrite {",
        f'    activeRecipe("{active_recipe}")',
        "}",
        "",
        "repositories {",
        "    mavenCentral()",
        "}",
    ]
    if dependency is not None:
        lines.extend(
            [
                "",
                "dependencies {",
                f'    rewrite("{dependency.coordinates}")',
                "}",
            ]
        )
    lines.append("```")
    return lines


def maven_snippet(active_recipe: str, plugin_version: str, dependency: RecipeOrigin | None) -> list[str]:
    lines = [
        "```markup",
        "<project>",
        "  <build>",
        "    <plugins>",
        "      <plugin>",
        f"        <groupId>{MAVEN_PLUGIN_GROUP_ID}</groupId>",
        f"        <artifactId>{MAVEN_PLUGIN_ARTIFACT_ID}</artifactId>",
        f"        <version>{plugin_version}</version>",
        "        <configuration>",
        "          <activeRecipes>",
        f"            <recipe>{active_recipe}</recipe>",
        "          </activeRecipes>",
        "        </configuration>",
    ]
    if dependency is not None:
        lines.extend(
            [
                "        <dependencies>",
                "          <dependency>",
                f"            <groupId>{dependency.group_id}</groupId>",
                f"            <artifactId>{dependency.artifact_id}</artifactId>",
                f"            <version>{dependency.version}</version>",
                "          </dependency>",
                "        </dependencies>",
            ]
        )
    lines.extend(
        [
            "      </plugin>",
            "    </plugins>",
            "  </build>",
            "</project>",
            "```",
        ]
    )
    return lines
