from __future__ import annotations

import pytest

from recipedocs.categories import build_categories, dropped_recipes, find_category_descriptor, iter_categories
from recipedocs.config import NamespaceConfig
from recipedocs.domain import CategoryDescriptor
from recipedocs.errors import RecipeNameError
from tests.utils import recipe

NS = NamespaceConfig()


def test_two_recipes_share_one_category() -> None:
    categories = build_categories(
        [
            recipe("org.openrewrite.java.format.AutoFormat", "Format Java code"),
            recipe("org.openrewrite.java.format.BlankLines", "Blank lines"),
        ],
        [],
        NS,
    )
    assert len(categories) == 1
    java = categories[0]
    assert java.path == "java"
    assert java.recipes == ()
    assert len(java.subcategories) == 1
    fmt = java.subcategories[0]
    assert fmt.path == "java/format"
    assert fmt.simple_name == "format"
    assert fmt.subcategories == ()
    assert [r.display_name for r in fmt.recipes] == ["Blank lines", "Format Java code"]


def test_sort_ignores_backticks() -> None:
    categories = build_categories(
        [
            recipe("org.openrewrite.java.Foo", "`Foo`"),
            recipe("org.openrewrite.java.Bar", "Bar"),
            recipe("org.openrewrite.java.Baz", "`Baz`"),
        ],
        [],
        NS,
    )
    assert [r.display_name for r in categories[0].recipes] == ["Bar", "`Baz`", "`Foo`"]


def test_subcategories_sorted_by_display_name() -> None:
    descriptors = [CategoryDescriptor(package_name="org.openrewrite.java.a", display_name="`Zed`")]
    categories = build_categories(
        [
            recipe("org.openrewrite.java.a.One"),
            recipe("org.openrewrite.java.b.Two"),
        ],
        descriptors,
        NS,
    )
    assert [c.display_name for c in categories[0].subcategories] == ["B", "`Zed`"]


def test_top_level_keeps_first_seen_order() -> None:
    categories = build_categories(
        [
            recipe("org.openrewrite.xml.Tag"),
            recipe("org.openrewrite.java.Type"),
            recipe("org.openrewrite.maven.Dep"),
            recipe("org.openrewrite.java.Other"),
        ],
        [],
        NS,
    )
    assert [c.path for c in categories] == ["xml", "java", "maven"]


def test_child_paths_extend_parent_paths() -> None:
    categories = build_categories(
        [recipe("org.openrewrite.java.spring.boot2.Migrate"), recipe("org.openrewrite.java.spring.Other")],
        [],
        NS,
    )
    for category in iter_categories(categories):
        for child in category.subcategories:
            assert child.path == f"{category.path}/{child.simple_name}"
    assert [c.path for c in iter_categories(categories)] == ["java", "java/spring", "java/spring/boot2"]


def test_descriptor_resolved_by_package_name() -> None:
    descriptors = [
        CategoryDescriptor(package_name="org.openrewrite.java", display_name="Java", description="Java recipes."),
        CategoryDescriptor(package_name="org.openrewrite.java.format.extra", display_name="Unused"),
    ]
    categories = build_categories([recipe("org.openrewrite.java.format.AutoFormat")], descriptors, NS)
    java = categories[0]
    assert java.descriptor == descriptors[0]
    assert java.display_name == "Java"
    fmt = java.subcategories[0]
    assert fmt.descriptor is None
    assert fmt.display_name == "Format"


def test_find_category_descriptor_requires_exact_match() -> None:
    descriptors = [CategoryDescriptor(package_name="org.openrewrite.javax", display_name="Javax")]
    assert find_category_descriptor("java", descriptors, "org.openrewrite") is None
    assert find_category_descriptor("javax", descriptors, "org.openrewrite") == descriptors[0]


def test_recipes_without_category_are_dropped() -> None:
    recipes = [recipe("org.openrewrite.FindSourceFiles"), recipe("org.openrewrite.java.ChangeType")]
    categories = build_categories(recipes, [], NS)
    assert [c.path for c in categories] == ["java"]
    assert [r.name for r in dropped_recipes(recipes, NS)] == ["org.openrewrite.FindSourceFiles"]


def test_foreign_recipe_name_fails() -> None:
    with pytest.raises(RecipeNameError):
        build_categories([recipe("org.openrewrite.java.ChangeType"), recipe("com.example.Custom")], [], NS)


def test_custom_root_namespace() -> None:
    categories = build_categories(
        [recipe("io.moderne.ai.FindCode")],
        [CategoryDescriptor(package_name="io.moderne.ai", display_name="AI")],
        NamespaceConfig(root="io.moderne", excluded=()),
    )
    assert categories[0].display_name == "AI"
