from __future__ import annotations

from pathlib import Path

import pytest

from recipedocs.config import EffectiveConfig
from recipedocs.descriptors import CatalogDescriptorSource
from recipedocs.errors import OutputError, RecipeNameError, UnresolvedOriginError
from recipedocs.generate import generate_docs, write_document
from recipedocs.origins import parse_origins
from tests.utils import JAVA_COORDINATES, SPRING_COORDINATES, recipe


class StaticSource:
    def __init__(self, recipes, categories=()) -> None:
        self._recipes = list(recipes)
        self._categories = list(categories)

    def list_recipe_descriptors(self):
        return self._recipes

    def list_category_descriptors(self):
        return self._categories


def test_generate_fixture_catalogs(tmp_path: Path, catalogs_dir: Path, cfg: EffectiveConfig) -> None:
    source = CatalogDescriptorSource([catalogs_dir / "rewrite-java.yml", catalogs_dir / "rewrite-spring.yml"])
    origins = parse_origins(f"{JAVA_COORDINATES};{SPRING_COORDINATES}")
    dest = tmp_path / "docs"

    result = generate_docs(dest, source, origins, cfg)

    recipes_dir = dest / "reference" / "recipes"
    assert result.summary == dest / "SUMMARY_snippet.md"
    assert (recipes_dir / "java" / "format" / "autoformat.md").exists()
    assert (recipes_dir / "java" / "spring" / "boot2" / "springboot2junit4to5migration.md").exists()
    assert not (recipes_dir / "text").exists()
    assert len(result.recipe_docs) == 5

    assert sorted(p.relative_to(recipes_dir).as_posix() for p in result.category_docs) == [
        "java/README.md",
        "java/cleanup/README.md",
        "java/format/README.md",
        "java/spring/README.md",
        "java/spring/boot2/README.md",
    ]

    summary = result.summary.read_text(encoding="utf-8")
    assert summary.startswith("  * [Java](reference/recipes/java/README.md)\n")
    assert "    * [Formatting](reference/recipes/java/format/README.md)" in summary
    assert "      * [BlankLines](/reference/recipes/java/format/blanklines.md)" in summary
    assert "org.openrewrite.text" not in summary

    java_index = (recipes_dir / "java" / "README.md").read_text(encoding="utf-8")
    assert "_Basic building blocks for transforming Java code._" in java_index

    spring = (recipes_dir / "java" / "spring" / "boot2" / "springboot2junit4to5migration.md").read_text(encoding="utf-8")
    assert "rewrite(\"org.openrewrite.recipe:rewrite-spring:5.0.0\")" in spring
    assert "  * methodPattern: `[a.A foo(), b.B bar()]`" in spring

    composite = (recipes_dir / "java" / "cleanup" / "commonstaticanalysis.md").read_text(encoding="utf-8")
    assert "[Github](https://github.com/openrewrite/rewrite)" in composite


def test_generate_overwrites_existing_output(tmp_path: Path, cfg: EffectiveConfig) -> None:
    source = StaticSource([recipe("org.openrewrite.java.ChangeType", source="file:///opt/recipes/rewrite-java.jar")])
    origins = parse_origins(JAVA_COORDINATES)
    generate_docs(tmp_path, source, origins, cfg)
    page = tmp_path / "reference" / "recipes" / "java" / "changetype.md"
    page.write_text("stale", encoding="utf-8")
    generate_docs(tmp_path, source, origins, cfg)
    assert page.read_text(encoding="utf-8").startswith("# ChangeType")


def test_uncategorized_recipe_gets_page_but_no_index(tmp_path: Path, cfg: EffectiveConfig, capsys) -> None:
    source = StaticSource([recipe("org.openrewrite.FindSourceFiles", source="file:///opt/recipes/rewrite-java.jar")])
    result = generate_docs(tmp_path, source, parse_origins(JAVA_COORDINATES), cfg, verbose=True)
    assert result.recipe_docs == [tmp_path / "reference" / "recipes" / "findsourcefiles.md"]
    assert result.category_docs == []
    assert result.summary.read_text(encoding="utf-8") == ""
    assert not (tmp_path / "reference" / "recipes" / "README.md").exists()
    out = capsys.readouterr().out
    assert "No category for org.openrewrite.FindSourceFiles" in out
    assert "Wrote" in out


def test_unresolved_origin_aborts(tmp_path: Path, cfg: EffectiveConfig) -> None:
    source = StaticSource([recipe("org.openrewrite.java.ChangeType", source="file:///elsewhere.jar")])
    with pytest.raises(UnresolvedOriginError):
        generate_docs(tmp_path, source, parse_origins(JAVA_COORDINATES), cfg)
    assert not (tmp_path / "SUMMARY_snippet.md").exists()


def test_malformed_name_aborts_before_rendering(tmp_path: Path, cfg: EffectiveConfig) -> None:
    source = StaticSource(
        [
            recipe("org.openrewrite.java.ChangeType", source="file:///opt/recipes/rewrite-java.jar"),
            recipe("com.example.Custom", source="file:///opt/recipes/rewrite-java.jar"),
        ]
    )
    with pytest.raises(RecipeNameError):
        generate_docs(tmp_path, source, parse_origins(JAVA_COORDINATES), cfg)
    assert not (tmp_path / "reference" / "recipes" / "java" / "changetype.md").exists()


def test_destination_not_a_directory(tmp_path: Path, cfg: EffectiveConfig) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("x", encoding="utf-8")
    with pytest.raises(OutputError):
        generate_docs(blocker, StaticSource([]), {}, cfg)


def test_write_document_wraps_os_errors(tmp_path: Path) -> None:
    target = tmp_path / "dir.md"
    target.mkdir()
    with pytest.raises(OutputError):
        write_document(target, "content")
