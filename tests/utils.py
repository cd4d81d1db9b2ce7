from __future__ import annotations

from pathlib import Path
import zipfile

from recipedocs.domain import RecipeDescriptor, RecipeOption, RecipeOrigin

JAVA_COORDINATES = "org.openrewrite:rewrite-java:8.1.0:/opt/recipes/rewrite-java.jar"
SPRING_COORDINATES = "org.openrewrite.recipe:rewrite-spring:5.0.0:/opt/recipes/rewrite-spring.jar"


def write_global_config(home: Path, content: str) -> Path:
    cfg_dir = home / ".config" / "recipedocs"
    cfg_dir.mkdir(parents=True, exist_ok=True)
    path = cfg_dir / "config.toml"
    path.write_text(content, encoding="utf-8")
    return path


def write_artifact(path: Path, catalog: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(path, "w") as archive:
        archive.writestr("META-INF/rewrite/catalog.yml", catalog)
    return path


def recipe(name: str, display_name: str | None = None, **kwargs) -> RecipeDescriptor:
    return RecipeDescriptor(name=name, display_name=display_name or name.rsplit(".", 1)[-1], **kwargs)


def option(name: str, required: bool = False, **kwargs) -> RecipeOption:
    kwargs.setdefault("type", "String")
    return RecipeOption(name=name, required=required, **kwargs)


def origin(group_id: str = "org.openrewrite", artifact_id: str = "rewrite-java", version: str = "8.1.0") -> RecipeOrigin:
    return RecipeOrigin(
        group_id=group_id,
        artifact_id=artifact_id,
        version=version,
        artifact_uri=f"file:///opt/recipes/{artifact_id}.jar",
    )
