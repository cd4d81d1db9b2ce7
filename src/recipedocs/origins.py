from __future__ import annotations

from pathlib import Path
from urllib.parse import unquote, urlparse

from .config import OriginConfig
from .domain import RecipeDescriptor, RecipeOrigin
from .errors import CoordinateError, UnresolvedOriginError


ARCHIVE_MARKER = "!"
ARCHIVE_SCHEME = "jar:"


def parse_origins(text: str) -> dict[str, RecipeOrigin]:
    """Parse ``groupId:artifactId:version:path`` entries separated by ``;``.

    The result is keyed by the artifact's ``file:`` URI.
    """
    origins: dict[str, RecipeOrigin] = {}
    for entry in text.split(";"):
        entry = entry.strip()
        if not entry:
            continue
        # Windows paths carry their own colon, so only the first three split.
        parts = entry.split(":", 3)
        if len(parts) != 4 or not all(part.strip() for part in parts):
            raise CoordinateError(f"Invalid recipe coordinate (expected groupId:artifactId:version:path): {entry}")
        group_id, artifact_id, version, path = (part.strip() for part in parts)
        uri = artifact_uri(path)
        origins[uri] = RecipeOrigin(
            group_id=group_id,
            artifact_id=artifact_id,
            version=version,
            artifact_uri=uri,
        )
    return origins


def artifact_uri(path: str | Path) -> str:
    return Path(path).absolute().as_uri()


def artifact_path(origin: RecipeOrigin) -> Path:
    return Path(unquote(urlparse(origin.artifact_uri).path))


def resolve_origin(recipe: RecipeDescriptor, origins: dict[str, RecipeOrigin]) -> RecipeOrigin:
    origin = origins.get(lookup_key(recipe.source))
    if origin is None:
        raise UnresolvedOriginError(recipe.name, recipe.source)
    return origin


def lookup_key(source: str) -> str:
    raw = source.strip()
    marker = raw.find(ARCHIVE_MARKER)
    if marker != -1:
        # jar:file:/path/to/recipes.jar!META-INF/rewrite/catalog.yml
        raw = raw[:marker]
        if raw.startswith(ARCHIVE_SCHEME):
            raw = raw[len(ARCHIVE_SCHEME) :]
    return _normalize_uri(raw)


def _normalize_uri(uri: str) -> str:
    parsed = urlparse(uri)
    if parsed.scheme == "file":
        return artifact_uri(unquote(parsed.path))
    if not parsed.scheme and uri:
        return artifact_uri(uri)
    return uri


def is_core_origin(origin: RecipeOrigin, cfg: OriginConfig) -> bool:
    return origin.group_id == cfg.core_group_id and origin.artifact_id in cfg.core_artifacts


def source_url(origin: RecipeOrigin, cfg: OriginConfig) -> str:
    if is_core_origin(origin, cfg):
        return f"{cfg.code_host_url}/rewrite"
    return f"{cfg.code_host_url}/{origin.artifact_id}"


def issue_tracker_url(origin: RecipeOrigin, cfg: OriginConfig) -> str:
    return f"{source_url(origin, cfg)}/issues"


def registry_url(origin: RecipeOrigin, cfg: OriginConfig) -> str:
    return f"{cfg.registry_url}/{origin.group_id}/{origin.artifact_id}/{origin.version}/jar"
