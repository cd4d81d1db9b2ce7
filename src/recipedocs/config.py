from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import os
import tomllib
from typing import Any, Optional

from .errors import ConfigError


DEFAULT_CORE_ARTIFACTS = (
    "rewrite-core",
    "rewrite-gradle",
    "rewrite-groovy",
    "rewrite-hcl",
    "rewrite-java",
    "rewrite-java-8",
    "rewrite-java-11",
    "rewrite-java-17",
    "rewrite-json",
    "rewrite-maven",
    "rewrite-properties",
    "rewrite-protobuf",
    "rewrite-xml",
    "rewrite-yaml",
)


@dataclass(frozen=True)
class NamespaceConfig:
    root: str = "org.openrewrite"
    excluded: tuple[str, ...] = ("org.openrewrite.text",)


@dataclass(frozen=True)
class OriginConfig:
    core_group_id: str = "org.openrewrite"
    core_artifacts: tuple[str, ...] = DEFAULT_CORE_ARTIFACTS
    code_host_url: str = "https://github.com/openrewrite"
    registry_url: str = "https://search.maven.org/artifact"


@dataclass(frozen=True)
class PluginConfig:
    gradle_version: str = "latest.release"
    maven_version: str = ""


@dataclass(frozen=True)
class EffectiveConfig:
    project_dir: str
    namespace: NamespaceConfig
    origin: OriginConfig
    plugins: PluginConfig


def _config_root() -> Path:
    return Path(os.path.expanduser("~/.config/recipedocs"))


def load_global_config() -> dict[str, Any]:
    path = _config_root() / "config.toml"
    if not path.exists():
        return {}
    return _load_toml(path)


def load_project_config(project_dir: str) -> dict[str, Any]:
    path = Path(project_dir) / "recipedocs.toml"
    if not path.exists():
        return {}
    return _load_toml(path)


def _load_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except OSError as exc:
        raise ConfigError(f"Failed to read config: {path}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in config: {path}") from exc


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def merge_config(cli: dict[str, Any], project: dict[str, Any], global_cfg: dict[str, Any]) -> dict[str, Any]:
    merged = _deep_merge(global_cfg, project)
    return _deep_merge(merged, cli)


def resolve_config(cli_args: dict[str, Any]) -> EffectiveConfig:
    global_cfg = load_global_config()
    project_dir = cli_args.get("project") or global_cfg.get("default_project") or os.getcwd()
    project_cfg = load_project_config(str(project_dir))

    merged = merge_config(_cli_to_dict(cli_args), project_cfg, global_cfg)

    namespace_cfg = _table(merged, "namespace")
    origin_cfg = _table(merged, "origin")
    plugins_cfg = _table(merged, "plugins")

    root = str(namespace_cfg.get("root", NamespaceConfig.root)).strip().rstrip(".")
    if not root:
        raise ConfigError("namespace.root must not be empty")

    return EffectiveConfig(
        project_dir=str(project_dir),
        namespace=NamespaceConfig(
            root=root,
            excluded=_string_tuple(namespace_cfg.get("excluded", NamespaceConfig.excluded), "namespace.excluded"),
        ),
        origin=OriginConfig(
            core_group_id=str(origin_cfg.get("core_group_id", OriginConfig.core_group_id)),
            core_artifacts=_string_tuple(
                origin_cfg.get("core_artifacts", DEFAULT_CORE_ARTIFACTS), "origin.core_artifacts"
            ),
            code_host_url=str(origin_cfg.get("code_host_url", OriginConfig.code_host_url)).rstrip("/"),
            registry_url=str(origin_cfg.get("registry_url", OriginConfig.registry_url)).rstrip("/"),
        ),
        plugins=PluginConfig(
            gradle_version=str(plugins_cfg.get("gradle_version", PluginConfig.gradle_version)),
            maven_version=str(plugins_cfg.get("maven_version", PluginConfig.maven_version)),
        ),
    )


def _table(merged: dict[str, Any], key: str) -> dict[str, Any]:
    value = merged.get(key, {})
    if not isinstance(value, dict):
        raise ConfigError(f"[{key}] must be a table")
    return value


def _string_tuple(value: Any, key: str) -> tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    if isinstance(value, (list, tuple)):
        return tuple(str(item) for item in value)
    raise ConfigError(f"{key} must be a list of strings")


def _cli_to_dict(cli_args: dict[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}

    namespace: dict[str, Any] = {}
    if cli_args.get("root_namespace") is not None:
        namespace["root"] = cli_args["root_namespace"]
    if namespace:
        out["namespace"] = namespace

    plugins: dict[str, Any] = {}
    # Empty positionals mean "not given"; the configured version wins.
    if cli_args.get("gradle_plugin_version"):
        plugins["gradle_version"] = cli_args["gradle_plugin_version"]
    if cli_args.get("maven_plugin_version"):
        plugins["maven_version"] = cli_args["maven_plugin_version"]
    if plugins:
        out["plugins"] = plugins

    return out


def config_to_toml(cfg: EffectiveConfig) -> str:
    lines = [f"# project: {cfg.project_dir}", ""]
    lines.append("[namespace]")
    lines.append(f"root = {_toml_str(cfg.namespace.root)}")
    lines.append(f"excluded = {_toml_list(cfg.namespace.excluded)}")
    lines.append("")
    lines.append("[origin]")
    lines.append(f"core_group_id = {_toml_str(cfg.origin.core_group_id)}")
    lines.append(f"core_artifacts = {_toml_list(cfg.origin.core_artifacts)}")
    lines.append(f"code_host_url = {_toml_str(cfg.origin.code_host_url)}")
    lines.append(f"registry_url = {_toml_str(cfg.origin.registry_url)}")
    lines.append("")
    lines.append("[plugins]")
    lines.append(f"gradle_version = {_toml_str(cfg.plugins.gradle_version)}")
    lines.append(f"maven_version = {_toml_str(cfg.plugins.maven_version)}")
    return "\n".join(lines) + "\n"


def _toml_str(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _toml_list(values: tuple[str, ...]) -> str:
    return "[" + ", ".join(_toml_str(value) for value in values) + "]"


def default_config(project_dir: Optional[str] = None) -> EffectiveConfig:
    return EffectiveConfig(
        project_dir=project_dir or os.getcwd(),
        namespace=NamespaceConfig(),
        origin=OriginConfig(),
        plugins=PluginConfig(),
    )
