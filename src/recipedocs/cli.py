from __future__ import annotations

import argparse
import sys
from collections.abc import Callable

from . import __version__
from .config import EffectiveConfig, config_to_toml, resolve_config
from .descriptors import (
    ArtifactDescriptorSource,
    CatalogDescriptorSource,
    DescriptorSource,
    RuntimeClasspathDescriptorSource,
)
from .errors import (
    ConfigError,
    DescriptorError,
    OutputError,
    RecipeDocsError,
    RecipeNameError,
    UnresolvedOriginError,
)
from .generate import generate_docs
from .origins import parse_origins


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help(sys.stderr)
        return 1

    handlers: dict[str, Callable[[argparse.Namespace], int]] = {
        "generate": _cmd_generate,
        "config": _cmd_config,
    }

    handler = handlers.get(args.command)
    if handler is None:
        return 1

    try:
        return handler(args)
    except RecipeDocsError as exc:
        print(str(exc), file=sys.stderr)
        return _exit_code(exc)


def _build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--project")
    common.add_argument("--root-namespace", dest="root_namespace")

    parser = argparse.ArgumentParser(
        prog="recipedocs",
        description="Generates documentation for recipes in markdown format",
        parents=[common],
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command")

    generate = sub.add_parser("generate", parents=[common])
    generate.add_argument("destination", help="Destination directory for generated recipe markdown")
    generate.add_argument(
        "recipe_sources",
        nargs="?",
        default="",
        help="A ';' delimited list of groupId:artifactId:version:path coordinates to search for recipes",
    )
    generate.add_argument(
        "recipe_classpath",
        nargs="?",
        default="",
        help="A ';' delimited list of artifacts providing the transitive dependencies of the recipe sources",
    )
    generate.add_argument("gradle_plugin_version", nargs="?", default="")
    generate.add_argument("maven_plugin_version", nargs="?", default="")
    generate.add_argument("--catalog", dest="catalogs", action="append", default=[])
    generate.add_argument("--verbose", action="store_true")

    sub.add_parser("config", parents=[common])

    return parser


def _cmd_generate(args: argparse.Namespace) -> int:
    cfg = _resolve_cfg(args)
    origins = parse_origins(args.recipe_sources)
    source: DescriptorSource
    if args.recipe_sources and args.recipe_classpath:
        classpath = [entry for entry in args.recipe_classpath.split(";") if entry.strip()]
        source = ArtifactDescriptorSource(origins.values(), classpath)
    elif args.catalogs:
        source = CatalogDescriptorSource(args.catalogs)
    else:
        source = RuntimeClasspathDescriptorSource()

    result = generate_docs(args.destination, source, origins, cfg, verbose=args.verbose)
    if args.verbose:
        print(f"{len(result.recipe_docs)} recipe pages, {len(result.category_docs)} category pages")
    return 0


def _cmd_config(args: argparse.Namespace) -> int:
    cfg = _resolve_cfg(args)
    print(config_to_toml(cfg), end="")
    return 0


def _resolve_cfg(args: argparse.Namespace) -> EffectiveConfig:
    return resolve_config(vars(args).copy())


def _exit_code(exc: RecipeDocsError) -> int:
    if isinstance(exc, ConfigError):
        return 2
    if isinstance(exc, UnresolvedOriginError):
        return 3
    if isinstance(exc, RecipeNameError):
        return 4
    if isinstance(exc, OutputError):
        return 5
    if isinstance(exc, DescriptorError):
        return 6
    return 1
