"""Command-line interface for extpath-core."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import orjson

from contract.errors import InvalidRequestError
from contract.models import ExtensionCategory
from discovery.manifest import overrides_from_manifest
from resolution.service import build_request
from resolution.wiring import create_resolution_service
from rules.config import ConfigError, ResolverConfig, load_config
from verify.verify import verify_determinism

if TYPE_CHECKING:
    from contract.models import ResolutionRequest

_LOG_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)


def _add_config_dir(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        default=".",
        metavar="DIR",
        help="Directory holding extpath.toml and the cache (default: .)",
    )


def _add_request_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("installation_root", help="Installation root directory")
    parser.add_argument("key", help="Extension key")
    parser.add_argument(
        "--manager-name",
        default=None,
        help="Dependency-manager package name (vendor/package)",
    )
    parser.add_argument(
        "--category",
        default=ExtensionCategory.LOCAL.value,
        choices=[category.value for category in ExtensionCategory],
        help="Extension category (default: local)",
    )
    parser.add_argument(
        "--override",
        action="append",
        default=[],
        metavar="NAME=PATH",
        help="Mount point override, e.g. web-root=app/web (repeatable)",
    )
    parser.add_argument(
        "--from-manifest",
        action="store_true",
        help="Derive web-root and vendor-root from the installation's composer.json",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the full result as JSON",
    )
    _add_config_dir(parser)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="extpath")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v info, -vv debug)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    resolve_parser = subparsers.add_parser("resolve", help="Resolve an extension path")
    _add_request_args(resolve_parser)
    resolve_parser.add_argument(
        "--no-cache",
        action="store_true",
        help="Bypass both cache tiers",
    )

    verify_parser = subparsers.add_parser(
        "verify", help="Verify determinism of a resolution"
    )
    _add_request_args(verify_parser)

    cache_parser = subparsers.add_parser("cache", help="Manage the resolution cache")
    cache_subparsers = cache_parser.add_subparsers(dest="cache_command", required=True)

    clear_parser = cache_subparsers.add_parser("clear", help="Remove every cached entry")
    _add_config_dir(clear_parser)

    prune_parser = cache_subparsers.add_parser(
        "prune", help="Remove stale entries of one installation"
    )
    prune_parser.add_argument("installation_root", help="Installation root directory")
    _add_config_dir(prune_parser)

    return parser


def _parse_overrides(values: list[str]) -> dict[str, str]:
    overrides: dict[str, str] = {}
    for value in values:
        name, sep, path = value.partition("=")
        if not sep or not name.strip() or not path.strip():
            msg = f"Invalid override {value!r}; expected NAME=PATH"
            raise InvalidRequestError(msg)
        overrides[name.strip()] = path.strip()
    return overrides


def _request_overrides(args: argparse.Namespace, config: ResolverConfig) -> dict[str, str]:
    overrides = dict(config.overrides)
    if args.from_manifest:
        overrides.update(overrides_from_manifest(args.installation_root))
    overrides.update(_parse_overrides(args.override))
    return overrides


def _request_from_args(
    args: argparse.Namespace, config: ResolverConfig
) -> ResolutionRequest:
    return build_request(
        args.key,
        args.installation_root,
        manager_name=args.manager_name,
        category=args.category,
        overrides=_request_overrides(args, config),
    )


def _write_json(payload: object) -> None:
    sys.stdout.write(orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode())
    sys.stdout.write("\n")


def _handle_resolve(args: argparse.Namespace, config_dir: Path, config: ResolverConfig) -> int:
    request = _request_from_args(args, config)
    service = create_resolution_service(
        config, project_root=config_dir, use_cache=not args.no_cache
    )
    result = service.resolve(request)

    if args.json:
        _write_json(result.model_dump(mode="json"))
        return 0 if result.status == "resolved" else 1

    if result.status == "resolved":
        sys.stdout.write(f"{result.path}\n")
        return 0

    sys.stderr.write(f"unresolved: {request.key} ({result.failure})\n")
    for reason in result.reasons:
        sys.stderr.write(f"  {reason}\n")
    return 1


def _handle_verify(args: argparse.Namespace, config: ResolverConfig) -> int:
    request = _request_from_args(args, config)
    result = verify_determinism(request, config=config)

    if args.json:
        _write_json(
            {
                "ok": result.ok,
                "first": result.first.model_dump(mode="json"),
                "second": result.second.model_dump(mode="json"),
            }
        )
        return 0 if result.ok else 1

    if not result.ok:
        for difference in result.differences:
            sys.stderr.write(f"mismatch: {difference}\n")
        return 1
    return 0


def _handle_cache(args: argparse.Namespace, config_dir: Path, config: ResolverConfig) -> int:
    service = create_resolution_service(config, project_root=config_dir)

    if args.cache_command == "clear":
        removed = service.clear_cache()
    elif args.cache_command == "prune":
        removed = service.invalidate(args.installation_root)
    else:
        raise AssertionError

    sys.stdout.write(f"removed {removed} cache entries\n")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=_LOG_LEVELS[min(args.verbose, len(_LOG_LEVELS) - 1)],
        format="%(levelname)s %(name)s: %(message)s",
    )

    config_dir = Path(args.config).expanduser().resolve()
    try:
        config = load_config(config_dir)
    except ConfigError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2

    try:
        if args.command == "resolve":
            return _handle_resolve(args, config_dir, config)

        if args.command == "verify":
            return _handle_verify(args, config)

        if args.command == "cache":
            return _handle_cache(args, config_dir, config)
    except (InvalidRequestError, ConfigError) as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2

    raise AssertionError


if __name__ == "__main__":
    raise SystemExit(main())
