"""
`codemap` command-line interface.

Commands
--------
codemap map                    -- classify every file and summarise the project
codemap areas                  -- list feature areas, most populous first
codemap areas init [--force]   -- write a starter areas.config.yaml
codemap area <name>            -- files of one area (name, id or partial id)
codemap find <file>            -- resolve a loose file reference and describe it
codemap describe <term>        -- search areas by description
codemap cache status           -- show meta.json and whether it is fresh
codemap cache clear            -- invalidate the analysis cache

Global options: --root, --no-cache, --json, --ctx {cli,tool}, --verbose, --log
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import Optional

from tqdm import tqdm

from . import __version__
from .areas import describe_file, detected_areas
from .areas.config import config_path
from .areas.starter import FRAMEWORK_NAMES
from .classifier import CATEGORY_ICONS, FileCategory, classify
from .config import Config
from .errors import MissingTargetError
from .hints import hint, next_steps, recovery_hint
from .logs import setup_logger
from .scanner import ProjectScanner

logger = logging.getLogger(__name__)

DESCRIBE_FILE_LIMIT = 5


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _scanner(args: argparse.Namespace) -> ProjectScanner:
    root = os.path.abspath(args.root)
    config = Config.load(root)
    if args.ctx:
        config.HINT_CONTEXT = args.ctx
    if args.log:
        setup_logger(os.path.join(root, config.LOG_DIR))
    return ProjectScanner(root, config)


def _print_json(data) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def _fail(message: str) -> None:
    print(message, end="" if message.endswith("\n") else "\n")
    sys.exit(1)


# ---------------------------------------------------------------------------
# Sub-command handlers
# ---------------------------------------------------------------------------

def _cmd_map(args: argparse.Namespace) -> None:
    """Build (or reuse) the project map."""
    scanner = _scanner(args)
    pbar = tqdm(total=None, unit="file", desc="Scanning", disable=args.json, leave=False)

    def _progress(current: int, total: int, filename: str) -> None:
        if pbar.total != total:
            pbar.total = total
            pbar.refresh()
        pbar.set_postfix_str(os.path.basename(filename), refresh=False)
        pbar.update(1)

    try:
        result = scanner.build_map(use_cache=not args.no_cache, progress_callback=_progress)
    finally:
        pbar.close()

    if args.json:
        _print_json(result)
        return

    summary = result["summary"]
    print(f"\nProject: {result['root']}")
    print("=" * 60)
    print(f"  Files:   {summary['total_files']}")
    print(f"  Folders: {summary['total_folders']}")
    print("\n  Categories:")
    for category, count in sorted(summary["categories"].items(), key=lambda kv: (-kv[1], kv[0])):
        icon = CATEGORY_ICONS.get(FileCategory(category), "")
        print(f"    {icon} {category:<12} {count}")
    if result.get("from_cache"):
        print("\n  (from cache)")
    print(next_steps("map", scanner.config.HINT_CONTEXT), end="")


def _cmd_areas(args: argparse.Namespace) -> None:
    """List detected areas, or write a starter config with `areas init`."""
    scanner = _scanner(args)
    if args.areas_cmd == "init":
        _areas_init(scanner, args)
        return

    config = scanner.areas_config()
    areas = detected_areas(scanner.area_index(), config)

    if args.json:
        _print_json([a.to_dict() for a in areas])
        return

    ctx = scanner.config.HINT_CONTEXT
    if not areas:
        print("No areas detected.")
        print(recovery_hint("no_areas_configured", ctx), end="")
        return

    print(f"\nAreas  [{len(areas)}]")
    print("-" * 60)
    for area in areas:
        marker = "" if area.is_auto_detected else "  (configured)"
        print(f"  {area.id:<25} {area.file_count:>4} files  {area.name}{marker}")
    print(next_steps("areas", ctx), end="")


def _areas_init(scanner: ProjectScanner, args: argparse.Namespace) -> None:
    created = scanner.init_areas(force=args.force)
    if created is None:
        path = config_path(scanner.project_root, scanner.config.CACHE_DIR)
        if args.json:
            _print_json({"created": False, "path": path})
            return
        print(f"Area config already exists: {path}")
        print("Use `codemap areas init --force` to overwrite it, or edit it by hand.")
        return

    if args.json:
        _print_json({"created": True, "path": created.path, "framework": created.framework,
                     "config": created.config.to_dict()})
        return
    print(f"Created: {created.path}")
    print(f"  Layout:  {FRAMEWORK_NAMES[created.framework]}")
    print(f"  Areas:   {len(created.config.areas)}")
    print(f"  Ignored: {len(created.config.ignore)} pattern(s)")
    print("\nEdit the file to rename areas and adjust their patterns and keywords.")
    print(next_steps("areas_init", scanner.config.HINT_CONTEXT), end="")


def _cmd_area(args: argparse.Namespace) -> None:
    """Show the files of one area."""
    scanner = _scanner(args)
    lookup = scanner.find_area(args.target or "")
    if not lookup.found:
        _fail(lookup.message)

    if args.json:
        _print_json({
            "area": lookup.area_id,
            "files": [{"path": p, "category": classify(p).value} for p in lookup.files],
        })
        return

    print(f"\nArea: {lookup.area_id}  [{len(lookup.files)} file(s)]")
    print("-" * 60)
    for path in lookup.files:
        print(f"  {classify(path).value:<10}  {path}")
    print(next_steps("area", scanner.config.HINT_CONTEXT), end="")


def _cmd_find(args: argparse.Namespace) -> None:
    """Resolve a loose file reference."""
    scanner = _scanner(args)
    lookup = scanner.find_file(args.target or "", command="find")
    if not lookup.found:
        _fail(lookup.message)

    category = classify(lookup.path)
    areas = sorted(scanner.area_index().areas_of(lookup.path))
    description = describe_file(lookup.path, category, scanner.areas_config())
    if args.json:
        _print_json({"path": lookup.path, "category": category.value, "areas": areas,
                     "description": description})
        return

    print(lookup.path)
    print(f"  category: {category.value}")
    if areas:
        print(f"  areas:    {', '.join(areas)}")
    if description:
        print(f"  about:    {description}")
    print(next_steps("find", scanner.config.HINT_CONTEXT), end="")


def _cmd_describe(args: argparse.Namespace) -> None:
    """Search areas by description."""
    scanner = _scanner(args)
    result = scanner.search_areas(args.target or "")
    if args.json:
        _print_json(result.to_dict())
        return

    ctx = scanner.config.HINT_CONTEXT
    if not result.areas:
        print(f'No areas found for: "{result.query}"')
        if result.suggestions:
            print("\nDid you mean?")
            for suggestion in result.suggestions:
                print(f"  -> {hint('describe', ctx, {'<term>': suggestion})}")
        print(recovery_hint("no_results", ctx), end="")
        return

    print(f'\nSearch: "{result.query}"')
    for match in result.areas:
        print("-" * 60)
        print(f"  {match.name} ({match.id})  [{match.file_count} file(s)]")
        if match.description:
            print(f"  {match.description}")
        for path in match.files[:DESCRIBE_FILE_LIMIT]:
            print(f"    * {path}")
        remaining = match.file_count - DESCRIBE_FILE_LIMIT
        if remaining > 0:
            print(f"    ... and {remaining} more ({hint('area', ctx, {'<area>': match.id})})")
    print(next_steps("describe", ctx), end="")


def _cmd_cache(args: argparse.Namespace) -> None:
    """Inspect or clear the analysis cache."""
    scanner = _scanner(args)
    cache = scanner.cache

    if args.cache_cmd == "clear":
        cache.invalidate()
        print(f"Cache cleared: {cache.directory}")
        return

    meta = cache.read_meta()
    valid = cache.is_valid()
    if args.json:
        _print_json({"valid": valid, "meta": vars(meta) if meta else None})
        return
    if meta is None:
        print("No cache found. Run `codemap map` first.")
        return
    print("\nCache Status")
    print("=" * 40)
    for k, v in vars(meta).items():
        print(f"  {k:<20} {v}")
    print(f"  {'valid':<20} {valid}")
    print()


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Build and return the `codemap` argument parser."""
    parser = argparse.ArgumentParser(
        prog="codemap",
        description="Project map, feature areas and file lookup for JS/TS projects",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--root", default=".", help="Project root (default: current directory)")
    parser.add_argument("--no-cache", action="store_true", help="Ignore and do not write the cache")
    parser.add_argument("--json", action="store_true", help="Print JSON instead of text")
    parser.add_argument("--ctx", choices=("cli", "tool"), default=None,
                        help="Hint style for suggestions (default: from config)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging to stderr")
    parser.add_argument("--log", action="store_true",
                        help="Also write a debug log file under the log directory")

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    # --- map ---
    map_p = subparsers.add_parser("map", help="Classify files and summarise the project")
    map_p.set_defaults(func=_cmd_map)

    # --- areas ---
    areas_p = subparsers.add_parser("areas", help="List feature areas")
    areas_sub = areas_p.add_subparsers(dest="areas_cmd", metavar="ACTION")
    init_p = areas_sub.add_parser("init", help="Write a starter areas.config.yaml")
    init_p.add_argument("--force", action="store_true", help="Overwrite an existing config")
    areas_p.set_defaults(func=_cmd_areas)

    # --- area / find / describe ---
    for name, func, helptext in [
        ("area",     _cmd_area,     "Files of one area"),
        ("find",     _cmd_find,     "Resolve a file reference"),
        ("describe", _cmd_describe, "Search areas by description"),
    ]:
        p = subparsers.add_parser(name, help=helptext)
        p.add_argument("target", nargs="?", help="Area, file or search term")
        p.set_defaults(func=func)

    # --- cache ---
    cache_p = subparsers.add_parser("cache", help="Inspect or clear the analysis cache")
    cache_sub = cache_p.add_subparsers(dest="cache_cmd", metavar="ACTION")
    cache_sub.required = True
    cache_sub.add_parser("status", help="Show cache metadata and freshness")
    cache_sub.add_parser("clear", help="Invalidate the cache")
    cache_p.set_defaults(func=_cmd_cache)

    return parser


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main(argv: Optional[list[str]] = None) -> None:
    """
    Main entry point for the `codemap` console script.

    Parameters
    ----------
    argv:
        Argument list without the program name. Defaults to sys.argv if None.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    # Configure logging if not already configured
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG,
                            format="%(levelname)s  %(name)s  %(message)s", force=True)
    elif not logging.root.handlers:
        logging.basicConfig(level=logging.WARNING,
                            format="%(levelname)s  %(name)s  %(message)s")

    try:
        args.func(args)
    except MissingTargetError as exc:
        print(exc.usage or str(exc), file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
