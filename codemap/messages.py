"""
Error messages with "did you mean" suggestions.

Every formatter returns display-ready text.  Nothing here raises for an
unknown file or area: the message itself is the recovery path.
"""

from __future__ import annotations

from typing import Optional, Sequence

from .hints import COMMAND_CATALOG, hint, recovery_hint
from .similarity import extract_file_name, find_best_match, find_similar

# Commands listed in the quick reference, in display order.
_REFERENCE_COMMANDS = ("map", "areas", "area", "suggest", "context", "impact", "dead")


def _command_reference(ctx: str, exclude: Optional[str] = None) -> list[str]:
    lines = ["", "Useful commands:"]
    for command in _REFERENCE_COMMANDS:
        if command == exclude:
            continue
        usage = hint(command, ctx)
        lines.append(f"  {usage:<40} {COMMAND_CATALOG[command].description}")
    return lines


def _join(lines: list[str]) -> str:
    return "\n".join(lines) + "\n"


# ---------------------------------------------------------------------------
# File not found
# ---------------------------------------------------------------------------

def format_file_not_found(
    target: str,
    all_files: Sequence[str],
    command: Optional[str] = None,
    ctx: str = "cli",
    limit: int = 5,
) -> str:
    """
    Explain that *target* matched no file and list the closest ones.

    Parameters
    ----------
    target:
        The reference the user typed.
    all_files:
        Every indexed file path.
    command:
        The command that failed; adds a command reference when given.
    ctx:
        Hint context, ``"cli"`` or ``"tool"``.
    limit:
        Maximum number of similar files listed.
    """
    similar = find_similar(target, all_files, limit=limit, key=extract_file_name)
    best = find_best_match(target, all_files, key=extract_file_name)

    lines = [f'File not found: "{target}"', "", f"Indexed files: {len(all_files)}"]

    if best:
        lines += ["", "Did you mean?", f"  -> {best}"]

    others = [f for f in similar if f != best]
    if others:
        lines += ["", "Similar files:"]
        lines += [f"  * {f}" for f in others]

    lines += [
        "",
        "Tips:",
        "  * Use the relative path: src/components/Header.tsx",
        "  * Or just the file name: Header",
        "  * Check that the file lives in a scanned folder",
    ]

    if command:
        lines += _command_reference(ctx, exclude=command)

    return _join(lines)


# ---------------------------------------------------------------------------
# Area not found
# ---------------------------------------------------------------------------

def format_area_not_found(
    target: str,
    available_areas: Sequence[tuple[str, int]],
    ctx: str = "cli",
    limit: int = 15,
) -> str:
    """
    Explain that *target* matched no area.

    *available_areas* is a list of ``(area_id, file_count)`` pairs, most
    populous first.  A confident match produces a single "did you mean"
    line; otherwise near matches are listed first, followed by the most
    populous remaining areas, at most *limit* in total.
    """
    counts = dict(available_areas)
    area_ids = [area_id for area_id, _ in available_areas]

    best = find_best_match(target, area_ids)
    similar = [] if best else find_similar(target, area_ids)

    lines = [f'Area not found: "{target}"']

    if best:
        lines += ["", "Did you mean?", f"  -> {hint('area', ctx, {'<area>': best})}"]

    if available_areas:
        lines += ["", "Available areas:"]
        shown = 0
        if similar:
            for area_id in similar[:limit]:
                lines.append(f"  {area_id:<25} {counts[area_id]} files")
            lines.append("  ---")
            shown = len(similar[:limit])
        rest = [a for a in area_ids if a not in similar][:max(limit - shown, 0)]
        for area_id in rest:
            lines.append(f"  {area_id:<25} {counts[area_id]} files")
        shown += len(rest)
        if len(area_ids) > shown:
            lines.append(f"  ... and {len(area_ids) - shown} more")

    lines += [
        "",
        "Tips:",
        f"  * Use the exact area id, e.g. {hint('area', ctx, {'<area>': 'auth'})}",
        f"  * {hint('areas', ctx)} lists every area",
        "  * Names and partial ids work too, e.g. \"dash\" for dashboard",
    ]
    return _join(lines) + recovery_hint("area_not_found", ctx)


# ---------------------------------------------------------------------------
# Missing target / invalid command
# ---------------------------------------------------------------------------

def format_missing_target(command: str, ctx: str = "cli") -> str:
    """Usage text for a command that was called without its target."""
    lines = [f'Error: "target" is required for the "{command}" command.', "", "Examples:"]

    if command == "area":
        for example in ("auth", "dashboard", "billing"):
            lines.append(f"  {hint('area', ctx, {'<area>': example})}")
        lines += ["", f"Use '{hint('areas', ctx)}' to list every available area."]
    elif command == "describe":
        for example in ("authentication", "stripe checkout", "user profile"):
            lines.append(f"  {hint('describe', ctx, {'<term>': example})}")
    else:
        for example in ("useAuth", "Button.tsx", "src/hooks/useAuth.ts"):
            params = {"<file>": example, "<term>": example, "<area>": example}
            lines.append(f"  {hint(command, ctx, params)}")

    lines += _command_reference(ctx, exclude=command)
    return _join(lines)


def format_invalid_command(command: str, ctx: str = "cli") -> str:
    """Explain that *command* is unknown and list the valid ones."""
    best = find_best_match(command, list(COMMAND_CATALOG))

    lines = [f'Invalid command: "{command}"']
    if best:
        lines += ["", "Did you mean?", f"  -> {hint(best, ctx)}"]

    lines += ["", "Available commands:"]
    for name, spec in COMMAND_CATALOG.items():
        lines.append(f"  {hint(name, ctx):<40} {spec.description}")
    return _join(lines)
