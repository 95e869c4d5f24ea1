"""
Context-aware usage hints.

Every command has two spellings: the interactive one typed at a shell
(``cli``) and the structured call an automated agent issues (``tool``)::

    hint("impact", "cli", {"<file>": "Button.tsx"})
    -> "codemap impact Button.tsx"
    hint("impact", "tool", {"<file>": "Button.tsx"})
    -> "codemap_impact_analysis { target: 'Button.tsx' }"

Placeholders (``<file>``, ``<area>``, ``<term>``) are substituted
verbatim by name, so a template may use one several times or not at all.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

HINT_CONTEXTS = ("cli", "tool")


@dataclass(frozen=True)
class CommandSpec:
    description: str
    cli: str
    tool: str
    needs_target: bool = False


COMMAND_CATALOG: dict[str, CommandSpec] = {
    "map": CommandSpec(
        "Project summary",
        "codemap map",
        "codemap_project_map",
    ),
    "areas": CommandSpec(
        "List every feature area",
        "codemap areas",
        "codemap_list_areas",
    ),
    "area": CommandSpec(
        "Files of one feature area",
        "codemap area <area>",
        "codemap_area_detail { target: '<area>' }",
        needs_target=True,
    ),
    "area_context": CommandSpec(
        "Consolidated context of one area",
        "codemap context --area=<area>",
        "codemap_area_context { area: '<area>' }",
        needs_target=True,
    ),
    "areas_init": CommandSpec(
        "Generate the area configuration file",
        "codemap areas init",
        "codemap_areas_init",
    ),
    "suggest": CommandSpec(
        "What to read before editing a file",
        "codemap suggest <file>",
        "codemap_suggest_reads { target: '<file>' }",
        needs_target=True,
    ),
    "context": CommandSpec(
        "API and signatures of a file",
        "codemap context <file>",
        "codemap_file_context { target: '<file>' }",
        needs_target=True,
    ),
    "impact": CommandSpec(
        "Who uses this file",
        "codemap impact <file>",
        "codemap_impact_analysis { target: '<file>' }",
        needs_target=True,
    ),
    "dead": CommandSpec(
        "Unused files and exports",
        "codemap dead",
        "codemap_dead_code",
    ),
    "find": CommandSpec(
        "Locate a file or symbol by name",
        "codemap find <term>",
        "codemap_find { query: '<term>' }",
        needs_target=True,
    ),
    "describe": CommandSpec(
        "Search areas by description",
        "codemap describe <term>",
        "codemap_describe { query: '<term>' }",
        needs_target=True,
    ),
}


def _check_ctx(ctx: str) -> str:
    if ctx not in HINT_CONTEXTS:
        raise ValueError(f"Unknown hint context {ctx!r}; expected one of {HINT_CONTEXTS}")
    return ctx


def hint(command: str, ctx: str = "cli", params: Optional[dict[str, str]] = None) -> str:
    """
    Return the usage string for *command* in context *ctx*.

    Unknown commands are returned unchanged.

    Parameters
    ----------
    command:
        Catalog key, e.g. ``"impact"``.
    ctx:
        ``"cli"`` or ``"tool"``.
    params:
        Placeholder substitutions, e.g. ``{"<file>": "Button.tsx"}``.
    """
    _check_ctx(ctx)
    spec = COMMAND_CATALOG.get(command)
    if spec is None:
        return command
    text = spec.cli if ctx == "cli" else spec.tool
    for placeholder, value in (params or {}).items():
        text = text.replace(placeholder, value)
    return text


# ---------------------------------------------------------------------------
# Next steps
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class NextStep:
    command: str
    description: str
    params: dict[str, str] = field(default_factory=dict)


NEXT_STEPS: dict[str, tuple[NextStep, ...]] = {
    "map": (
        NextStep("area", "see the files of an area"),
        NextStep("suggest", "what to read before editing"),
        NextStep("context", "see the API of a file"),
    ),
    "impact": (
        NextStep("suggest", "what to read before editing this file"),
        NextStep("context", "see the signatures of upstream files"),
        NextStep("find", "locate uses of specific exports"),
    ),
    "suggest": (
        NextStep("context", "see the signatures of each suggested file"),
        NextStep("impact", "see the full impact of the change"),
    ),
    "context": (
        NextStep("impact", "see who is affected by changes"),
        NextStep("find", "locate uses of a function or type"),
        NextStep("suggest", "what to read before editing"),
    ),
    "area_context": (
        NextStep("find", "search uses of this area's symbols"),
        NextStep("area", "list the files of this area"),
        NextStep("impact", "see the impact of changing a file"),
    ),
    "find": (
        NextStep("context", "see the full signatures of the file"),
        NextStep("impact", "see the impact of changing the file"),
        NextStep("describe", "search areas by description"),
    ),
    "describe": (
        NextStep("area", "see the details of an area"),
        NextStep("area_context", "full context of an area"),
    ),
    "areas": (
        NextStep("area", "see the files of a specific area"),
        NextStep("describe", "search areas by description"),
    ),
    "area": (
        NextStep("area_context", "consolidated context (types, hooks, functions)"),
        NextStep("context", "see the signatures of a specific file"),
        NextStep("find", "search symbols inside the area"),
    ),
    "areas_init": (
        NextStep("areas", "check the configured areas"),
        NextStep("area", "see the files of one area", {"<area>": "auth"}),
    ),
    "dead": (
        NextStep("impact", "check that a dead file is really unused"),
        NextStep("map", "see the updated project structure"),
    ),
}


def next_steps(command: str, ctx: str = "cli") -> str:
    """Return a "Next steps" block for *command*, or ``""`` if none apply."""
    steps = NEXT_STEPS.get(command)
    if not steps:
        return ""
    lines = ["", "Next steps:"]
    for step in steps:
        lines.append(f"  -> {hint(step.command, ctx, step.params)}  {step.description}")
    return "\n".join(lines) + "\n"


# ---------------------------------------------------------------------------
# Recovery hints
# ---------------------------------------------------------------------------

_RECOVERY: dict[str, tuple[str, tuple[tuple[str, str], ...]]] = {
    "file_not_found": ("Tips:", (
        ("map", "see the available files"),
        ("find", "search by symbol name"),
    )),
    "area_not_found": ("Tips:", (
        ("areas", "list the available areas"),
        ("describe", "search areas by description"),
        ("areas_init", "generate an area configuration"),
    )),
    "no_results": ("Tips:", (
        ("find", "search with another term"),
        ("describe", "search areas by description"),
        ("map", "see the project structure"),
    )),
    "no_areas_configured": ("No areas are configured for this project.", (
        ("areas_init", "generate the configuration file"),
        ("", "then edit .codemap/areas.config.yaml with the project's areas"),
        ("map", "see the project structure without areas"),
    )),
    "generic": ("Try:", (
        ("map", "check the project structure"),
        ("", "check that the project root is correct"),
    )),
}

RECOVERY_ERROR_TYPES = tuple(_RECOVERY)


def recovery_hint(error_type: str, ctx: str = "cli") -> str:
    """
    Return the recovery block for *error_type*.

    Unknown error types fall back to ``"generic"``.
    """
    title, items = _RECOVERY.get(error_type, _RECOVERY["generic"])
    lines = ["", title]
    for command, description in items:
        if command:
            lines.append(f"  -> {hint(command, ctx)}  {description}")
        else:
            lines.append(f"  -> {description[0].upper()}{description[1:]}")
    return "\n".join(lines) + "\n"
