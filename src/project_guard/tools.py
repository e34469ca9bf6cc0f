"""Tool dispatch: the two operations exposed to callers, by name.

Each tool returns a JSON-ready payload combining the raw result with its
guidance text. Only two errors reach the caller: naming a tool that does
not exist, and passing arguments of the wrong type.
"""

from __future__ import annotations

from typing import Any

from .analyzer import analyze
from .guidance import architecture_instructions, pattern_guidance, search_guidance
from .search import search
from .usage import UsageLog

ANALYZE_TOOL = "analyze_architecture"
SEARCH_TOOL = "find_similar_code"

TOOLS: list[dict[str, Any]] = [
    {
        "name": ANALYZE_TOOL,
        "description": "Analyze project architecture, detect language, and return validation rules",
        "inputSchema": {
            "type": "object",
            "properties": {
                "path": {
                    "type": "string",
                    "description": "Project path to analyze (defaults to the working directory)",
                },
            },
        },
    },
    {
        "name": SEARCH_TOOL,
        "description": "Find existing similar components, functions, or patterns in the project",
        "inputSchema": {
            "type": "object",
            "properties": {
                "component_type": {
                    "type": "string",
                    "description": "Type of component/code to find (e.g., 'modal', 'button', 'api', 'form', 'service')",
                    "default": "component",
                },
                "search_term": {
                    "type": "string",
                    "description": "Specific term to search for in code (optional)",
                    "default": "",
                },
                "path": {
                    "type": "string",
                    "description": "Project path to search in (defaults to the working directory)",
                },
            },
        },
    },
]


class UnknownToolError(LookupError):
    """Raised when a call names a tool that is not implemented."""

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class InvalidArgumentsError(ValueError):
    """Raised when a tool argument has the wrong type."""


def _string_arg(args: dict[str, Any], key: str) -> str | None:
    value = args.get(key)
    if value is not None and not isinstance(value, str):
        raise InvalidArgumentsError(
            f"Argument '{key}' must be a string, got {type(value).__name__}"
        )
    return value


def tool_names() -> list[str]:
    return [t["name"] for t in TOOLS]


def call_tool(
    name: str,
    arguments: dict[str, Any] | None = None,
    usage_log: UsageLog | None = None,
    default_category: str = "component",
) -> dict[str, Any]:
    """Run a tool by name and return its payload.

    Raises UnknownToolError for an unimplemented name and
    InvalidArgumentsError when arguments is not a mapping or path,
    component_type or search_term is present but not a string.
    """
    if arguments is not None and not isinstance(arguments, dict):
        raise InvalidArgumentsError("Tool arguments must be a JSON object")
    args = arguments or {}
    usage_log = usage_log or UsageLog()

    if name == ANALYZE_TOOL:
        return _analyze_architecture(args, usage_log, default_category)
    if name == SEARCH_TOOL:
        return _find_similar_code(args, usage_log, default_category)
    raise UnknownToolError(name)


def _analyze_architecture(
    args: dict[str, Any], usage_log: UsageLog, category: str
) -> dict[str, Any]:
    path = _string_arg(args, "path") or None
    usage_log.record("ARCHITECTURE_ANALYZED", tool=ANALYZE_TOOL, projectPath=path)

    result = analyze(path)

    usage_log.record(
        "ARCHITECTURE_COMPLETE",
        detectedLanguage=result.language,
        componentsFound=len(result.components),
    )
    return {
        "summary": result.to_dict(),
        "instructions": architecture_instructions(result),
        "guidance": pattern_guidance(result, category),
    }


def _find_similar_code(
    args: dict[str, Any], usage_log: UsageLog, default_category: str
) -> dict[str, Any]:
    path = _string_arg(args, "path") or None
    category = _string_arg(args, "component_type") or default_category
    term = _string_arg(args, "search_term") or ""
    usage_log.record(
        "SIMILAR_CODE_SEARCH",
        tool=SEARCH_TOOL,
        projectPath=path,
        componentType=category,
        searchTerm=term,
    )

    result = search(path, category, term)

    usage_log.record(
        "SIMILAR_CODE_COMPLETE",
        exactMatches=len(result.exact_matches),
        termMatches=len(result.term_matches),
        patternsFound=len(result.relevant_idioms),
    )
    return {
        "componentType": result.category,
        "searchTerm": result.term,
        "exactMatches": len(result.exact_matches),
        "termMatches": len(result.term_matches),
        "patterns": len(result.relevant_idioms),
        "guidance": search_guidance(result),
        "results": result.to_dict(),
    }
