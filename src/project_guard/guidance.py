"""Guidance text rendered from analysis and search results.

Every function here is pure: it only reads the result it is given and
returns text meant for a code generator (human or model) to follow.
"""

from __future__ import annotations

from collections import Counter, defaultdict

from .analyzer import AnalysisResult
from .search import SearchResult

TOP_IMPORTS = 5
EXAMPLES_PER_IDIOM = 3
PREVIEW_CHARS = 200
SEARCH_IMPORTS = 5


def architecture_instructions(result: AnalysisResult) -> str:
    """Rules derived from the language profile plus a short inventory."""
    profile = result.profile
    return f"""ARCHITECTURE RULES FOR {profile.name.upper()} PROJECT:
- Use only layers: {", ".join(profile.layers)}
- Respect folder structure: {", ".join(profile.folder_pattern)}
- Do not create files outside these folders
- Language: {profile.name}
- Follow conventions already present in the existing code

PROJECT OVERVIEW:
- Detected {len(result.components)} existing components
- Found {len(result.idioms)} code patterns
- Project uses {profile.name} with {len(profile.layers)} architectural layers

NEXT STEP: Use find_similar_code tool to search for existing patterns before creating new code."""


def pattern_guidance(result: AnalysisResult, category: str = "component") -> str:
    """Similar components, common imports and idiom examples for category."""
    category = category.lower()
    lines = ["", "", "=== EXISTING PATTERNS IN PROJECT ==="]

    similar = [
        c for c in result.components
        if c.role == category or category in c.name.lower()
    ]
    if similar:
        lines.append("")
        lines.append("SIMILAR COMPONENTS FOUND:")
        for c in similar:
            lines.append(f"- {c.name} ({c.role}) in {c.file}")
        lines.append("")
        lines.append("=> Follow the same pattern as these existing components!")

    # Counter keeps first-encounter order among equal counts.
    import_counts = Counter(imp.module for imp in result.imports)
    top_imports = import_counts.most_common(TOP_IMPORTS)
    if top_imports:
        lines.append("")
        lines.append("COMMON IMPORTS IN PROJECT:")
        for module, count in top_imports:
            lines.append(f"- {module} (used {count} times)")

    by_kind = defaultdict(list)
    for idiom in result.idioms:
        by_kind[idiom.kind].append(idiom)
    for kind, idioms in by_kind.items():
        lines.append("")
        lines.append(f"{kind.upper()} PATTERNS:")
        for idiom in idioms[:EXAMPLES_PER_IDIOM]:
            lines.append(f"- {idiom.label} in {idiom.file}")
            if idiom.example:
                lines.append(f"  Example: {idiom.example}")

    return "\n".join(lines) + "\n"


def search_guidance(result: SearchResult, category: str | None = None) -> str:
    """Summary of a similarity search with a closing recommendation."""
    category = category or result.category
    lines = ["=== SIMILAR CODE ANALYSIS ===", ""]

    if result.exact_matches:
        lines.append(f"EXACT MATCHES ({len(result.exact_matches)}):")
        for match in result.exact_matches:
            lines.append(f"- {match.file}")
            if match.snippet:
                lines.append("  Code preview:")
                lines.append(f"{match.snippet[:PREVIEW_CHARS]}...")
                lines.append("")

    if result.term_matches:
        lines.append(f"TERM MATCHES ({len(result.term_matches)}):")
        for match in result.term_matches:
            lines.append(f'- {match.file} (search: "{match.term}")')
        lines.append("")

    if result.relevant_imports:
        lines.append("RELEVANT IMPORTS:")
        unique = list(dict.fromkeys(imp.statement for imp in result.relevant_imports))
        for statement in unique[:SEARCH_IMPORTS]:
            lines.append(f"- {statement}")
        lines.append("")

    if result.relevant_idioms:
        lines.append("CODE PATTERNS DETECTED:")
        for idiom in result.relevant_idioms:
            lines.append(f"- {idiom.label} in {idiom.file}")
        lines.append("")

    if not result.exact_matches and not result.term_matches:
        lines.append("NO SIMILAR CODE FOUND")
        lines.append(f"Consider creating a new {category} following the project's architecture.")
    else:
        lines.append("RECOMMENDATION:")
        lines.append(f"Follow the patterns found above when creating your new {category}.")
        lines.append("Reuse imports, structure, and coding style from existing similar components.")

    return "\n".join(lines) + "\n"
