"""Similarity search: find existing code resembling what is about to be written."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .extractor import ImportRecord, iter_imports, iter_sources
from .idioms import IdiomRecord, detect_idioms
from .logging import get_logger

logger = get_logger("search")

EXACT_SCORE = 100
TERM_SCORE = 80

SNIPPET_CAPTURE_LIMIT = 50
SNIPPET_MAX_LINES = 30
CONTEXT_BEFORE = 5
CONTEXT_AFTER = 10

DECLARATION_KEYWORDS = ("function", "class", "const")

# Extra module substrings that also count as relevant for a category.
IMPORT_ALIASES = {
    "modal": ("dialog", "popup"),
    "button": ("btn",),
    "form": ("input",),
}


@dataclass
class ExactMatch:
    file: str
    snippet: str
    score: int = EXACT_SCORE

    def to_dict(self) -> dict[str, Any]:
        return {"file": self.file, "snippet": self.snippet, "score": self.score}


@dataclass
class TermMatch:
    file: str
    term: str
    snippet: str
    score: int = TERM_SCORE

    def to_dict(self) -> dict[str, Any]:
        return {"file": self.file, "searchTerm": self.term, "snippet": self.snippet, "score": self.score}


@dataclass
class SearchResult:
    """Matches for one category/term query, in file-visit order."""

    category: str
    term: str = ""
    exact_matches: list[ExactMatch] = field(default_factory=list)
    term_matches: list[TermMatch] = field(default_factory=list)
    relevant_imports: list[ImportRecord] = field(default_factory=list)
    relevant_idioms: list[IdiomRecord] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "componentType": self.category,
            "searchTerm": self.term,
            "exactMatches": [m.to_dict() for m in self.exact_matches],
            "termMatches": [m.to_dict() for m in self.term_matches],
            "imports": [i.to_dict() for i in self.relevant_imports],
            "patterns": [p.to_dict() for p in self.relevant_idioms],
        }


def _brace_delta(line: str) -> int:
    return line.count("{") - line.count("}")


def extract_relevant_code(content: str, category: str) -> str:
    """Return the first declaration mentioning category, cut at its closing brace.

    Capture starts at the declaration line and ends when the brace depth
    drops to zero (after at least one following line) or after
    SNIPPET_CAPTURE_LIMIT lines. At most SNIPPET_MAX_LINES are returned.
    """
    category = category.lower()
    lines = content.split("\n")

    start = None
    for i, line in enumerate(lines):
        lower = line.lower()
        if category in lower and any(k in lower for k in DECLARATION_KEYWORDS):
            start = i
            break
    if start is None:
        return ""

    captured = [lines[start]]
    depth = _brace_delta(lines[start])
    for line in lines[start + 1:]:
        if len(captured) >= SNIPPET_CAPTURE_LIMIT:
            break
        captured.append(line)
        depth += _brace_delta(line)
        if depth <= 0:
            break

    return "\n".join(captured[:SNIPPET_MAX_LINES])


def extract_code_around_term(content: str, term: str) -> str:
    """Return a window around the first line containing term, or ''."""
    term = term.lower()
    lines = content.split("\n")
    for idx, line in enumerate(lines):
        if term in line.lower():
            start = max(0, idx - CONTEXT_BEFORE)
            end = min(len(lines), idx + CONTEXT_AFTER + 1)
            return "\n".join(lines[start:end])
    return ""


def relevant_imports(content: str, file: str, category: str) -> list[ImportRecord]:
    """External imports whose module or statement relates to category."""
    category = category.lower()
    aliases = IMPORT_ALIASES.get(category, ())
    found = []
    for module, statement in iter_imports(content):
        if (
            category in module.lower()
            or category in statement.lower()
            or any(a in module.lower() for a in aliases)
        ):
            found.append(ImportRecord(module=module, file=file, statement=statement))
    return found


def search(
    path: str | Path | None = None,
    category: str = "component",
    term: str = "",
) -> SearchResult:
    """Find files resembling category, plus files mentioning term.

    Scores are fixed tiers (EXACT_SCORE, TERM_SCORE); results are not sorted.
    """
    root = Path(path) if path else Path.cwd()
    category = (category or "component").lower()
    term = term or ""
    lower_term = term.lower()
    result = SearchResult(category=category, term=term)

    for fpath, rel, content in iter_sources(root):
        lower_content = content.lower()

        if category in fpath.name.lower() or category in lower_content:
            result.exact_matches.append(
                ExactMatch(file=rel, snippet=extract_relevant_code(content, category))
            )

        if lower_term and lower_term in lower_content:
            result.term_matches.append(
                TermMatch(file=rel, term=term, snippet=extract_code_around_term(content, term))
            )

        result.relevant_imports.extend(relevant_imports(content, rel, category))
        result.relevant_idioms.extend(detect_idioms(content, rel, category=category))

    logger.debug(
        "Search %r/%r in %s: %d exact, %d term",
        category, term, root, len(result.exact_matches), len(result.term_matches),
    )
    return result
