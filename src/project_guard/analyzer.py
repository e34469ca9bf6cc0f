"""Heuristic project analyzer. No parsing, no model.

Detects the project's language and layout conventions, then scans every
source file for components, hooks, imports and idioms.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .extractor import (
    ComponentRecord,
    HookRecord,
    ImportRecord,
    extract_text,
    iter_sources,
)
from .idioms import IdiomRecord, detect_idioms
from .language import LanguageProfile, classify
from .logging import get_logger

logger = get_logger("analyzer")


@dataclass
class AnalysisResult:
    """Complete heuristic analysis of a project tree."""

    root: str
    profile: LanguageProfile

    components: list[ComponentRecord] = field(default_factory=list)
    hooks: list[HookRecord] = field(default_factory=list)
    imports: list[ImportRecord] = field(default_factory=list)
    idioms: list[IdiomRecord] = field(default_factory=list)

    @property
    def language(self) -> str:
        return self.profile.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "root": self.root,
            **self.profile.to_dict(),
            "allowedLanguages": [self.profile.name],
            "existingPatterns": {
                "components": [c.to_dict() for c in self.components],
                "hooks": [h.to_dict() for h in self.hooks],
                "imports": [i.to_dict() for i in self.imports],
                "patterns": [p.to_dict() for p in self.idioms],
            },
        }


def _resolve_root(path: str | Path | None) -> Path:
    return Path(path) if path else Path.cwd()


def analyze(path: str | Path | None = None) -> AnalysisResult:
    """Analyze the project at path (default: current directory).

    A missing or unreadable path gives an ``unknown`` result with no
    records rather than an error.
    """
    root = _resolve_root(path)
    result = AnalysisResult(root=str(root), profile=classify(root))

    scanned = 0
    for _, rel, content in iter_sources(root):
        scanned += 1
        structure = extract_text(content, rel)
        result.components.extend(structure.components)
        result.hooks.extend(structure.hooks)
        result.imports.extend(structure.imports)
        result.idioms.extend(detect_idioms(content, rel))

    logger.debug(
        "Analyzed %s: %s, %d source files, %d components",
        root, result.language, scanned, len(result.components),
    )
    return result
