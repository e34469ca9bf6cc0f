"""Structural extraction: declared components, handler hooks, external imports.

All matching is regex over raw text. Nothing here understands the grammar
of the scanned language, so results are best-effort.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Iterator

from .walker import read_source, relative_path, walk

# Scanned regardless of the detected language, to catch polyglot repos.
SOURCE_EXTENSIONS = (
    ".js", ".ts", ".jsx", ".tsx", ".py", ".java", ".cs", ".go", ".rs", ".php",
)

COMPONENT_RE = re.compile(r"(?:class|function|const)\s+([A-Z][a-zA-Z0-9]*)")
HOOK_RE = re.compile(r"use[A-Z][a-zA-Z0-9]*|on[A-Z][a-zA-Z0-9]*")
IMPORT_RE = re.compile(r"""import\s+.*?from\s+['"]([^'"]+)['"]""")

# (role, name substrings, text substrings, name prefixes); first match wins.
ROLE_RULES: tuple[tuple[str, tuple[str, ...], tuple[str, ...], tuple[str, ...]], ...] = (
    ("modal", ("modal",), ("modal",), ()),
    ("button", ("button",), ("onclick",), ()),
    ("form", ("form",), ("onsubmit",), ()),
    ("table", ("table",), ("thead",), ()),
    ("card", ("card",), ("card",), ()),
    ("header", ("header",), ("nav",), ()),
    ("footer", ("footer",), (), ()),
    ("sidebar", ("sidebar",), (), ()),
    ("service", ("service",), ("api",), ()),
    ("hook", ("hook",), (), ("use",)),
)
DEFAULT_ROLE = "component"


@dataclass
class ComponentRecord:
    name: str
    file: str
    role: str

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "file": self.file, "type": self.role}


@dataclass
class HookRecord:
    name: str
    file: str

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "file": self.file}


@dataclass
class ImportRecord:
    """An import of an external package (never a relative path)."""

    module: str
    file: str
    statement: str

    def to_dict(self) -> dict[str, Any]:
        return {"module": self.module, "file": self.file, "statement": self.statement}


@dataclass
class Structure:
    """Everything the extractor found across a tree."""

    components: list[ComponentRecord] = field(default_factory=list)
    hooks: list[HookRecord] = field(default_factory=list)
    imports: list[ImportRecord] = field(default_factory=list)

    def extend(self, other: "Structure") -> None:
        self.components.extend(other.components)
        self.hooks.extend(other.hooks)
        self.imports.extend(other.imports)


def detect_role(name: str, content: str) -> str:
    """Classify a declared identifier using its name and its file's text."""
    lower_name = name.lower()
    lower_content = content.lower()
    for role, name_needles, text_needles, prefixes in ROLE_RULES:
        if any(n in lower_name for n in name_needles):
            return role
        if any(n in lower_content for n in text_needles):
            return role
        if any(lower_name.startswith(p) for p in prefixes):
            return role
    return DEFAULT_ROLE


def is_source_file(path: Path, extensions: Iterable[str] = SOURCE_EXTENSIONS) -> bool:
    return path.suffix.lower() in extensions


def iter_imports(content: str) -> Iterable[tuple[str, str]]:
    """Yield (module, statement) for each non-relative import in content."""
    for match in IMPORT_RE.finditer(content):
        module = match.group(1)
        if not module.startswith("."):
            yield module, match.group(0)


def extract_text(content: str, file: str) -> Structure:
    """Extract components, hooks and imports from one file's text."""
    structure = Structure()

    for match in COMPONENT_RE.finditer(content):
        name = match.group(1)
        structure.components.append(
            ComponentRecord(name=name, file=file, role=detect_role(name, content))
        )

    for match in HOOK_RE.finditer(content):
        structure.hooks.append(HookRecord(name=match.group(0), file=file))

    for module, statement in iter_imports(content):
        structure.imports.append(ImportRecord(module=module, file=file, statement=statement))

    return structure


def iter_sources(
    root: str | Path,
    extensions: Iterable[str] = SOURCE_EXTENSIONS,
) -> Iterator[tuple[Path, str, str]]:
    """Yield (path, relative path, text) for each readable source file."""
    root = Path(root)
    extensions = tuple(extensions)
    for path in walk(root):
        if not is_source_file(path, extensions):
            continue
        content = read_source(path)
        if content is None:
            continue
        yield path, relative_path(path, root), content


def extract(
    root: str | Path,
    extensions: Iterable[str] = SOURCE_EXTENSIONS,
) -> Structure:
    """Scan every source file under root."""
    structure = Structure()
    for _, rel, content in iter_sources(root, extensions):
        structure.extend(extract_text(content, rel))
    return structure
