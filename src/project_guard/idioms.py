"""Idiom detection: recurring coding patterns flagged by substring presence."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any


@dataclass
class IdiomRecord:
    kind: str
    label: str
    file: str
    example: str | None = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"type": self.kind, "pattern": self.label, "file": self.file}
        if self.example is not None:
            d["example"] = self.example
        return d


@dataclass(frozen=True)
class IdiomRule:
    """One independent check.

    Fires when any ``any_of`` needle and every ``all_of`` needle occurs in
    the raw text (case-sensitive). Rules with no ``categories`` run in
    project-wide analysis; the rest only run when searching one of their
    categories.
    """

    kind: str
    label: str
    any_of: tuple[str, ...]
    all_of: tuple[str, ...] = ()
    example: re.Pattern | None = None
    categories: frozenset[str] = frozenset()

    def matches(self, content: str) -> bool:
        if self.any_of and not any(n in content for n in self.any_of):
            return False
        return all(n in content for n in self.all_of)

    def example_from(self, content: str) -> str | None:
        if self.example is None:
            return None
        match = self.example.search(content)
        return match.group(0) if match else None


PROJECT_RULES: tuple[IdiomRule, ...] = (
    IdiomRule(
        "state-management", "React State",
        any_of=("useState", "setState"),
        example=re.compile(r"const\s+\[[^\]]+\]\s*=\s*useState[^;]+;?"),
    ),
    IdiomRule(
        "api-call", "API Integration",
        any_of=("fetch", "axios", "api"),
        example=re.compile(r"(fetch|axios)\([^)]+\)"),
    ),
    IdiomRule("styling", "Component Styling", any_of=("styled", "className", "css")),
    IdiomRule("validation", "Form Validation", any_of=("validate", "schema", "yup", "joi")),
)

_MODAL = frozenset({"modal"})
_FORM = frozenset({"form"})
_REMOTE = frozenset({"api", "service"})

CATEGORY_RULES: tuple[IdiomRule, ...] = (
    IdiomRule("portal", "React Portal usage detected", any_of=("createPortal",), categories=_MODAL),
    IdiomRule(
        "keyboard", "Escape key handling detected",
        any_of=(), all_of=("useEffect", "escape"), categories=_MODAL,
    ),
    IdiomRule(
        "backdrop", "Backdrop/overlay pattern detected",
        any_of=("backdrop", "overlay"), categories=_MODAL,
    ),
    IdiomRule(
        "form-library", "React Hook Form detected",
        any_of=("useForm", "react-hook-form"), categories=_FORM,
    ),
    IdiomRule(
        "validation", "Schema validation detected",
        any_of=("yup", "joi", "zod"), categories=_FORM,
    ),
    IdiomRule("http-client", "Axios HTTP client detected", any_of=("axios",), categories=_REMOTE),
    IdiomRule("fetch-api", "Fetch API detected", any_of=("fetch",), categories=_REMOTE),
)


def rules_for(category: str | None = None) -> tuple[IdiomRule, ...]:
    if category is None:
        return PROJECT_RULES
    category = category.lower()
    return tuple(r for r in CATEGORY_RULES if category in r.categories)


def detect_idioms(content: str, file: str, category: str | None = None) -> list[IdiomRecord]:
    """Run every applicable rule against one file's text."""
    return [
        IdiomRecord(kind=rule.kind, label=rule.label, file=file, example=rule.example_from(content))
        for rule in rules_for(category)
        if rule.matches(content)
    ]
