"""Project language detection and per-language layout conventions."""

from __future__ import annotations

import json
import os
from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .logging import get_logger
from .walker import walk

logger = get_logger("language")

COMMON_LAYERS = ("domain", "application", "infrastructure")


@dataclass(frozen=True)
class LanguageProfile:
    """Layer, folder and config conventions for one language."""

    name: str
    layers: tuple[str, ...]
    folder_pattern: tuple[str, ...]
    file_extensions: tuple[str, ...]
    config_files: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "detectedLanguage": self.name,
            "layers": list(self.layers),
            "folderPattern": list(self.folder_pattern),
            "fileExtensions": list(self.file_extensions),
            "configFiles": list(self.config_files),
        }


LANGUAGE_PROFILES: dict[str, LanguageProfile] = {
    "javascript": LanguageProfile(
        name="javascript",
        layers=COMMON_LAYERS,
        folder_pattern=("src", "test", "tests", "lib"),
        file_extensions=(".js", ".mjs"),
        config_files=("package.json", ".eslintrc", "jest.config.js"),
    ),
    "typescript": LanguageProfile(
        name="typescript",
        layers=COMMON_LAYERS,
        folder_pattern=("src", "test", "tests", "dist", "build"),
        file_extensions=(".ts", ".tsx"),
        config_files=("package.json", "tsconfig.json", ".eslintrc", "jest.config.js"),
    ),
    "python": LanguageProfile(
        name="python",
        layers=("domain", "application", "infrastructure", "adapters"),
        folder_pattern=("src", "tests", "app", "core"),
        file_extensions=(".py",),
        config_files=("requirements.txt", "pyproject.toml", "setup.py", "poetry.lock"),
    ),
    "java": LanguageProfile(
        name="java",
        layers=("domain", "application", "infrastructure", "presentation"),
        folder_pattern=("src/main/java", "src/test/java", "target"),
        file_extensions=(".java",),
        config_files=("pom.xml", "build.gradle", "gradle.properties"),
    ),
    "csharp": LanguageProfile(
        name="csharp",
        layers=("Domain", "Application", "Infrastructure", "Presentation"),
        folder_pattern=("src", "tests", "bin", "obj"),
        file_extensions=(".cs",),
        config_files=(".csproj", ".sln", "appsettings.json"),
    ),
    "go": LanguageProfile(
        name="go",
        layers=("domain", "application", "infrastructure", "interfaces"),
        folder_pattern=("cmd", "internal", "pkg", "test"),
        file_extensions=(".go",),
        config_files=("go.mod", "go.sum"),
    ),
    "rust": LanguageProfile(
        name="rust",
        layers=("domain", "application", "infrastructure", "adapters"),
        folder_pattern=("src", "tests", "target"),
        file_extensions=(".rs",),
        config_files=("Cargo.toml", "Cargo.lock"),
    ),
    "php": LanguageProfile(
        name="php",
        layers=("Domain", "Application", "Infrastructure", "Presentation"),
        folder_pattern=("src", "tests", "vendor"),
        file_extensions=(".php",),
        config_files=("composer.json", "composer.lock", "phpunit.xml"),
    ),
}

UNKNOWN_PROFILE = LanguageProfile(
    name="unknown",
    layers=COMMON_LAYERS,
    folder_pattern=("src", "test", "tests"),
    file_extensions=(".*",),
    config_files=(),
)

# Checked in order after package.json; first hit wins.
MARKER_FILES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("python", ("requirements.txt", "pyproject.toml", "setup.py", "poetry.lock")),
    ("java", ("pom.xml", "build.gradle")),
    ("csharp", (".csproj", ".sln")),
    ("go", ("go.mod",)),
    ("rust", ("Cargo.toml",)),
    ("php", ("composer.json",)),
)

# Suffix markers match any filename ending with them (MyApp.csproj).
_SUFFIX_MARKERS = {".csproj", ".sln"}

EXT_LANG = {
    ".js": "javascript",
    ".mjs": "javascript",
    ".ts": "typescript",
    ".tsx": "typescript",
    ".py": "python",
    ".java": "java",
    ".cs": "csharp",
    ".go": "go",
    ".rs": "rust",
    ".php": "php",
}


def profile_for(language: str) -> LanguageProfile:
    return LANGUAGE_PROFILES.get(language, UNKNOWN_PROFILE)


def classify(root: str | Path) -> LanguageProfile:
    """Detect the dominant language of a project and return its profile.

    Never raises: filesystem errors and malformed manifests yield the
    ``unknown`` profile.
    """
    try:
        return profile_for(detect_language(Path(root)))
    except (OSError, ValueError) as e:
        logger.debug("Language detection failed for %s: %s", root, e)
        return UNKNOWN_PROFILE


def detect_language(root: Path) -> str:
    """Run the marker-file cascade, then extension voting."""
    files = set(os.listdir(root))

    if "package.json" in files:
        # json.JSONDecodeError is a ValueError and propagates to classify().
        pkg = json.loads((root / "package.json").read_text(encoding="utf-8"))
        if _declares_typescript(pkg) or "tsconfig.json" in files:
            return "typescript"
        return "javascript"

    for language, markers in MARKER_FILES:
        for marker in markers:
            if marker in _SUFFIX_MARKERS:
                if any(f.endswith(marker) for f in files):
                    return language
            elif marker in files:
                return language

    return _vote_by_extension(root)


def _declares_typescript(pkg: Any) -> bool:
    if not isinstance(pkg, dict):
        return False
    for key in ("devDependencies", "dependencies"):
        deps = pkg.get(key)
        if isinstance(deps, dict) and deps.get("typescript"):
            return True
    return False


def _vote_by_extension(root: Path) -> str:
    extensions: Counter = Counter()
    for path in walk(root):
        extensions[path.suffix.lower()] += 1

    if not extensions:
        return "unknown"

    # most_common() is stable, so ties go to the first extension seen.
    top_ext, _ = extensions.most_common(1)[0]
    return EXT_LANG.get(top_ext, "unknown")
