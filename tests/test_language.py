"""Tests for language classification."""

import pytest

from project_guard.language import (
    LANGUAGE_PROFILES,
    UNKNOWN_PROFILE,
    classify,
    profile_for,
)


class TestMarkerFiles:
    def test_package_json_with_typescript_dependency(self, make_tree):
        root = make_tree({"package.json": '{"dependencies": {"typescript": "^5.0.0"}}'})
        assert classify(root).name == "typescript"

    def test_package_json_with_typescript_dev_dependency(self, make_tree):
        root = make_tree({"package.json": '{"devDependencies": {"typescript": "^5"}}'})
        assert classify(root).name == "typescript"

    def test_tsconfig_selects_typescript(self, make_tree):
        root = make_tree({"package.json": '{"name": "x"}', "tsconfig.json": "{}"})
        assert classify(root).name == "typescript"

    def test_plain_package_json_is_javascript(self, make_tree):
        root = make_tree({"package.json": '{"dependencies": {"react": "^18"}}'})
        assert classify(root).name == "javascript"

    def test_package_json_beats_other_markers(self, make_tree):
        root = make_tree({
            "package.json": "{}",
            "Cargo.toml": '[package]\nname = "x"\n',
            "pyproject.toml": "",
        })
        assert classify(root).name == "javascript"

    def test_malformed_package_json_is_unknown(self, make_tree):
        root = make_tree({"package.json": "{not json", "Cargo.toml": ""})
        assert classify(root) == UNKNOWN_PROFILE

    @pytest.mark.parametrize(
        "marker,language",
        [
            ("requirements.txt", "python"),
            ("pyproject.toml", "python"),
            ("setup.py", "python"),
            ("poetry.lock", "python"),
            ("pom.xml", "java"),
            ("build.gradle", "java"),
            ("App.csproj", "csharp"),
            ("Solution.sln", "csharp"),
            ("go.mod", "go"),
            ("Cargo.toml", "rust"),
            ("composer.json", "php"),
        ],
    )
    def test_marker_maps_to_language(self, make_tree, marker, language):
        root = make_tree({marker: ""})
        assert classify(root).name == language

    def test_fallback_order(self, make_tree):
        # python markers are checked before go.mod
        root = make_tree({"go.mod": "module x\n", "requirements.txt": "flask\n"})
        assert classify(root).name == "python"


class TestExtensionVoting:
    def test_most_frequent_extension_wins(self, make_tree):
        files = {f"cmd/tool{i}.go": "package main\n" for i in range(7)}
        files.update({"a.rs": "", "b.rs": ""})
        root = make_tree(files)
        assert classify(root).name == "go"

    def test_tie_goes_to_first_seen(self, make_tree):
        root = make_tree({"a.rs": "", "b.go": ""})
        assert classify(root).name == "rust"

    def test_unmapped_extension_is_unknown(self, make_tree):
        root = make_tree({"a.md": "", "b.md": "", "c.py": ""})
        assert classify(root).name == "unknown"

    def test_excluded_dirs_do_not_vote(self, make_tree):
        root = make_tree({
            "node_modules/a.js": "",
            "node_modules/b.js": "",
            "src/main.py": "",
        })
        assert classify(root).name == "python"

    def test_only_excluded_dirs(self, make_tree):
        root = make_tree({"node_modules/a.js": "", ".git/HEAD": "", "dist/x.ts": ""})
        assert classify(root) == UNKNOWN_PROFILE

    def test_empty_root(self, tmp_path):
        assert classify(tmp_path) == UNKNOWN_PROFILE


class TestProfiles:
    def test_nonexistent_root_is_unknown(self, tmp_path):
        assert classify(tmp_path / "missing") == UNKNOWN_PROFILE

    def test_idempotent(self, make_tree):
        root = make_tree({"package.json": '{"devDependencies": {"typescript": "5"}}'})
        assert classify(root) == classify(root)
        assert classify(root).to_dict() == classify(root).to_dict()

    def test_unknown_profile(self):
        assert UNKNOWN_PROFILE.layers == ("domain", "application", "infrastructure")
        assert UNKNOWN_PROFILE.folder_pattern == ("src", "test", "tests")
        assert UNKNOWN_PROFILE.file_extensions == (".*",)
        assert UNKNOWN_PROFILE.config_files == ()

    @pytest.mark.parametrize(
        "language,layers,folders",
        [
            ("javascript", ("domain", "application", "infrastructure"), ("src", "test", "tests", "lib")),
            ("typescript", ("domain", "application", "infrastructure"), ("src", "test", "tests", "dist", "build")),
            ("python", ("domain", "application", "infrastructure", "adapters"), ("src", "tests", "app", "core")),
            ("java", ("domain", "application", "infrastructure", "presentation"), ("src/main/java", "src/test/java", "target")),
            ("csharp", ("Domain", "Application", "Infrastructure", "Presentation"), ("src", "tests", "bin", "obj")),
            ("go", ("domain", "application", "infrastructure", "interfaces"), ("cmd", "internal", "pkg", "test")),
            ("rust", ("domain", "application", "infrastructure", "adapters"), ("src", "tests", "target")),
            ("php", ("Domain", "Application", "Infrastructure", "Presentation"), ("src", "tests", "vendor")),
        ],
    )
    def test_profile_table(self, language, layers, folders):
        profile = LANGUAGE_PROFILES[language]
        assert profile.name == language
        assert profile.layers == layers
        assert profile.folder_pattern == folders

    def test_profile_for_unmapped(self):
        assert profile_for("cobol") is UNKNOWN_PROFILE

    def test_profile_is_frozen(self):
        with pytest.raises(AttributeError):
            LANGUAGE_PROFILES["go"].name = "rust"
