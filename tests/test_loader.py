"""Tests for building a SourceSet from files on disk."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from jdcov.parsing import Access, SourceModelError, discover_sources, load_source_set
from jdcov.stats import build_project_coverage

if TYPE_CHECKING:
    from pathlib import Path


def _write(root: Path, relative: str, content: str, encoding: str = "utf-8") -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding=encoding)
    return path


@pytest.fixture
def java_project(tmp_path: Path) -> Path:
    """Two packages, one with a package-info comment."""
    _write(
        tmp_path,
        "src/com/example/package-info.java",
        "/** Example package. */\npackage com.example;\n",
    )
    _write(
        tmp_path,
        "src/com/example/Widget.java",
        "package com.example;\n\n/** Widget. */\npublic class Widget {}\n",
    )
    _write(
        tmp_path,
        "src/com/other/Thing.java",
        "package com.other;\n\npublic class Thing {}\n",
    )
    _write(tmp_path, "src/README.md", "# not java\n")
    return tmp_path


class TestDiscoverSources:
    def test_finds_java_files_recursively(self, java_project: Path) -> None:
        found = discover_sources([java_project / "src"])
        assert sorted(path.name for path in found) == [
            "Thing.java",
            "Widget.java",
            "package-info.java",
        ]

    def test_deduplicates_overlapping_paths(self, java_project: Path) -> None:
        found = discover_sources(
            [java_project / "src", java_project / "src/com/example/Widget.java"]
        )
        assert len(found) == 3

    def test_exclude_patterns(self, java_project: Path) -> None:
        _write(java_project, "src/generated/Gen.java", "public class Gen {}\n")
        found = discover_sources([java_project / "src"], exclude_patterns=["generated/*"])
        assert "Gen.java" not in {path.name for path in found}

    def test_missing_path(self, tmp_path: Path) -> None:
        with pytest.raises(SourceModelError, match="does not exist"):
            discover_sources([tmp_path / "nope"])


class TestLoadSourceSet:
    def test_packages_shared_and_documented(self, java_project: Path) -> None:
        source_set = load_source_set([java_project / "src"])

        assert sorted(c.qualified_name for c in source_set.classes) == [
            "com.example.Widget",
            "com.other.Thing",
        ]
        assert source_set.packages["com.example"].comment == "Example package."
        assert source_set.packages["com.other"].comment is None
        widget = next(c for c in source_set.classes if c.name == "Widget")
        assert widget.package is source_set.packages["com.example"]
        assert len(source_set.files) == 3

    def test_package_comment_only_from_package_info(self, tmp_path: Path) -> None:
        _write(tmp_path, "A.java", "/** Not a package comment. */\npackage p;\npublic class A {}\n")
        source_set = load_source_set([tmp_path])
        assert source_set.packages["p"].comment is None

    def test_coverage_of_loaded_project(self, java_project: Path) -> None:
        project = build_project_coverage(load_source_set([java_project / "src"]))

        assert project.packages.total == 2
        assert project.packages.percent == 50.0
        assert project.classes.total == 2
        assert project.classes.documented == 1
        assert project.percent == 50.0

    def test_syntax_errors_are_fatal_by_default(self, tmp_path: Path) -> None:
        _write(tmp_path, "Broken.java", "public class Broken { void x( }\n")
        with pytest.raises(SourceModelError, match="Syntax errors"):
            load_source_set([tmp_path])

    def test_syntax_errors_tolerated_when_disabled(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        _write(tmp_path, "Broken.java", "public class Broken { void x( }\n")
        with caplog.at_level(logging.WARNING, logger="jdcov.parsing.loader"):
            source_set = load_source_set([tmp_path], fail_on_parse_errors=False)
        assert source_set.files
        assert "Syntax errors" in caplog.text

    def test_duplicate_types_skipped(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        _write(tmp_path, "a/Dup.java", "package p;\npublic class Dup {}\n")
        _write(tmp_path, "b/Dup.java", "package p;\n/** Copy. */\npublic class Dup {}\n")
        with caplog.at_level(logging.WARNING, logger="jdcov.parsing.loader"):
            source_set = load_source_set([tmp_path])
        assert len(source_set.classes) == 1
        assert source_set.classes[0].comment is None
        assert "Duplicate type p.Dup" in caplog.text

    def test_access_level_passed_to_extractor(self, tmp_path: Path) -> None:
        _write(tmp_path, "Hidden.java", "class Hidden {}\n")
        assert load_source_set([tmp_path]).classes == []
        assert len(load_source_set([tmp_path], access=Access.PACKAGE).classes) == 1

    def test_source_encoding(self, tmp_path: Path) -> None:
        _write(
            tmp_path,
            "Cafe.java",
            "/** Café crème. */\npublic class Cafe {}\n",
            encoding="latin-1",
        )
        source_set = load_source_set([tmp_path], encoding="latin-1")
        assert source_set.classes[0].comment == "Café crème."

    def test_undecodable_source(self, tmp_path: Path) -> None:
        (tmp_path / "Bad.java").write_bytes(b"public class Bad { /* \xff\xfe */ }\n")
        with pytest.raises(SourceModelError, match="Cannot decode"):
            load_source_set([tmp_path])

    def test_unknown_encoding(self, tmp_path: Path) -> None:
        _write(tmp_path, "A.java", "public class A {}\n")
        with pytest.raises(SourceModelError, match="Cannot decode"):
            load_source_set([tmp_path], encoding="no-such-codec")

    def test_empty_directory(self, tmp_path: Path) -> None:
        source_set = load_source_set([tmp_path])
        assert source_set.classes == []
        assert source_set.packages == {}
