"""Tests for cnote.scanner."""

from __future__ import annotations

from pathlib import Path

from cnote.scanner import ExclusionMatcher, SourceScanner, is_source_file
from tests._fixtures.source_tree import SourceTreeBuilder


def test_is_source_file_is_exact_and_case_sensitive() -> None:
    assert is_source_file("list.c")
    assert is_source_file("list.h")
    assert not is_source_file("list.C")
    assert not is_source_file("list.cpp")
    assert not is_source_file("list.hpp")
    assert not is_source_file("list.c.orig")


def test_exclusion_matcher_substring_and_glob() -> None:
    matcher = ExclusionMatcher(["third_party", "*.gen.h", "  "])

    assert len(matcher.rules) == 2
    assert matcher.matches("src/third_party/zlib/inflate.c")
    assert matcher.matches("include/proto.gen.h")
    assert not matcher.matches("src/core/list.c")


def test_exclusion_matcher_directory_pattern() -> None:
    matcher = ExclusionMatcher(["build/"])
    assert matcher.matches("out/build", is_dir=True)
    assert matcher.matches("out/build/gen.c")
    assert not matcher.matches("out/builder.c")


def test_collect_walks_directories_in_sorted_order(source_tree: SourceTreeBuilder) -> None:
    source_tree.write(
        {
            "src/b.c": "int b;\n",
            "src/a.c": "int a;\n",
            "src/nested/z.h": "int z;\n",
            "include/api.h": "int api;\n",
            "README.md": "# readme\n",
            "src/notes.txt": "text\n",
            "src/impl.cpp": "int cpp;\n",
        }
    )

    result = SourceScanner().collect([source_tree.path()])

    assert [source.relative for source in result.files] == [
        "include/api.h",
        "src/a.c",
        "src/b.c",
        "src/nested/z.h",
    ]
    assert result.errors == []


def test_collect_accepts_files_and_preserves_target_order(source_tree: SourceTreeBuilder) -> None:
    source_tree.write({"b.c": "int b;\n", "a.h": "int a;\n", "c.txt": "nope\n"})
    root = source_tree.path()

    result = SourceScanner().collect([root / "b.c", root / "a.h", root / "c.txt"])

    assert [source.path for source in result.files] == [root / "b.c", root / "a.h"]


def test_collect_skips_excluded_paths(source_tree: SourceTreeBuilder) -> None:
    source_tree.write(
        {
            "src/main.c": "int main;\n",
            "vendor/lib.c": "int lib;\n",
            "src/gen/auto.c": "int gen;\n",
        }
    )
    scanner = SourceScanner(ExclusionMatcher(["vendor", "gen/"]))

    result = scanner.collect([source_tree.path()])

    assert [source.relative for source in result.files] == ["src/main.c"]


def test_collect_reports_missing_targets(tmp_path: Path) -> None:
    missing = tmp_path / "missing"
    result = SourceScanner().collect([missing])

    assert result.files == []
    assert len(result.errors) == 1
    path, message = result.errors[0]
    assert path == str(missing)
    assert "Could not stat" in message
