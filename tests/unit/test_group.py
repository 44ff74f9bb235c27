"""Tests for exclude groups."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from gitexclude.core.errors import (
    MalformedPattern, PathResolutionError, SourceUnavailable,
)
from gitexclude.core.group import ExcludeGroup, Verdict


def group_of(base, *lines, **kwargs):
    return ExcludeGroup.from_lines('.gitignore', base, [line.encode() for line in lines], **kwargs)


class TestExcludeGroupMatch:
    """Tests for group verdicts."""

    def test_negation_overrides(self, tmp_path):
        """Negation patterns should un-ignore files."""
        group = group_of(tmp_path, "*.log", "!keep.log")
        assert group.match(tmp_path / "app.log")
        assert not group.match(tmp_path / "keep.log")

    def test_relative_paths_resolve_against_base(self, tmp_path):
        group = group_of(tmp_path, "*.log", "!keep.log")
        assert group.match("app.log")
        assert group.match("logs/app.log")
        assert not group.match("keep.log")

    def test_last_pattern_wins(self, tmp_path):
        """The last matching pattern should win."""
        group = group_of(tmp_path, "*.log", "!*.log", "error.log")
        assert group.match("error.log")
        assert not group.match("test.log")

    def test_first_match_precedence(self, tmp_path):
        """With 'first' precedence the earliest matching line decides."""
        group = group_of(tmp_path, "*.log", "!keep.log", precedence='first')
        assert group.match("keep.log")

    def test_unknown_precedence(self, tmp_path):
        with pytest.raises(ValueError):
            ExcludeGroup('.gitignore', tmp_path, precedence='middle')

    def test_verdicts(self, tmp_path):
        group = group_of(tmp_path, "*.log", "!keep.log")
        assert group.verdict("app.log") == Verdict.EXCLUDED
        assert group.verdict("keep.log") == Verdict.INCLUDED
        assert group.verdict("main.py") == Verdict.NO_OPINION

    def test_empty_group(self, tmp_path):
        """Absence of a rule never excludes."""
        group = ExcludeGroup('.gitignore', tmp_path)
        assert not group.match("anything.txt")
        assert group.verdict("anything.txt") == Verdict.NO_OPINION

    def test_base_itself_has_no_verdict(self, tmp_path):
        group = group_of(tmp_path, "*")
        assert group.verdict(tmp_path, is_dir=True) == Verdict.NO_OPINION

    def test_directory_pattern_excludes_contents(self, tmp_path):
        group = group_of(tmp_path, "build/")
        assert group.match("build", is_dir=True)
        assert not group.match("build")
        assert group.match("build/out.o")
        assert group.match("build/sub/out.o")

    def test_directory_pattern_with_separator_is_anchored(self, tmp_path):
        """build/ contains a separator, so it only applies at the base."""
        group = group_of(tmp_path, "build/")
        assert not group.match("src/build/out.o")
        group = group_of(tmp_path, "**/build/")
        assert group.match("src/build/out.o")

    def test_basename_pattern_excludes_nested_directory(self, tmp_path):
        group = group_of(tmp_path, "node_modules")
        assert group.match("web/node_modules/react/index.js")

    def test_cannot_reinclude_inside_excluded_directory(self, tmp_path):
        group = group_of(tmp_path, "build/", "!build/keep.txt")
        assert group.match("build/keep.txt")

    def test_reinclude_directory_itself(self, tmp_path):
        group = group_of(tmp_path, "logs/", "!logs/")
        assert not group.match("logs", is_dir=True)
        assert not group.match("logs/today.txt")

    def test_find_match_returns_deciding_pattern(self, tmp_path):
        group = group_of(tmp_path, "*.log", "!keep.log")
        pattern = group.find_match("keep.log")
        assert pattern.original == "!keep.log"
        assert pattern.line_number == 2
        assert group.find_match("main.py") is None


class TestPathResolution:
    """Tests for resolving candidates against the base."""

    def test_outside_base(self, tmp_path):
        base = tmp_path / "repo"
        base.mkdir()
        group = group_of(base, "*")
        with pytest.raises(PathResolutionError) as exc_info:
            group.match(tmp_path / "other" / "file.txt")
        assert exc_info.value.base_path == group.base_path

    def test_relative_escape(self, tmp_path):
        group = group_of(tmp_path, "*")
        with pytest.raises(PathResolutionError):
            group.match("../elsewhere.txt")

    def test_group_usable_after_resolution_error(self, tmp_path):
        group = group_of(tmp_path, "*.log")
        with pytest.raises(PathResolutionError):
            group.match("../x.log")
        assert group.match("x.log")

    def test_base_path_is_cleaned(self, tmp_path):
        group = group_of(str(tmp_path) + "/sub/..", "*.log")
        assert group.base_path == str(tmp_path)


class TestLoading:
    """Tests for building groups from files and streams."""

    def test_from_file(self, tmp_path):
        (tmp_path / ".gitignore").write_bytes(b"# Comment\n*.log\n\n*.tmp\n__pycache__/\n")
        group = ExcludeGroup.from_file(tmp_path, ".gitignore")
        assert group.source == ".gitignore"
        assert len(group) == 3
        assert [p.original for p in group] == ["*.log", "*.tmp", "__pycache__/"]
        assert [p.line_number for p in group] == [2, 4, 5]

    def test_from_file_missing(self, tmp_path):
        with pytest.raises(SourceUnavailable) as exc_info:
            ExcludeGroup.from_file(tmp_path / "unknownpath", ".gitignore")
        assert exc_info.value.source == ".gitignore"

    def test_from_file_directory(self, tmp_path):
        (tmp_path / ".gitignore").mkdir()
        with pytest.raises(SourceUnavailable):
            ExcludeGroup.from_file(tmp_path, ".gitignore")

    def test_malformed_lines_skipped(self, tmp_path):
        group = group_of(tmp_path, "*.log", "a[b", "out/")
        assert len(group) == 2
        assert len(group.errors) == 1
        assert group.errors[0].line_number == 2

    def test_unmatchable_lines_skipped_at_load(self, tmp_path):
        """Lines the matcher cannot evaluate never reach a query."""
        group = ExcludeGroup.from_lines('.gitignore', tmp_path, [b"foo\\\n", b"x[]\n", b"*.log\n"])
        assert len(group) == 1
        assert [e.line_number for e in group.errors] == [1, 2]
        assert not group.match("main.py")
        assert group.match("app.log")

    def test_malformed_lines_abort(self, tmp_path):
        (tmp_path / ".gitignore").write_text("*.log\na[b\n")
        with pytest.raises(MalformedPattern):
            ExcludeGroup.from_file(tmp_path, ".gitignore", on_malformed='abort')

    def test_patterns_are_a_tuple(self, tmp_path):
        group = group_of(tmp_path, "*.log")
        assert isinstance(group.patterns, tuple)

    def test_to_dicts(self, tmp_path):
        group = group_of(tmp_path, "/build/")
        assert group.to_dicts()[0]['formatted-pattern'] == "build"


def test_concurrent_queries(tmp_path):
    """A group can be shared by many threads."""
    group = group_of(tmp_path, "*.log", "!keep.log", "build/", "**/cache/**")
    paths = ["app.log", "keep.log", "build/x", "src/main.py", "a/cache/b/c"] * 200
    expected = [group.match(p) for p in paths]

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(group.match, paths))

    assert results == expected
    assert expected[:5] == [True, False, True, False, True]
