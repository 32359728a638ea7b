"""
Tests for the unified diff scanner.
"""

import pytest

from diffcover.core.errors import InputReadError
from diffcover.io.diff import DiffScanState, parse_diff, parse_diff_lines


class TestDiffScanState:
    """Transitions of the scan state machine."""

    def test_file_header_sets_current_file(self):
        state = DiffScanState()

        state.feed("+++ b/pkg/foo.go")

        assert state.current_file == "pkg/foo.go"
        assert state.changed == {"pkg/foo.go": set()}

    def test_file_header_keeps_cursor(self):
        state = DiffScanState(current_file="a.go", new_line=7, changed={"a.go": set()})

        state.feed("+++ b/b.go")

        assert state.new_line == 7
        assert state.current_file == "b.go"

    def test_repeated_header_keeps_recorded_lines(self):
        state = DiffScanState(current_file="a.go", new_line=3, changed={"a.go": {1, 2}})

        state.feed("+++ b/a.go")

        assert state.changed == {"a.go": {1, 2}}

    def test_hunk_header_sets_cursor(self):
        state = DiffScanState()

        state.feed("@@ -1,3 +10,3 @@")

        assert state.new_line == 10

    def test_hunk_header_without_counts(self):
        state = DiffScanState()

        state.feed("@@ -1 +5 @@")

        assert state.new_line == 5

    def test_hunk_header_with_section_heading(self):
        state = DiffScanState()

        state.feed("@@ -3,5 +42,7 @@ func main() {")

        assert state.new_line == 42

    def test_added_line_recorded(self):
        state = DiffScanState(current_file="a.go", new_line=4, changed={"a.go": set()})

        state.feed("+x := 1")

        assert state.changed["a.go"] == {4}
        assert state.new_line == 5

    def test_added_line_without_file_ignored(self):
        state = DiffScanState(new_line=4)

        state.feed("+x := 1")

        assert state.changed == {}
        assert state.new_line == 5

    def test_removed_line_keeps_cursor(self):
        state = DiffScanState(current_file="a.go", new_line=4, changed={"a.go": set()})

        state.feed("-x := 1")

        assert state.new_line == 4
        assert state.changed["a.go"] == set()

    def test_context_line_advances_cursor(self):
        state = DiffScanState(current_file="a.go", new_line=4, changed={"a.go": set()})

        state.feed(" x := 1")

        assert state.new_line == 5

    def test_malformed_hunk_header_advances_cursor(self):
        state = DiffScanState(current_file="a.go", new_line=4, changed={"a.go": set()})

        state.feed("@@ not a hunk @@")

        assert state.new_line == 5

    def test_dev_null_is_not_a_file_header(self):
        state = DiffScanState(current_file="a.go", new_line=4, changed={"a.go": set()})

        state.feed("+++ /dev/null")

        assert state.current_file == "a.go"
        assert state.changed == {"a.go": set()}


def test_hunk_line_numbering():
    changed = parse_diff_lines([
        "+++ b/foo.go",
        "@@ -1,3 +10,3 @@",
        " context",
        "+added",
        "-removed",
        " context",
    ])

    assert changed == {"foo.go": {11}}


def test_lines_before_first_header_are_inert():
    changed = parse_diff_lines([
        "+stray addition",
        " stray context",
        "+++ b/a.go",
    ])

    assert changed == {"a.go": set()}


def test_line_terminators_stripped():
    changed = parse_diff_lines([
        "+++ b/a.go\r\n",
        "@@ -1,1 +1,2 @@\r\n",
        " keep\r\n",
        "+new\r\n",
    ])

    assert changed == {"a.go": {2}}


def test_parse_diff_file(sample_diff):
    changed = parse_diff(sample_diff)

    assert changed == {
        "pkg/calc.go": {6, 7, 9},
        "pkg/util.go": {11},
        "docs/README.md": set(),
    }


def test_parse_diff_missing_file(temp_dir):
    with pytest.raises(InputReadError):
        parse_diff(temp_dir / "missing.diff")


def test_removed_line_starting_with_dashes():
    changed = parse_diff_lines([
        "+++ b/query.sql",
        "@@ -1,3 +1,3 @@",
        " a",
        "--- old comment",
        "+-- new comment",
        " c",
    ])

    assert changed == {"query.sql": {2}}


def test_added_line_starting_with_pluses():
    changed = parse_diff_lines([
        "+++ b/counter.c",
        "@@ -1,1 +1,2 @@",
        " int i = 0;",
        "+++i;",
    ])

    assert changed == {"counter.c": {2}}


def test_file_headers_recognized_after_hunk_ends():
    changed = parse_diff_lines([
        "--- a/a.lua",
        "+++ b/a.lua",
        "@@ -1,2 +1,2 @@",
        "--- gone",
        "+-- here",
        " end",
        "--- a/b.lua",
        "+++ b/b.lua",
        "@@ -4,0 +5,1 @@",
        "+x = 1",
    ])

    assert changed == {"a.lua": {1}, "b.lua": {5}}


def test_no_newline_marker_inside_hunk_keeps_cursor():
    changed = parse_diff_lines([
        "+++ b/a.go",
        "@@ -1,1 +1,1 @@",
        "-old",
        "\\ No newline at end of file",
        "+new",
        "\\ No newline at end of file",
    ])

    assert changed == {"a.go": {1}}


def test_hunk_header_sets_remaining_counts():
    state = DiffScanState()

    state.feed("@@ -3 +7,4 @@")

    assert (state.old_remaining, state.new_remaining) == (1, 4)
    assert state.in_hunk
