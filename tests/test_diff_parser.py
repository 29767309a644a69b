"""Tests for the hunk stream parser."""

import pytest

from patchwise.diff.models import HunkHeader, LineKind
from patchwise.diff.parser import classify, hunk_headers, parse_hunk_header, target_path
from patchwise.errors import MalformedHunkHeader, MissingHunkHeader


class TestClassification:
    def test_line_kinds_in_order(self, sample_diff_replace):
        kinds = [item.kind for item in classify(sample_diff_replace)]
        assert kinds == [
            LineKind.FILE_HEADER,
            LineKind.FILE_HEADER,
            LineKind.HUNK_HEADER,
            LineKind.CONTEXT,
            LineKind.DELETION,
            LineKind.ADDITION,
            LineKind.CONTEXT,
        ]

    def test_markers_stripped(self, sample_diff_replace):
        items = list(classify(sample_diff_replace))
        assert items[3].text == "def main():"
        assert items[4].text == '    print("hello")'
        assert items[5].text == '    print("goodbye")'
        assert items[6].text == "    return 0"

    def test_line_numbers_are_diff_positions(self, sample_diff_replace):
        items = list(classify(sample_diff_replace))
        assert [i.line_no for i in items] == list(range(1, 8))

    def test_empty_diff_yields_nothing(self):
        assert list(classify("")) == []

    def test_trailing_newline_not_a_line(self):
        items = list(classify("@@ -1 +1 @@\n-a\n+b\n"))
        assert len(items) == 3

    def test_blank_line_is_empty_context(self):
        items = list(classify("@@ -1,3 +1,3 @@\n a\n\n c\n"))
        assert items[2].kind == LineKind.CONTEXT
        assert items[2].text == ""

    def test_context_without_leading_space_is_verbatim(self):
        items = list(classify("@@ -1,2 +1,2 @@\nplain\n-x\n"))
        assert items[1].kind == LineKind.CONTEXT
        assert items[1].text == "plain"

    def test_double_dash_content_is_deletion(self):
        """'-- comment' is a deleted '- comment', not a file header."""
        items = list(classify("@@ -1 +1 @@\n-- comment\n++ item\n"))
        assert items[1].kind == LineKind.DELETION
        assert items[1].text == "- comment"
        assert items[2].kind == LineKind.ADDITION
        assert items[2].text == "+ item"

    def test_crlf_stripped(self):
        items = list(classify("@@ -1 +1 @@\r\n-a\r\n+b\r\n"))
        assert items[1].text == "a"
        assert items[2].text == "b"

    def test_no_newline_marker_is_noise(self):
        items = list(classify("@@ -1 +1 @@\n-a\n+b\n\\ No newline at end of file\n"))
        assert items[-1].kind == LineKind.FILE_HEADER

    def test_git_headers_before_first_hunk(self):
        diff = (
            "diff --git a/f.py b/f.py\n"
            "index abc1234..def5678 100644\n"
            "--- a/f.py\n"
            "+++ b/f.py\n"
            "@@ -1 +1 @@\n"
            "-a\n"
            "+b\n"
        )
        kinds = [i.kind for i in classify(diff)]
        assert kinds[:4] == [LineKind.FILE_HEADER] * 4
        assert kinds[4] == LineKind.HUNK_HEADER

    def test_git_like_line_inside_hunk_is_context(self):
        items = list(classify("@@ -1,2 +1,2 @@\nindex 1a..2b\n-old\n+new\n"))
        assert items[1].kind == LineKind.CONTEXT
        assert items[1].text == "index 1a..2b"

    def test_git_headers_between_files(self):
        diff = (
            "@@ -1 +1 @@\n"
            "-a\n"
            "+b\n"
            "diff --git a/g.py b/g.py\n"
            "similarity index 90%\n"
            "rename from g.py\n"
            "@@ -1 +1 @@\n"
            "-c\n"
            "+d\n"
        )
        kinds = [i.kind for i in classify(diff)]
        assert kinds[3:6] == [LineKind.FILE_HEADER] * 3


class TestHunkHeaders:
    def test_full_header(self):
        h = parse_hunk_header("@@ -15,7 +16,8 @@")
        assert h == HunkHeader(old_start=15, old_count=7, new_start=16, new_count=8)

    def test_missing_counts_default_to_one(self):
        h = parse_hunk_header("@@ -3 +4 @@")
        assert h.old_count == 1
        assert h.new_count == 1

    def test_section_text_kept(self):
        h = parse_hunk_header("@@ -1,2 +1,3 @@ def main():")
        assert h.section == "def main():"

    def test_anchor_is_zero_indexed_start(self):
        assert parse_hunk_header("@@ -5,2 +5,2 @@").anchor == 4

    def test_insertion_hunk_anchors_after_start(self):
        assert parse_hunk_header("@@ -3,0 +4,2 @@").anchor == 3

    def test_empty_original_accepted(self):
        h = parse_hunk_header("@@ -0,0 +1,2 @@")
        assert h.anchor == 0

    @pytest.mark.parametrize("line", [
        "@@ -a +b @@",
        "@@ -1,2 +1,2",
        "@@@ -1 +1 @@@",
        "@@ -0,3 +1,3 @@",
    ])
    def test_malformed(self, line):
        with pytest.raises(MalformedHunkHeader):
            parse_hunk_header(line)

    def test_malformed_reports_diff_line(self):
        with pytest.raises(MalformedHunkHeader) as exc_info:
            list(classify("--- a/x\n+++ b/x\n@@ broken @@\n-a\n"))
        assert exc_info.value.line_no == 3
        assert exc_info.value.text == "@@ broken @@"

    def test_hunk_headers_helper(self, sample_diff_two_hunks):
        starts = [h.old_start for h in hunk_headers(sample_diff_two_hunks)]
        assert starts == [2, 8]


class TestMissingHeader:
    def test_content_before_header(self):
        with pytest.raises(MissingHunkHeader) as exc_info:
            list(classify("-old\n+new\n"))
        assert exc_info.value.line_no == 1

    def test_file_headers_alone_are_fine(self):
        items = list(classify("--- a/x\n+++ b/x\n"))
        assert all(i.kind == LineKind.FILE_HEADER for i in items)


class TestTargetPath:
    def test_from_new_file_header(self, sample_diff_replace):
        assert target_path(sample_diff_replace) == "app.py"

    def test_nested_path(self):
        diff = "--- a/lib/main.dart\n+++ b/lib/main.dart\n@@ -1 +1 @@\n-a\n+b\n"
        assert target_path(diff) == "lib/main.dart"

    def test_dev_null_falls_back_to_old(self):
        diff = "--- a/gone.py\n+++ /dev/null\n@@ -1 +0,0 @@\n-a\n"
        assert target_path(diff) == "gone.py"

    def test_no_headers(self, sample_diff_two_hunks):
        assert target_path(sample_diff_two_hunks) is None
