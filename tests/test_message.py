"""Tests for commit message parsing."""
from __future__ import annotations

import pytest

from atomicgit.message import (
    SCISSORS_LINE,
    content_lines,
    parse_body,
    parse_header,
    read_message_file,
    strip_comments,
)

GIT_TEMPLATE = (
    "docs: update readme\n"
    "\n"
    "1. file: README.md\n"
    "# Please enter the commit message for your changes. Lines starting\n"
    "# with '#' will be ignored, and an empty message aborts the commit.\n"
    "2. change: add install section\n"
)


class TestStripComments:
    def test_removes_hash_lines(self) -> None:
        text = strip_comments(GIT_TEMPLATE)
        assert "#" not in text
        assert "1. file: README.md" in text

    def test_removes_indented_comment_lines(self) -> None:
        assert strip_comments("subject\n   # note\nbody") == "subject\nbody"

    def test_keeps_hash_inside_line(self) -> None:
        assert strip_comments("fix issue #12") == "fix issue #12"

    def test_drops_everything_after_scissors(self) -> None:
        text = f"subject\nbody\n{SCISSORS_LINE}\ndiff --git a/x b/x\n+added line\n"
        assert strip_comments(text) == "subject\nbody"


class TestParseBody:
    def test_drops_header_and_blank_lines(self) -> None:
        assert parse_body(GIT_TEMPLATE) == ["1. file: README.md", "2. change: add install section"]

    def test_crlf_line_endings(self) -> None:
        assert parse_body("subject\r\n\r\n  a  \r\nb\r\n") == ["a", "b"]

    @pytest.mark.parametrize("text", ["", "\n\n", "# only a comment\n", "just a subject\n"])
    def test_short_input_yields_empty_body(self, text: str) -> None:
        assert parse_body(text) == []

    def test_order_is_preserved(self) -> None:
        assert parse_body("h\nc\nb\na") == ["c", "b", "a"]


class TestHeader:
    def test_header_is_first_content_line(self) -> None:
        assert parse_header("\n# comment\n  specs: add thing  \nbody") == "specs: add thing"

    def test_empty_message_has_empty_header(self) -> None:
        assert parse_header("") == ""

    def test_content_lines_trims(self) -> None:
        assert content_lines("  a \n\n b") == ["a", "b"]


class TestReadMessageFile:
    def test_reads_file(self, tmp_path) -> None:
        path = tmp_path / "COMMIT_EDITMSG"
        path.write_text("subject\n", encoding="utf-8")
        assert read_message_file(path) == "subject\n"

    def test_missing_file_raises_oserror(self, tmp_path) -> None:
        with pytest.raises(OSError):
            read_message_file(tmp_path / "missing")
