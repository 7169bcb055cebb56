"""Commit message parsing.

Git hands the commit-msg hook the raw message file, including the
``#``-prefixed help text it appends. Everything here works on that raw
text and never raises for malformed input: a short or empty message just
yields a short or empty body, which the rules reject with a reason.
"""
from __future__ import annotations

import re
from pathlib import Path

_COMMENT_RE = re.compile(r"^\s*#")

# git commit --verbose appends the diff below this line.
SCISSORS_LINE = "# ------------------------ >8 ------------------------"


def split_lines(text: str) -> list[str]:
    """Split on ``\\n`` or ``\\r\\n`` line endings."""
    return text.replace("\r\n", "\n").replace("\r", "\n").split("\n")


def strip_comments(text: str) -> str:
    """Return *text* without comment lines and without the scissors section."""
    kept: list[str] = []
    for line in split_lines(text):
        if line.rstrip() == SCISSORS_LINE:
            break
        if _COMMENT_RE.match(line):
            continue
        kept.append(line)
    return "\n".join(kept)


def content_lines(text: str) -> list[str]:
    """Trimmed, non-empty, non-comment lines of a raw message."""
    lines = (line.strip() for line in split_lines(strip_comments(text)))
    return [line for line in lines if line]


def parse_header(text: str) -> str:
    lines = content_lines(text)
    return lines[0] if lines else ""


def parse_body(text: str) -> list[str]:
    """Return the candidate body: every content line after the header."""
    lines = content_lines(text)
    if len(lines) < 2:
        return []
    return lines[1:]


def read_message_file(path: str | Path) -> str:
    """Read a commit message file. Raises OSError if it can't be read."""
    return Path(path).read_text(encoding="utf-8", errors="replace")
