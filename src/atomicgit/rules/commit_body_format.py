"""Rule: the commit body must be five numbered lines describing the change.

Expected body, after the header line::

    1. file: <the staged path>
    2. change: ...
    3. reason: ...
    4. impact: ...
    5. verify: ...

Checks run in a fixed order and stop at the first failure: staged count,
message readable, line count, prefixes, file path, content.
"""
from __future__ import annotations

import re

from atomicgit.message import parse_body
from atomicgit.models import HookContext, HookName, Rule, ValidationResult
from atomicgit.rules.single_file_staged import check_single_file_staged

RULE_ID = "commit-body-format"

BODY_PREFIXES = ["1. file:", "2. change:", "3. reason:", "4. impact:", "5. verify:"]

_PREFIX_SHAPE_RE = re.compile(r"^\d+\.\s*\w+:")


def normalize_path(path: str) -> str:
    return path.strip().replace("\\", "/").casefold()


def _invalid(reason: str, message: str, body: list[str] | None = None) -> ValidationResult:
    details = [f"{i + 1}: {line}" for i, line in enumerate(body or [])]
    return ValidationResult.invalid(
        RULE_ID,
        reason=reason,
        message=message,
        details=details,
        suggestion="Body lines: " + " | ".join(f"{p} ..." for p in BODY_PREFIXES),
    )


def check_line_count(body: list[str]) -> ValidationResult:
    if len(body) == len(BODY_PREFIXES):
        return ValidationResult.valid()
    return _invalid(
        "line-count",
        f"Body must have exactly {len(BODY_PREFIXES)} lines, found {len(body)}",
        body,
    )


def check_prefixes(body: list[str]) -> ValidationResult:
    for number, (line, expected) in enumerate(zip(body, BODY_PREFIXES), start=1):
        match = _PREFIX_SHAPE_RE.match(line)
        found = match.group(0) if match else line
        if match is None or found.casefold() != expected.casefold():
            return _invalid(
                "prefix",
                f'Line {number} must start with "{expected}", found "{found}"',
            )
    return ValidationResult.valid()


def check_file_reference(body: list[str], staged_file: str) -> ValidationResult:
    """Line 1 must name the staged file, ignoring case and separator style."""
    reference = body[0][len(BODY_PREFIXES[0]):].strip()
    if normalize_path(reference) == normalize_path(staged_file):
        return ValidationResult.valid()
    return _invalid(
        "file-mismatch",
        f'Line 1 must reference the staged file "{staged_file}", found "{reference}"',
    )


def check_content(body: list[str]) -> ValidationResult:
    for number, (line, prefix) in enumerate(zip(body, BODY_PREFIXES), start=1):
        if not line[len(prefix):].strip():
            return _invalid("empty-content", f'Line {number} must have content after "{prefix}"')
    return ValidationResult.valid()


def check_commit_body(body: list[str], staged_file: str) -> ValidationResult:
    """Apply line-count, prefix, file and content checks to a parsed body."""
    checks = (
        lambda: check_line_count(body),
        lambda: check_prefixes(body),
        lambda: check_file_reference(body, staged_file),
        lambda: check_content(body),
    )
    for check in checks:
        result = check()
        if not result.is_valid:
            return result
    return ValidationResult.valid()


class CommitBodyFormat(Rule):
    """Require the five-line structured body naming the staged file."""

    id = RULE_ID
    description = "Requires a 5-line numbered body whose first line names the staged file"
    hooks = [HookName.COMMIT_MSG]
    policy = "body-format"

    def evaluate(self, context: HookContext) -> ValidationResult:
        staged = context.vcs.list_staged_files()
        result = check_single_file_staged(staged, rule_id=self.id)
        if not result.is_valid:
            return result
        if context.message_text is None:
            return ValidationResult.invalid(
                self.id,
                reason="message-unreadable",
                message=f"Cannot read commit message: {context.message_error or 'no message file'}",
            )
        return check_commit_body(parse_body(context.message_text), staged[0])
