"""Rule: validate the commit header as ``type(scope): subject``.

Opt-in. Enable and tune it in the config file::

    rules:
      commit-header-format:
        enabled: true
        types: [specs, issue, tests, helps, break]
        header_max_length: 83
        body_max_line_length: 83
"""
from __future__ import annotations

import re

from atomicgit.message import content_lines
from atomicgit.models import HookContext, HookName, Rule, ValidationResult

RULE_ID = "commit-header-format"

DEFAULT_TYPES = ["specs", "issue", "tests", "helps", "break"]
DEFAULT_HEADER_MAX_LENGTH = 83
DEFAULT_BODY_MAX_LINE_LENGTH = 83

_HEADER_RE = re.compile(r"^(?P<type>[^\s(:!]+)(?:\((?P<scope>[^)]*)\))?!?:\s*(?P<subject>.*)$")


def _invalid(reason: str, message: str, details: list[str] | None = None) -> ValidationResult:
    return ValidationResult.invalid(RULE_ID, reason=reason, message=message, details=details)


def check_commit_header(
    message: str,
    types: list[str] | None = None,
    header_max_length: int = DEFAULT_HEADER_MAX_LENGTH,
    body_max_line_length: int = DEFAULT_BODY_MAX_LINE_LENGTH,
) -> ValidationResult:
    types = types or DEFAULT_TYPES
    lines = content_lines(message)
    header = lines[0] if lines else ""

    match = _HEADER_RE.match(header)
    if match is None:
        return _invalid("header-shape", f'Header must look like "type(scope): subject", found "{header}"')

    commit_type = match.group("type")
    scope = match.group("scope")
    subject = match.group("subject").strip()

    if commit_type not in types:
        return _invalid("type-enum", f'Type "{commit_type}" is not one of: {", ".join(types)}')
    if scope is not None and scope != scope.lower():
        return _invalid("scope-case", f'Scope "{scope}" must be lower-case')
    if not subject:
        return _invalid("subject-empty", "Subject must not be empty")
    if subject != subject.lower():
        return _invalid("subject-case", f'Subject "{subject}" must be lower-case')
    if subject.endswith("."):
        return _invalid("subject-full-stop", "Subject must not end with a full stop")
    if len(header) > header_max_length:
        return _invalid(
            "header-max-length",
            f"Header must be at most {header_max_length} characters, found {len(header)}",
        )
    if len(lines) < 2:
        return _invalid("body-empty", "Body must not be empty")

    too_long = [
        f"{number}: {line}"
        for number, line in enumerate(lines[1:], start=1)
        if len(line) > body_max_line_length
    ]
    if too_long:
        return _invalid(
            "body-max-line-length",
            f"Body lines must be at most {body_max_line_length} characters",
            too_long,
        )
    return ValidationResult.valid()


class CommitHeaderFormat(Rule):
    """Conventional-style header check with a project-specific type list."""

    id = RULE_ID
    description = "Validates the header as type(scope): subject (opt-in)"
    hooks = [HookName.COMMIT_MSG]
    default_enabled = False

    def evaluate(self, context: HookContext) -> ValidationResult:
        if context.message_text is None:
            return ValidationResult.valid()
        rule_config = context.config.get(self.id, {})
        return check_commit_header(
            context.message_text,
            types=rule_config.get("types"),
            header_max_length=rule_config.get("header_max_length", DEFAULT_HEADER_MAX_LENGTH),
            body_max_line_length=rule_config.get("body_max_line_length", DEFAULT_BODY_MAX_LINE_LENGTH),
        )
