"""Rule: the commit message must mention the staged file as a whole path token."""
from __future__ import annotations

import re

from atomicgit.message import strip_comments
from atomicgit.models import HookContext, HookName, Rule, ValidationResult
from atomicgit.rules.single_file_staged import check_single_file_staged

RULE_ID = "message-references-file"

# A path token may not continue into neighbouring name characters:
# "test.js" must not match inside "mytest.js" or "test.json".
_BEFORE = r"(?<![\w.\-])"
_AFTER = r"(?![\w\-]|\.\w)"


def build_path_pattern(path: str) -> re.Pattern:
    normalized = path.strip().replace("\\", "/")
    return re.compile(_BEFORE + re.escape(normalized) + _AFTER, re.IGNORECASE | re.MULTILINE)


def message_references_path(message: str, path: str) -> bool:
    text = strip_comments(message).replace("\\", "/")
    return build_path_pattern(path).search(text) is not None


def check_message_references_file(message: str, staged: list[str]) -> ValidationResult:
    result = check_single_file_staged(staged, rule_id=RULE_ID)
    if not result.is_valid:
        return result
    if message_references_path(message, staged[0]):
        return ValidationResult.valid()
    return ValidationResult.invalid(
        RULE_ID,
        reason="file-not-referenced",
        message=f'Commit message must reference the staged file "{staged[0]}"',
        suggestion=f"Mention {staged[0]} in the subject or body.",
    )


class MessageReferencesFile(Rule):
    """Legacy message policy: the message just has to name the staged file."""

    id = RULE_ID
    description = "Requires the commit message to mention the staged file path"
    hooks = [HookName.COMMIT_MSG]
    policy = "references-file"

    def evaluate(self, context: HookContext) -> ValidationResult:
        staged = context.vcs.list_staged_files()
        if len(staged) == 1 and context.message_text is None:
            return ValidationResult.invalid(
                self.id,
                reason="message-unreadable",
                message=f"Cannot read commit message: {context.message_error or 'no message file'}",
            )
        return check_message_references_file(context.message_text or "", staged)
