"""Rule: exactly one file may be staged per commit."""
from __future__ import annotations

from atomicgit.models import HookContext, HookName, Rule, ValidationResult

RULE_ID = "single-file-staged"


def check_single_file_staged(staged: list[str], rule_id: str = RULE_ID) -> ValidationResult:
    """Valid iff exactly one path is staged.

    Also serves as the staged-count precondition of the commit-msg rules,
    which report under their own *rule_id*.
    """
    if len(staged) == 1:
        return ValidationResult.valid()
    return ValidationResult.invalid(
        rule_id,
        reason="staged-count",
        message=f"Expected 1 staged file, found {len(staged)}",
        details=list(staged),
        suggestion="Stage a single file per commit (git restore --staged <path> to unstage).",
    )


class SingleFileStaged(Rule):
    """Block commits that stage more or fewer than one file."""

    id = RULE_ID
    description = "Allows a commit only when exactly one file is staged"
    hooks = [HookName.PRE_COMMIT]

    def evaluate(self, context: HookContext) -> ValidationResult:
        return check_single_file_staged(context.vcs.list_staged_files())
