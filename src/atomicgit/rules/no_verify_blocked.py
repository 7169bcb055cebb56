"""Rule: refuse git invocations that bypass hooks with --no-verify."""
from __future__ import annotations

from atomicgit.models import HookContext, HookName, Rule, ValidationResult

RULE_ID = "no-verify-blocked"

NO_VERIFY_FLAG = "--no-verify"


def check_no_verify(argv: list[str]) -> ValidationResult:
    if NO_VERIFY_FLAG not in argv:
        return ValidationResult.valid()
    return ValidationResult.invalid(
        RULE_ID,
        reason="no-verify",
        message="--no-verify is not allowed: hooks enforce the atomic commit policy",
        details=[" ".join(["git", *argv])],
        suggestion="Remove --no-verify and fix what the hooks report instead of bypassing them.",
    )


class NoVerifyBlocked(Rule):
    """Block hook bypass flags on the wrapped git command."""

    id = RULE_ID
    description = "Refuses git commands carrying --no-verify"
    hooks = [HookName.GUARD]

    def evaluate(self, context: HookContext) -> ValidationResult:
        return check_no_verify(context.argv)
