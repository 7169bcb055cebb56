"""Rule: any number of commits may be pushed, each touching exactly one file."""
from __future__ import annotations

from collections.abc import Mapping

from atomicgit.models import CommitRef, HookContext, HookName, Rule, ValidationResult

RULE_ID = "all-commits-atomic"


def check_all_commits_atomic(
    commits: list[CommitRef],
    changed_files: Mapping[str, list[str]],
) -> ValidationResult:
    """Valid iff every commit in *commits* changes exactly one file.

    *changed_files* maps commit id to that commit's changed paths. Violations
    are listed in commit order.
    """
    details: list[str] = []
    violations = 0
    for commit in commits:
        files = changed_files.get(commit.id, [])
        if len(files) == 1:
            continue
        violations += 1
        details.append(f"{commit.short_id} {commit.subject} ({len(files)} files)")
        details.extend(f"    {path}" for path in files)

    if not violations:
        return ValidationResult.valid()
    return ValidationResult.invalid(
        RULE_ID,
        reason="non-atomic-commits",
        message=f"Found {violations} commit(s) not changing exactly 1 file",
        details=details,
        suggestion="Rewrite the listed commits so that each one touches a single file.",
    )


class AllCommitsAtomic(Rule):
    """Permissive push policy: many commits, each atomic."""

    id = RULE_ID
    description = "Allows a push only when every pending commit changes one file"
    hooks = [HookName.PRE_PUSH]
    policy = "permissive"

    def evaluate(self, context: HookContext) -> ValidationResult:
        commits = context.vcs.list_pending_commits(context.upstream)
        changed = {c.id: context.vcs.list_changed_files(c.id) for c in commits}
        return check_all_commits_atomic(commits, changed)
