"""Rule: push at most one commit, and that commit must touch one file."""
from __future__ import annotations

from atomicgit.models import CommitRef, HookContext, HookName, Rule, ValidationResult

RULE_ID = "single-commit-per-push"


def format_commit(index: int, commit: CommitRef) -> str:
    return f"{index + 1}. {commit.short_id} {commit.subject}"


def check_single_commit_per_push(commits: list[CommitRef]) -> ValidationResult:
    if len(commits) <= 1:
        return ValidationResult.valid()
    return ValidationResult.invalid(
        RULE_ID,
        reason="commit-count",
        message=f"Expected at most 1 commit per push, found {len(commits)}",
        details=[format_commit(i, c) for i, c in enumerate(commits)],
        suggestion="Push commits one at a time (git push <remote> <sha>:<branch>).",
    )


def check_single_file_per_commit(commit: CommitRef, changed: list[str]) -> ValidationResult:
    if len(changed) <= 1:
        return ValidationResult.valid()
    return ValidationResult.invalid(
        RULE_ID,
        reason="file-count",
        message=f"Commit {commit.short_id} must change 1 file, found {len(changed)}",
        details=list(changed),
        suggestion="Split the commit so that each one touches a single file.",
    )


class SingleCommitPerPush(Rule):
    """Strict push policy: one pending commit, touching one file."""

    id = RULE_ID
    description = "Allows a push of at most one commit changing a single file"
    hooks = [HookName.PRE_PUSH]
    policy = "strict"

    def evaluate(self, context: HookContext) -> ValidationResult:
        commits = context.vcs.list_pending_commits(context.upstream)
        result = check_single_commit_per_push(commits)
        if not result.is_valid or len(commits) != 1:
            return result
        commit = commits[0]
        return check_single_file_per_commit(commit, context.vcs.list_changed_files(commit.id))
