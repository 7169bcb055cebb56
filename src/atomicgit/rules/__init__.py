"""Rule registry and policy selection."""
from __future__ import annotations

from typing import TYPE_CHECKING

from atomicgit.models import Rule
from atomicgit.rules.all_commits_atomic import AllCommitsAtomic
from atomicgit.rules.commit_body_format import CommitBodyFormat
from atomicgit.rules.commit_header_format import CommitHeaderFormat
from atomicgit.rules.message_references_file import MessageReferencesFile
from atomicgit.rules.no_verify_blocked import NoVerifyBlocked
from atomicgit.rules.single_commit_per_push import SingleCommitPerPush
from atomicgit.rules.single_file_staged import SingleFileStaged

if TYPE_CHECKING:
    from atomicgit.config import AtomicGitConfig

PUSH_POLICIES: dict[str, type[Rule]] = {
    "strict": SingleCommitPerPush,
    "permissive": AllCommitsAtomic,
}

MESSAGE_POLICIES: dict[str, type[Rule]] = {
    "body-format": CommitBodyFormat,
    "references-file": MessageReferencesFile,
}

ALL_RULES: list[type[Rule]] = [
    SingleFileStaged,
    *MESSAGE_POLICIES.values(),
    CommitHeaderFormat,
    *PUSH_POLICIES.values(),
    NoVerifyBlocked,
]


def load_rules(config: AtomicGitConfig) -> list[Rule]:
    """Instantiate the rule chain selected by *config*, in evaluation order."""
    rules: list[Rule] = [
        SingleFileStaged(),
        MESSAGE_POLICIES[config.message_policy](),
        CommitHeaderFormat(),
        PUSH_POLICIES[config.push_policy](),
        NoVerifyBlocked(),
    ]
    return [r for r in rules if config.is_rule_enabled(r.id, r.default_enabled)]
