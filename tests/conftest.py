"""Shared fixtures: an in-memory VcsQuery."""
from __future__ import annotations

import pytest

from atomicgit.models import AdapterError, CommitRef, HookContext, HookName


class FakeVcs:
    """VcsQuery test double holding repository state in memory."""

    def __init__(
        self,
        staged: list[str] | None = None,
        commits: list[CommitRef] | None = None,
        changed: dict[str, list[str]] | None = None,
        fail: bool = False,
    ):
        self.staged = list(staged or [])
        self.commits = list(commits or [])
        self.changed = dict(changed or {})
        self.fail = fail
        self.upstreams: list[str] = []

    def _check(self, *command: str) -> None:
        if self.fail:
            raise AdapterError(["git", *command], "fatal: no upstream configured")

    def list_staged_files(self) -> list[str]:
        self._check("diff", "--cached", "--name-only")
        return list(self.staged)

    def list_pending_commits(self, upstream: str) -> list[CommitRef]:
        self._check("log", f"{upstream}..HEAD")
        self.upstreams.append(upstream)
        return list(self.commits)

    def list_changed_files(self, commit_id: str) -> list[str]:
        self._check("diff-tree", commit_id)
        return list(self.changed.get(commit_id, []))


@pytest.fixture
def fake_vcs():
    """Factory building a FakeVcs."""
    return FakeVcs


@pytest.fixture
def make_context():
    def _make(hook: HookName, vcs=None, **fields) -> HookContext:
        return HookContext(hook=hook, vcs=vcs, project_dir="/tmp/project", **fields)
    return _make

