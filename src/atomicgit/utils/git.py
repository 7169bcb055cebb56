"""Git utilities for atomicgit."""
from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Protocol

from atomicgit.models import AdapterError, CommitRef

logger = logging.getLogger("atomicgit")

GIT_TIMEOUT = 10


class VcsQuery(Protocol):
    """Read-only view of repository state consumed by the rules."""

    def list_staged_files(self) -> list[str]: ...

    def list_pending_commits(self, upstream: str) -> list[CommitRef]: ...

    def list_changed_files(self, commit_id: str) -> list[str]: ...


def _output_paths(output: str) -> list[str]:
    """NUL-separated paths from a -z listing; blanks and duplicates dropped, order kept."""
    seen: set[str] = set()
    lines: list[str] = []
    for line in output.split("\0"):
        if not line.strip() or line in seen:
            continue
        seen.add(line)
        lines.append(line)
    return lines


class GitVcs:
    """VcsQuery backed by the git command line."""

    def __init__(self, project_dir: str):
        self.project_dir = project_dir

    def _run(self, args: list[str]) -> str:
        command = ["git", *args]
        logger.debug("Running %s", " ".join(command))
        try:
            result = subprocess.run(
                command,
                cwd=self.project_dir,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=GIT_TIMEOUT,
            )
        except subprocess.TimeoutExpired as exc:
            raise AdapterError(command, "timed out") from exc
        except (FileNotFoundError, OSError) as exc:
            raise AdapterError(command, str(exc)) from exc
        if result.returncode != 0:
            raise AdapterError(command, result.stderr.strip())
        return result.stdout

    def list_staged_files(self) -> list[str]:
        return _output_paths(self._run(["diff", "--cached", "--name-only", "-z"]))

    def list_pending_commits(self, upstream: str) -> list[CommitRef]:
        output = self._run(["log", "--reverse", "--format=%H%x09%s", f"{upstream}..HEAD"])
        commits: list[CommitRef] = []
        for line in output.splitlines():
            if not line.strip():
                continue
            commit_id, _, subject = line.partition("\t")
            commits.append(CommitRef(id=commit_id.strip(), subject=subject.strip()))
        return commits

    def list_changed_files(self, commit_id: str) -> list[str]:
        return _output_paths(
            self._run(["diff-tree", "--no-commit-id", "--name-only", "-z", "-r", "--root", commit_id])
        )

    def hooks_dir(self) -> Path:
        """Resolve the hooks directory, honouring core.hooksPath."""
        path = Path(self._run(["rev-parse", "--git-path", "hooks"]).strip())
        if not path.is_absolute():
            path = Path(self.project_dir) / path
        return path


def is_git_repo(project_dir: str) -> bool:
    """Check if the directory is inside a git repository."""
    try:
        result = subprocess.run(
            ["git", "rev-parse", "--is-inside-work-tree"],
            cwd=project_dir,
            capture_output=True,
            text=True,
            timeout=5,
        )
        return result.returncode == 0
    except (subprocess.TimeoutExpired, FileNotFoundError, OSError):
        return False
