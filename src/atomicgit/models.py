"""Core models for atomicgit."""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from atomicgit.utils.git import VcsQuery


class HookName(Enum):
    """Git hook checkpoints handled by atomicgit."""
    PRE_COMMIT = "pre-commit"
    COMMIT_MSG = "commit-msg"
    PRE_PUSH = "pre-push"
    GUARD = "guard"

    @classmethod
    def from_string(cls, value: str) -> HookName:
        for member in cls:
            if member.value == value:
                return member
        raise ValueError(f"Unknown hook: {value}")


class AdapterError(RuntimeError):
    """The VCS query itself could not answer."""

    def __init__(self, command: list[str], detail: str = ""):
        self.command = command
        self.detail = detail
        text = f"git query failed: {' '.join(command)}"
        if detail:
            text = f"{text}: {detail}"
        super().__init__(text)


@dataclass
class Violation:
    """A single policy violation."""
    rule_id: str
    reason: str
    message: str
    details: list[str] = field(default_factory=list)
    suggestion: str | None = None

    def to_dict(self) -> dict:
        return {
            "rule_id": self.rule_id,
            "reason": self.reason,
            "message": self.message,
            "details": list(self.details),
            "suggestion": self.suggestion,
        }


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of one rule: Valid, or Invalid carrying a violation."""
    violation: Violation | None = None

    @classmethod
    def valid(cls) -> ValidationResult:
        return cls()

    @classmethod
    def invalid(
        cls,
        rule_id: str,
        reason: str,
        message: str,
        details: list[str] | None = None,
        suggestion: str | None = None,
    ) -> ValidationResult:
        return cls(Violation(rule_id, reason, message, list(details or []), suggestion))

    @property
    def is_valid(self) -> bool:
        return self.violation is None

    @property
    def reason(self) -> str | None:
        return self.violation.reason if self.violation else None

    @property
    def message(self) -> str | None:
        return self.violation.message if self.violation else None


@dataclass(frozen=True)
class CommitRef:
    """A commit pending push."""
    id: str
    subject: str

    @property
    def short_id(self) -> str:
        return self.id[:7]


@dataclass
class HookContext:
    """Context passed to rules during one hook invocation."""
    hook: HookName
    vcs: VcsQuery | None = None
    project_dir: str = "."
    upstream: str = "@{upstream}"
    message_text: str | None = None
    message_error: str | None = None
    argv: list[str] = field(default_factory=list)
    config: dict = field(default_factory=dict)


class Rule(ABC):
    """Base class for all atomicgit rules."""
    id: str
    description: str
    hooks: list[HookName]
    policy: str | None = None
    default_enabled: bool = True

    @abstractmethod
    def evaluate(self, context: HookContext) -> ValidationResult:
        """Evaluate this rule against the given context."""

    def matches_hook(self, hook: HookName) -> bool:
        """Check if this rule should run for the given hook."""
        return hook in self.hooks
