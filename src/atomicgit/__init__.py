"""atomicgit - git hooks enforcing an atomic, one-file-per-commit workflow."""

__version__ = "0.1.0"

from atomicgit.models import (
    AdapterError,
    CommitRef,
    HookContext,
    HookName,
    Rule,
    ValidationResult,
    Violation,
)

__all__ = [
    "AdapterError",
    "CommitRef",
    "HookContext",
    "HookName",
    "Rule",
    "ValidationResult",
    "Violation",
]
