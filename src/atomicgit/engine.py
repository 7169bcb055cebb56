"""atomicgit evaluation engine."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field

from atomicgit.config import AtomicGitConfig
from atomicgit.models import AdapterError, HookContext, Rule, ValidationResult

logger = logging.getLogger("atomicgit")

ADAPTER_ERROR_RULE = "adapter-error"


@dataclass
class HookResult:
    """Result of running one hook's rule chain."""
    results: list[ValidationResult] = field(default_factory=list)
    rules_evaluated: int = 0
    adapter_error: AdapterError | None = None
    failed_open: bool = False

    @property
    def failure(self) -> ValidationResult | None:
        for result in self.results:
            if not result.is_valid:
                return result
        return None

    @property
    def is_blocking(self) -> bool:
        return self.failure is not None

    @property
    def exit_code(self) -> int:
        return 1 if self.is_blocking else 0


class Engine:
    """Runs the rules of one hook in order, stopping at the first violation."""

    def __init__(self, config: AtomicGitConfig, rules: list[Rule]):
        self.config = config
        self.rules = rules

    def run(self, context: HookContext) -> HookResult:
        result = HookResult()

        for rule in self.rules:
            if not rule.matches_hook(context.hook):
                continue

            result.rules_evaluated += 1
            try:
                outcome = rule.evaluate(context)
            except AdapterError as exc:
                return self._adapter_failure(result, context, exc)

            result.results.append(outcome)
            if not outcome.is_valid:
                logger.debug("Rule %s rejected: %s", rule.id, outcome.reason)
                break

        return result

    def _adapter_failure(self, result: HookResult, context: HookContext, exc: AdapterError) -> HookResult:
        result.adapter_error = exc
        if self.config.fails_open(context.hook):
            logger.warning("%s: %s; allowing (fail-open)", context.hook.value, exc)
            result.failed_open = True
            return result
        result.results.append(
            ValidationResult.invalid(
                ADAPTER_ERROR_RULE,
                reason="adapter-error",
                message=f"Hook error: {exc}",
            )
        )
        return result
