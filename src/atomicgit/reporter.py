"""Output formatting for git hook runs."""
from __future__ import annotations

import click

from atomicgit.config import ReporterConfig
from atomicgit.engine import HookResult


class Reporter:
    """Renders a hook result as itemized, ordered lines for the committer."""

    def __init__(self, config: ReporterConfig | None = None):
        self.config = config or ReporterConfig()

    def _style(self, text: str, **styles) -> str:
        if not self.config.color:
            return text
        return click.style(text, **styles)

    def format_result(self, scope: str, result: HookResult) -> list[str]:
        """Return the lines to show for *result*; empty on a quiet pass."""
        tag = f"[{scope}]"
        lines: list[str] = []

        if result.failed_open:
            lines.append(
                f"{tag} {self._style('WARNING', fg='yellow', bold=True)} "
                f"{result.adapter_error}; check skipped"
            )

        failure = result.failure
        if failure is None:
            if self.config.verbose:
                lines.append(
                    f"{tag} {self._style('OK', fg='green', bold=True)} "
                    f"({result.rules_evaluated} rule(s) evaluated)"
                )
            return lines

        v = failure.violation
        lines.append(f"{tag} {self._style('BLOCKED', fg='red', bold=True)} [{v.rule_id}] {v.message}")
        for detail in v.details:
            lines.append(f"    {detail}")
        if v.suggestion:
            lines.append(f"    -> {v.suggestion}")
        if self.config.verbose:
            lines.append(f"    (reason: {v.reason})")
        return lines

    def emit(self, scope: str, result: HookResult) -> None:
        for line in self.format_result(scope, result):
            click.echo(line, err=True)
