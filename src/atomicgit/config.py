"""Configuration loading and parsing for atomicgit."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from atomicgit.models import HookName
from atomicgit.rules import MESSAGE_POLICIES, PUSH_POLICIES

logger = logging.getLogger("atomicgit")

CONFIG_FILENAMES = ["atomicgit.yml", "atomicgit.yaml", ".atomicgit.yml"]

FAIL_OPEN = "fail-open"
FAIL_CLOSED = "fail-closed"
VALID_ADAPTER_ERROR_MODES = {FAIL_OPEN, FAIL_CLOSED}

DEFAULT_PUSH_POLICY = "strict"
DEFAULT_MESSAGE_POLICY = "body-format"
DEFAULT_UPSTREAM = "@{upstream}"

# Push checks must not block on a transient query failure; commit checks must.
DEFAULT_ON_ADAPTER_ERROR = {
    HookName.PRE_COMMIT: FAIL_CLOSED,
    HookName.COMMIT_MSG: FAIL_CLOSED,
    HookName.PRE_PUSH: FAIL_OPEN,
    HookName.GUARD: FAIL_CLOSED,
}


@dataclass
class ReporterConfig:
    """Output options for the reporter."""
    color: bool = True
    verbose: bool = False


@dataclass
class AtomicGitConfig:
    """Parsed atomicgit configuration."""
    push_policy: str = DEFAULT_PUSH_POLICY
    message_policy: str = DEFAULT_MESSAGE_POLICY
    upstream: str = DEFAULT_UPSTREAM
    on_adapter_error: dict[HookName, str] = field(default_factory=lambda: dict(DEFAULT_ON_ADAPTER_ERROR))
    reporter: ReporterConfig = field(default_factory=ReporterConfig)
    rules: dict[str, dict] = field(default_factory=dict)

    def is_rule_enabled(self, rule_id: str, default: bool = True) -> bool:
        rule_cfg = self.rules.get(rule_id, {})
        return rule_cfg.get("enabled", default)

    def get_rule_config(self, rule_id: str) -> dict:
        return self.rules.get(rule_id, {})

    def fails_open(self, hook: HookName) -> bool:
        return self.on_adapter_error.get(hook, FAIL_CLOSED) == FAIL_OPEN


def _section(raw: dict, key: str) -> dict:
    value = raw.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        logger.warning("Ignoring malformed '%s' section, expected a mapping", key)
        return {}
    return value


def _choice(raw: dict, key: str, valid, default: str) -> str:
    value = raw.get(key, default)
    if not isinstance(value, str) or value not in valid:
        logger.warning("Invalid %s '%s', falling back to '%s'", key, value, default)
        return default
    return value


def _parse_adapter_error_modes(raw: dict) -> dict[HookName, str]:
    modes = dict(DEFAULT_ON_ADAPTER_ERROR)
    for hook_name, mode in raw.items():
        try:
            hook = HookName.from_string(str(hook_name))
        except ValueError:
            logger.warning("Unknown hook '%s' in on_adapter_error", hook_name)
            continue
        if not isinstance(mode, str) or mode not in VALID_ADAPTER_ERROR_MODES:
            logger.warning(
                "Invalid on_adapter_error '%s' for %s, keeping '%s'", mode, hook_name, modes[hook]
            )
            continue
        modes[hook] = mode
    return modes


def _parse_reporter(raw: dict) -> ReporterConfig:
    color = bool(raw.get("color", True))
    if "NO_COLOR" in os.environ:
        color = False
    return ReporterConfig(color=color, verbose=bool(raw.get("verbose", False)))


def _parse_rules(raw: dict) -> dict[str, dict]:
    """Per-rule options; a bare boolean is shorthand for ``{enabled: <bool>}``."""
    rules: dict[str, dict] = {}
    for rule_id, rule_cfg in raw.items():
        if isinstance(rule_cfg, bool):
            rules[str(rule_id)] = {"enabled": rule_cfg}
        elif isinstance(rule_cfg, dict):
            rules[str(rule_id)] = rule_cfg
        elif rule_cfg is None:
            rules[str(rule_id)] = {}
        else:
            logger.warning("Ignoring malformed config for rule '%s'", rule_id)
    return rules


def _read_raw(root: Path) -> dict:
    for filename in CONFIG_FILENAMES:
        config_path = root / filename
        if not config_path.exists():
            continue
        try:
            raw = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as exc:
            logger.warning("Cannot parse %s, using defaults: %s", config_path, exc)
            return {}
        if not isinstance(raw, dict):
            logger.warning("Ignoring malformed config in %s", config_path)
            return {}
        return raw
    return {}


def load_config(project_dir: str) -> AtomicGitConfig:
    """Load config from atomicgit.yml, or return defaults when absent.

    Malformed values are logged at WARNING and replaced by their defaults.
    """
    raw = _read_raw(Path(project_dir))

    upstream = raw.get("upstream", DEFAULT_UPSTREAM)
    if not isinstance(upstream, str) or not upstream.strip():
        logger.warning("Invalid upstream '%s', falling back to '%s'", upstream, DEFAULT_UPSTREAM)
        upstream = DEFAULT_UPSTREAM

    return AtomicGitConfig(
        push_policy=_choice(raw, "push_policy", PUSH_POLICIES, DEFAULT_PUSH_POLICY),
        message_policy=_choice(raw, "message_policy", MESSAGE_POLICIES, DEFAULT_MESSAGE_POLICY),
        upstream=upstream,
        on_adapter_error=_parse_adapter_error_modes(_section(raw, "on_adapter_error")),
        reporter=_parse_reporter(_section(raw, "reporter")),
        rules=_parse_rules(_section(raw, "rules")),
    )
