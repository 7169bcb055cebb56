"""Tests for atomicgit configuration loading."""
from __future__ import annotations

import logging

import yaml

from atomicgit.config import FAIL_CLOSED, FAIL_OPEN, AtomicGitConfig, load_config
from atomicgit.models import HookName


class TestLoadConfig:
    def test_defaults_when_no_file(self, tmp_path, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        config = load_config(str(tmp_path))
        assert config.push_policy == "strict"
        assert config.message_policy == "body-format"
        assert config.upstream == "@{upstream}"
        assert config.rules == {}
        assert config.reporter.color is True
        assert config.reporter.verbose is False

    def test_loads_from_atomicgit_yml(self, tmp_path):
        cfg = {"push_policy": "permissive", "message_policy": "references-file", "upstream": "origin/main"}
        (tmp_path / "atomicgit.yml").write_text(yaml.dump(cfg))
        config = load_config(str(tmp_path))
        assert config.push_policy == "permissive"
        assert config.message_policy == "references-file"
        assert config.upstream == "origin/main"

    def test_loads_from_dot_atomicgit_yml(self, tmp_path):
        (tmp_path / ".atomicgit.yml").write_text(yaml.dump({"push_policy": "permissive"}))
        assert load_config(str(tmp_path)).push_policy == "permissive"

    def test_first_config_file_wins(self, tmp_path):
        (tmp_path / "atomicgit.yml").write_text(yaml.dump({"push_policy": "strict"}))
        (tmp_path / "atomicgit.yaml").write_text(yaml.dump({"push_policy": "permissive"}))
        assert load_config(str(tmp_path)).push_policy == "strict"

    def test_empty_file_gives_defaults(self, tmp_path):
        (tmp_path / "atomicgit.yml").write_text("")
        assert load_config(str(tmp_path)).push_policy == "strict"

    def test_invalid_policy_falls_back(self, tmp_path, caplog):
        (tmp_path / "atomicgit.yml").write_text(yaml.dump({"push_policy": "yolo"}))
        with caplog.at_level(logging.WARNING, logger="atomicgit"):
            config = load_config(str(tmp_path))
        assert config.push_policy == "strict"
        assert "yolo" in caplog.text

    def test_non_mapping_config_is_ignored(self, tmp_path):
        (tmp_path / "atomicgit.yml").write_text("- just\n- a list\n")
        assert load_config(str(tmp_path)).message_policy == "body-format"


class TestAdapterErrorModes:
    def test_defaults(self, tmp_path):
        config = load_config(str(tmp_path))
        assert config.fails_open(HookName.PRE_PUSH)
        assert not config.fails_open(HookName.PRE_COMMIT)
        assert not config.fails_open(HookName.COMMIT_MSG)

    def test_override_per_hook(self, tmp_path):
        cfg = {"on_adapter_error": {"pre-push": FAIL_CLOSED, "pre-commit": FAIL_OPEN}}
        (tmp_path / "atomicgit.yml").write_text(yaml.dump(cfg))
        config = load_config(str(tmp_path))
        assert not config.fails_open(HookName.PRE_PUSH)
        assert config.fails_open(HookName.PRE_COMMIT)

    def test_invalid_mode_keeps_default(self, tmp_path):
        cfg = {"on_adapter_error": {"pre-push": "maybe", "post-merge": FAIL_OPEN}}
        (tmp_path / "atomicgit.yml").write_text(yaml.dump(cfg))
        config = load_config(str(tmp_path))
        assert config.fails_open(HookName.PRE_PUSH)


class TestReporterConfig:
    def test_reads_reporter_section(self, tmp_path, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        (tmp_path / "atomicgit.yml").write_text(yaml.dump({"reporter": {"color": False, "verbose": True}}))
        config = load_config(str(tmp_path))
        assert config.reporter.color is False
        assert config.reporter.verbose is True

    def test_no_color_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "1")
        assert load_config(str(tmp_path)).reporter.color is False


class TestRuleToggles:
    def test_enabled_by_default(self):
        assert AtomicGitConfig().is_rule_enabled("single-file-staged")

    def test_opt_in_default(self):
        assert not AtomicGitConfig().is_rule_enabled("commit-header-format", default=False)

    def test_explicit_toggle(self):
        config = AtomicGitConfig(rules={"commit-header-format": {"enabled": True, "types": ["x"]}})
        assert config.is_rule_enabled("commit-header-format", default=False)
        assert config.get_rule_config("commit-header-format")["types"] == ["x"]


class TestMalformedConfig:
    def test_yaml_syntax_error_gives_defaults(self, tmp_path, caplog):
        (tmp_path / "atomicgit.yml").write_text("push_policy: [strict\n")
        with caplog.at_level(logging.WARNING, logger="atomicgit"):
            config = load_config(str(tmp_path))
        assert config.push_policy == "strict"
        assert "Cannot parse" in caplog.text

    def test_unhashable_policy_falls_back(self, tmp_path):
        (tmp_path / "atomicgit.yml").write_text(yaml.dump({"push_policy": ["strict"], "message_policy": {"a": 1}}))
        config = load_config(str(tmp_path))
        assert config.push_policy == "strict"
        assert config.message_policy == "body-format"

    def test_scalar_reporter_section_is_ignored(self, tmp_path, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        (tmp_path / "atomicgit.yml").write_text("reporter: true\n")
        config = load_config(str(tmp_path))
        assert config.reporter.color is True
        assert config.reporter.verbose is False

    def test_scalar_adapter_error_section_is_ignored(self, tmp_path):
        (tmp_path / "atomicgit.yml").write_text("on_adapter_error: fail-open\n")
        config = load_config(str(tmp_path))
        assert config.fails_open(HookName.PRE_PUSH)
        assert not config.fails_open(HookName.PRE_COMMIT)

    def test_unhashable_adapter_error_mode_keeps_default(self, tmp_path):
        (tmp_path / "atomicgit.yml").write_text(yaml.dump({"on_adapter_error": {"pre-push": ["fail-closed"]}}))
        assert load_config(str(tmp_path)).fails_open(HookName.PRE_PUSH)

    def test_boolean_rule_entry_toggles_rule(self, tmp_path):
        (tmp_path / "atomicgit.yml").write_text(yaml.dump({"rules": {"single-commit-per-push": False}}))
        config = load_config(str(tmp_path))
        assert not config.is_rule_enabled("single-commit-per-push")
        assert config.get_rule_config("single-commit-per-push") == {"enabled": False}

    def test_scalar_rule_entry_is_ignored(self, tmp_path, caplog):
        (tmp_path / "atomicgit.yml").write_text(yaml.dump({"rules": {"commit-body-format": "off"}}))
        with caplog.at_level(logging.WARNING, logger="atomicgit"):
            config = load_config(str(tmp_path))
        assert config.is_rule_enabled("commit-body-format")
        assert "commit-body-format" in caplog.text

    def test_list_rules_section_is_ignored(self, tmp_path):
        (tmp_path / "atomicgit.yml").write_text("rules:\n  - single-file-staged\n")
        assert load_config(str(tmp_path)).rules == {}

    def test_non_string_upstream_falls_back(self, tmp_path):
        (tmp_path / "atomicgit.yml").write_text(yaml.dump({"upstream": ["origin/main"]}))
        assert load_config(str(tmp_path)).upstream == "@{upstream}"
