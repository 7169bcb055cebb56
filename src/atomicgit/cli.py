"""atomicgit CLI entry point."""
from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

import click

from atomicgit.config import AtomicGitConfig, load_config
from atomicgit.engine import Engine
from atomicgit.installer import install_hooks, uninstall_hooks
from atomicgit.message import read_message_file
from atomicgit.models import AdapterError, HookContext, HookName
from atomicgit.reporter import Reporter
from atomicgit.rules import ALL_RULES, load_rules
from atomicgit.utils.git import GitVcs, is_git_repo

logger = logging.getLogger("atomicgit")

project_dir_option = click.option("--project-dir", default=None, help="Repository directory (default: cwd)")


def _configure_logging() -> None:
    level = os.environ.get("ATOMICGIT_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(name)s: %(message)s",
        stream=sys.stderr,
    )


def _load(project_dir: str) -> AtomicGitConfig:
    config = load_config(project_dir)
    if config.reporter.verbose:
        logger.setLevel(logging.DEBUG)
    return config


def _run_hook(hook: HookName, project_dir: str | None, **context_fields) -> None:
    """Evaluate *hook*'s rule chain, report, and exit 0 (allow) or 1 (reject)."""
    project_dir = project_dir or os.getcwd()
    config = _load(project_dir)

    context = HookContext(
        hook=hook,
        vcs=GitVcs(project_dir),
        project_dir=project_dir,
        upstream=config.upstream,
        config=config.rules,
        **context_fields,
    )

    engine = Engine(config=config, rules=load_rules(config))
    result = engine.run(context)

    Reporter(config.reporter).emit(hook.value, result)
    sys.exit(result.exit_code)


def _hooks_dir(project_dir: str) -> Path:
    if not is_git_repo(project_dir):
        click.echo(f"Not a git repository: {project_dir}", err=True)
        sys.exit(1)
    try:
        return GitVcs(project_dir).hooks_dir()
    except AdapterError as exc:
        click.echo(str(exc), err=True)
        sys.exit(1)


@click.group()
def main():
    """atomicgit - git hooks enforcing one file per commit."""
    _configure_logging()


@main.command("pre-commit")
@project_dir_option
def pre_commit(project_dir: str | None):
    """Allow the commit only when exactly one file is staged."""
    _run_hook(HookName.PRE_COMMIT, project_dir)


@main.command("commit-msg")
@click.argument("msg_file")
@project_dir_option
def commit_msg(msg_file: str, project_dir: str | None):
    """Validate the commit message in MSG_FILE."""
    try:
        text, error = read_message_file(msg_file), None
    except OSError as exc:
        logger.debug("Cannot read %s", msg_file, exc_info=True)
        text, error = None, f"{msg_file}: {exc.strerror or exc}"
    _run_hook(HookName.COMMIT_MSG, project_dir, message_text=text, message_error=error)


@main.command("pre-push")
@click.argument("remote", required=False)
@click.argument("url", required=False)
@project_dir_option
def pre_push(remote: str | None, url: str | None, project_dir: str | None):
    """Validate the commits between upstream and HEAD."""
    # git writes the pushed refs on stdin; the range comes from the upstream instead.
    if not sys.stdin.isatty():
        sys.stdin.read()
    logger.debug("pre-push to %s (%s)", remote, url)
    _run_hook(HookName.PRE_PUSH, project_dir)


@main.command(context_settings={"ignore_unknown_options": True, "allow_interspersed_args": False})
@project_dir_option
@click.argument("git_args", nargs=-1, type=click.UNPROCESSED)
def guard(project_dir: str | None, git_args: tuple[str, ...]):
    """Refuse a git invocation (GIT_ARGS) that carries --no-verify."""
    _run_hook(HookName.GUARD, project_dir, argv=list(git_args))


@main.command()
@project_dir_option
@click.option("--force", is_flag=True, help="Overwrite hooks not written by atomicgit")
def install(project_dir: str | None, force: bool):
    """Install the pre-commit, commit-msg and pre-push hooks."""
    hooks_dir = _hooks_dir(project_dir or os.getcwd())

    for hook, status in install_hooks(hooks_dir, force=force).items():
        click.echo(f"  {status:<10} {hooks_dir / hook}")
        if status == "skipped":
            click.echo(f"             existing {hook} hook kept; rerun with --force to replace it")


@main.command()
@project_dir_option
def uninstall(project_dir: str | None):
    """Remove hooks installed by atomicgit."""
    hooks_dir = _hooks_dir(project_dir or os.getcwd())

    removed = uninstall_hooks(hooks_dir)
    if not removed:
        click.echo("No atomicgit hooks found.")
    for hook in removed:
        click.echo(f"  removed    {hooks_dir / hook}")


@main.command("list-rules")
def list_rules():
    """List all available rules."""
    click.echo(f"{'Rule ID':<26} {'Hook':<12} {'Policy':<16} Description")
    click.echo("-" * 100)

    for rule_cls in ALL_RULES:
        rule = rule_cls()
        hook_str = ", ".join(h.value for h in rule.hooks)
        policy = rule.policy or ("opt-in" if not rule.default_enabled else "-")
        click.echo(f"{rule.id:<26} {hook_str:<12} {policy:<16} {rule.description}")

    click.echo(f"\n{len(ALL_RULES)} rules total.")


if __name__ == "__main__":
    main()
