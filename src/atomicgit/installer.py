"""Hook shim installation and removal for a git repository."""
from __future__ import annotations

import shlex
import shutil
import sys
import sysconfig
from pathlib import Path

HOOK_MARKER = "# installed by atomicgit"

INSTALLED_HOOKS = ["pre-commit", "commit-msg", "pre-push"]


def _resolve_command() -> str:
    """Resolve the absolute command to invoke atomicgit, quoted for sh.

    Tries, in order: PATH, the pipx bin dir, the sysconfig scripts dir
    (where pip installs console_scripts), then falls back to
    ``sys.executable -m atomicgit``.
    """
    found = shutil.which("atomicgit")
    if found:
        return shlex.quote(found)

    pipx = Path.home() / ".local" / "bin" / "atomicgit"
    if pipx.is_file():
        return shlex.quote(str(pipx))

    scripts_dir = sysconfig.get_path("scripts")
    if scripts_dir:
        scripts_bin = Path(scripts_dir) / "atomicgit"
        if scripts_bin.is_file():
            return shlex.quote(str(scripts_bin))

    return f"{shlex.quote(sys.executable)} -m atomicgit"


def build_hook_script(hook: str, cmd: str) -> str:
    """Shell shim forwarding git's hook arguments to ``atomicgit <hook>``."""
    return f'#!/bin/sh\n{HOOK_MARKER}\nexec {cmd} {hook} "$@"\n'


def is_atomicgit_hook(path: Path) -> bool:
    try:
        return HOOK_MARKER in path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return False


def install_hooks(hooks_dir: Path, cmd: str | None = None, force: bool = False) -> dict[str, str]:
    """Write hook shims (idempotent). Returns hook name -> status.

    Status is ``installed``, ``updated`` or ``skipped`` (a foreign hook exists
    and *force* is not set).
    """
    cmd = cmd or _resolve_command()
    hooks_dir.mkdir(parents=True, exist_ok=True)
    statuses: dict[str, str] = {}

    for hook in INSTALLED_HOOKS:
        path = hooks_dir / hook
        if path.exists():
            if not is_atomicgit_hook(path) and not force:
                statuses[hook] = "skipped"
                continue
            statuses[hook] = "updated"
        else:
            statuses[hook] = "installed"
        path.write_text(build_hook_script(hook, cmd), encoding="utf-8")
        path.chmod(0o755)

    return statuses


def uninstall_hooks(hooks_dir: Path) -> list[str]:
    """Remove the shims atomicgit wrote; foreign hooks are left alone."""
    removed: list[str] = []
    for hook in INSTALLED_HOOKS:
        path = hooks_dir / hook
        if path.exists() and is_atomicgit_hook(path):
            path.unlink()
            removed.append(hook)
    return removed
