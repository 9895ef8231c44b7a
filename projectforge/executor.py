"""External command execution.

Generators never spawn processes directly; they go through a
``CommandExecutor`` so tests can substitute a fake that records calls
instead of invoking real package managers.  The only OS-specific behaviour
lives here: executable discovery and the Windows ``.cmd``/``.bat`` shims
that ``npm``, ``npx``, ``yarn`` and ``pnpm`` are installed as.
"""

from __future__ import annotations

import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable

from projectforge.utils import run_command

_IS_WINDOWS = os.name == "nt"


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one external command."""

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


@runtime_checkable
class CommandExecutor(Protocol):
    """Runs one program to completion in an explicit working directory."""

    async def run(self, program: str, args: list[str], cwd: Path) -> CommandResult:
        ...

    def is_available(self, program: str) -> bool:
        ...


def tool_available(program: str) -> bool:
    """Return ``True`` if *program* is discoverable on ``PATH``."""
    return shutil.which(program) is not None


def resolve_argv(argv: list[str]) -> list[str]:
    """Resolve ``argv[0]`` via ``PATH`` for cross-platform execution.

    On Windows the JavaScript toolchain entrypoints are ``.cmd`` shims which
    cannot be executed directly, so they are run through ``cmd.exe /c``.
    """
    if not argv:
        raise ValueError("Cannot run an empty command")

    cmd = argv[0]
    if any(sep and sep in cmd for sep in ("/", "\\", os.path.sep, os.path.altsep)):
        return argv

    resolved = shutil.which(cmd)
    if resolved is None:
        return argv

    if _IS_WINDOWS and os.path.splitext(resolved)[1].lower() in {".cmd", ".bat"}:
        comspec = os.environ.get("ComSpec", "cmd.exe")
        return [comspec, "/d", "/c", resolved, *argv[1:]]

    return [resolved, *argv[1:]]


class SubprocessExecutor:
    """``CommandExecutor`` backed by real child processes.

    Args:
        timeout: Optional per-command timeout in seconds.  ``None`` (the
            default) waits for the tool however long it takes.
        capture: Capture output instead of streaming it to the terminal.
            Captured stderr is attached to errors for failed commands.  The
            CLI turns this off so installer progress stays visible.
    """

    def __init__(self, timeout: float | None = None, capture: bool = True) -> None:
        self.timeout = timeout
        self.capture = capture

    async def run(self, program: str, args: list[str], cwd: Path) -> CommandResult:
        argv = resolve_argv([program, *args])
        try:
            returncode, stdout, stderr = await run_command(
                argv, cwd=cwd, timeout=self.timeout, capture=self.capture
            )
        except FileNotFoundError as exc:
            return CommandResult(returncode=127, stderr=f"Command not found: {program} ({exc})")
        except OSError as exc:
            # Found but not runnable: permissions, bad format or a bad cwd.
            return CommandResult(returncode=126, stderr=f"Cannot run {program}: {exc}")
        return CommandResult(returncode=returncode, stdout=stdout, stderr=stderr)

    def is_available(self, program: str) -> bool:
        return tool_available(program)
