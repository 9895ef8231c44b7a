"""Execution of generation plans.

``PlanRunner`` walks a ``GenerationPlan`` step by step inside an explicit
working directory.  Each step completes (and any external process exits)
before the next one starts.  Failures are raised as ``ExternalToolError``
or ``FilesystemError`` tagged with the failing step's stage; the runner
never cleans up after itself.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

from projectforge.errors import ExternalToolError, FilesystemError
from projectforge.executor import CommandExecutor
from projectforge.models import PackageManager
from projectforge.packages import add_command
from projectforge.utils import print_info

from .plan import (
    GenerationManifest,
    GenerationPlan,
    GenerationStep,
    InstallDeps,
    MakeDirs,
    RunExternal,
    SetScripts,
    WriteFile,
)


class PlanRunner:
    """Runs plan steps through a ``CommandExecutor``."""

    def __init__(self, executor: CommandExecutor, package_manager: PackageManager) -> None:
        self.executor = executor
        self.package_manager = package_manager

    async def run(self, plan: GenerationPlan, cwd: str | Path) -> GenerationManifest:
        """Execute every step of *plan* in *cwd*.

        Returns:
            A manifest of the directories, files and commands produced.
        """
        root = Path(cwd)
        manifest = GenerationManifest(generator=plan.generator, cwd=str(root))
        for step in plan.steps:
            await self._run_step(step, root, manifest)
        return manifest

    async def _run_step(
        self, step: GenerationStep, root: Path, manifest: GenerationManifest
    ) -> None:
        if isinstance(step, MakeDirs):
            for rel in step.paths:
                await asyncio.to_thread(_make_dir, root / rel, step.stage)
            manifest.directories.extend(step.paths)
        elif isinstance(step, WriteFile):
            await asyncio.to_thread(_write_file, root / step.path, step.content, step.stage)
            manifest.files.append(step.path)
        elif isinstance(step, RunExternal):
            await self._run_external(step.program, step.args, root, step.stage)
            manifest.commands.append(step.command_line)
        elif isinstance(step, InstallDeps):
            if not step.packages:
                return
            program, *args = add_command(self.package_manager, step.packages, dev=step.dev)
            kind = "dev dependencies" if step.dev else "dependencies"
            print_info(f"Installing {kind}: {', '.join(step.packages)}")
            await self._run_external(program, args, root, step.stage)
            manifest.commands.append(" ".join([program, *args]))
        elif isinstance(step, SetScripts):
            await asyncio.to_thread(
                _set_scripts, root / step.manifest, step.scripts, step.stage
            )
            if step.manifest not in manifest.files:
                manifest.files.append(step.manifest)
        else:
            raise TypeError(f"Unknown generation step: {step!r}")

    async def _run_external(
        self, program: str, args: list[str], cwd: Path, stage: str
    ) -> None:
        command = " ".join([program, *args])
        print_info(f"Running: {command}")
        result = await self.executor.run(program, args, cwd)
        if not result.ok:
            detail = f"\n{result.stderr}" if result.stderr else ""
            raise ExternalToolError(
                f"Command failed (exit {result.returncode}) during {stage}: {command}{detail}",
                stage=stage,
                command=command,
                returncode=result.returncode,
                stderr=result.stderr,
            )


# ---------------------------------------------------------------------------
# Synchronous filesystem helpers (run in a worker thread)
# ---------------------------------------------------------------------------


def _make_dir(path: Path, stage: str) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FilesystemError(f"Failed to create directory {path}: {exc}", stage=stage, path=path) from exc


def _write_file(path: Path, content: str, stage: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise FilesystemError(f"Failed to write {path}: {exc}", stage=stage, path=path) from exc


def _set_scripts(path: Path, scripts: dict[str, str], stage: str) -> None:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise FilesystemError(f"Cannot read package manifest {path}: {exc}", stage=stage, path=path) from exc
    if not isinstance(data, dict):
        raise FilesystemError(f"Package manifest {path} is not a JSON object", stage=stage, path=path)

    data["scripts"] = dict(scripts)
    try:
        path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        raise FilesystemError(f"Failed to write {path}: {exc}", stage=stage, path=path) from exc
