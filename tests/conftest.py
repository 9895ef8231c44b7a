"""Shared pytest fixtures for the ProjectForge test suite.

Provides reusable fixtures for:
- Temporary base directories
- ProjectConfig factories
- A fake CommandExecutor that records calls instead of running npm/yarn/pnpm
"""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from projectforge.config import ProjectConfig
from projectforge.executor import CommandResult
from projectforge.models import PackageManager, ProjectType


# ---------------------------------------------------------------------------
# Fake executor
# ---------------------------------------------------------------------------


class FakeExecutor:
    """Records every command and imitates the side effects generators rely on.

    * ``<pm> init`` writes a minimal ``package.json`` into the cwd.
    * ``create-next-app`` writes ``package.json`` and an ``app/`` directory.
    * ``fail_when(predicate)`` makes matching commands exit nonzero.
    """

    def __init__(self, available: set[str] | None = None) -> None:
        self.available = available if available is not None else {"node", "npm", "npx"}
        self.calls: list[tuple[str, list[str], Path]] = []
        self.node_version = "v20.11.0"
        self._failures: list[tuple[Callable[[str, list[str], Path], bool], int, str]] = []
        self.before_run: Callable[[str, list[str], Path], None] | None = None

    def fail_when(
        self,
        predicate: Callable[[str, list[str], Path], bool],
        returncode: int = 1,
        stderr: str = "simulated failure",
    ) -> None:
        self._failures.append((predicate, returncode, stderr))

    def is_available(self, program: str) -> bool:
        return program in self.available

    async def run(self, program: str, args: list[str], cwd: Path) -> CommandResult:
        self.calls.append((program, list(args), Path(cwd)))
        if self.before_run is not None:
            self.before_run(program, args, Path(cwd))

        for predicate, returncode, stderr in self._failures:
            if predicate(program, args, Path(cwd)):
                return CommandResult(returncode=returncode, stderr=stderr)

        if program == "node" and args == ["--version"]:
            return CommandResult(returncode=0, stdout=self.node_version)
        if "init" in args:
            _write_package_json(Path(cwd), Path(cwd).name)
        if any("next-app" in a for a in [program, *args]):
            _write_package_json(Path(cwd), Path(cwd).name)
            (Path(cwd) / "app").mkdir(exist_ok=True)
        return CommandResult(returncode=0, stdout="ok")

    def command_lines(self) -> list[str]:
        return [" ".join([program, *args]) for program, args, _ in self.calls]


def _write_package_json(cwd: Path, name: str) -> None:
    manifest: dict[str, Any] = {
        "name": name,
        "version": "1.0.0",
        "scripts": {"test": 'echo "Error: no test specified" && exit 1'},
    }
    (cwd / "package.json").write_text(json.dumps(manifest, indent=2), encoding="utf-8")


@pytest.fixture
def fake_executor() -> FakeExecutor:
    """A fresh FakeExecutor with node and npm available."""
    return FakeExecutor()


# ---------------------------------------------------------------------------
# Paths & configs
# ---------------------------------------------------------------------------


@pytest.fixture
def base_dir(tmp_path: Path) -> Path:
    """Empty parent directory projects are created in."""
    base = tmp_path / "workspace"
    base.mkdir()
    return base


@pytest.fixture
def make_config(base_dir: Path) -> Callable[..., ProjectConfig]:
    """Factory for ProjectConfig instances rooted in ``base_dir``.

    Usage:
        config = make_config(ProjectType.BACKEND, use_typescript=False)
    """
    def factory(
        project_type: ProjectType = ProjectType.FRONTEND,
        name: str = "my-app",
        **overrides: Any,
    ) -> ProjectConfig:
        values: dict[str, Any] = {
            "type": project_type,
            "name": name,
            "base_path": base_dir,
            "package_manager": PackageManager.NPM,
        }
        values.update(overrides)
        return ProjectConfig(**values)

    return factory


@pytest.fixture
def snapshot_tree() -> Callable[[Path], dict[str, bytes | None]]:
    """Return a function mapping every path under a root to its bytes (``None`` for dirs)."""
    def snapshot(root: Path) -> dict[str, bytes | None]:
        return {
            p.relative_to(root).as_posix(): (None if p.is_dir() else p.read_bytes())
            for p in sorted(root.rglob("*"))
        }

    return snapshot
