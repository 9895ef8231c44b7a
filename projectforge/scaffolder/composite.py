"""Full-stack ("both") scaffolding: backend and frontend under one root.

The two sub-projects form a single transaction.  If either generator fails,
the orchestrator moves to ``FAILED`` and re-raises; the caller's rollback
coordinator then removes the whole root, including a backend that had
already been generated.  Only after both succeed is the root committed and
the summary README written.
"""

from __future__ import annotations

import asyncio
from enum import Enum
from pathlib import Path

from projectforge.config import ProjectConfig
from projectforge.errors import FilesystemError, SummaryWriteError
from projectforge.lifecycle import DirectoryHandle, LifecycleManager
from projectforge.packages import install_command, script_command
from projectforge.utils import print_info, print_success, print_warning

from .base import Generator
from .plan import GenerationManifest
from .templates import TemplateRenderer

BACKEND_DIR = "backend"
FRONTEND_DIR = "frontend"
SUMMARY_FILE = "README.md"

# Documented in the README only; nothing enforces them.
FRONTEND_PORT = 3000
BACKEND_PORT = 3001


class CompositeState(str, Enum):
    """Progress of a full-stack scaffold."""
    INIT = "init"
    BACKEND_RUNNING = "backend_running"
    BACKEND_DONE = "backend_done"
    FRONTEND_RUNNING = "frontend_running"
    FRONTEND_DONE = "frontend_done"
    FINALIZED = "finalized"
    FAILED = "failed"


class CompositeOrchestrator:
    """Runs the backend then the frontend generator inside one root handle."""

    def __init__(
        self,
        backend: Generator,
        frontend: Generator,
        lifecycle: LifecycleManager,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.backend = backend
        self.frontend = frontend
        self.lifecycle = lifecycle
        self.renderer = renderer or TemplateRenderer()
        self.state = CompositeState.INIT
        self.history: list[CompositeState] = [CompositeState.INIT]

    def _transition(self, state: CompositeState) -> None:
        self.state = state
        self.history.append(state)

    async def run(
        self, handle: DirectoryHandle, config: ProjectConfig
    ) -> list[GenerationManifest]:
        """Generate both sub-projects under ``handle.path``.

        Returns:
            The backend and frontend manifests, in that order.

        Raises:
            ExternalToolError, FilesystemError: A sub-generator failed; the
                root is *not* cleaned up here.
            SummaryWriteError: Both sub-projects succeeded and were committed
                but the README could not be written.
        """
        root = handle.path
        backend_dir = root / BACKEND_DIR
        frontend_dir = root / FRONTEND_DIR

        try:
            for subdir in (backend_dir, frontend_dir):
                await asyncio.to_thread(_make_subdir, subdir)
                print_success(f"Created {subdir.name} directory: {subdir}")

            self._transition(CompositeState.BACKEND_RUNNING)
            print_info("Setting up Node.js backend...")
            await self._checkpoint(root, backend_dir)
            backend_manifest = await self.backend.generate(backend_dir, config)
            self._transition(CompositeState.BACKEND_DONE)

            self._transition(CompositeState.FRONTEND_RUNNING)
            print_info("Setting up Next.js frontend...")
            await self._checkpoint(root, frontend_dir)
            frontend_manifest = await self.frontend.generate(frontend_dir, config)
            self._transition(CompositeState.FRONTEND_DONE)
        except BaseException:
            self._transition(CompositeState.FAILED)
            raise

        self.lifecycle.commit(handle)
        await self._write_summary(root, config)
        self._transition(CompositeState.FINALIZED)
        return [backend_manifest, frontend_manifest]

    async def _checkpoint(self, root: Path, expected: Path) -> None:
        """Make sure *expected* is an existing directory inside *root*.

        A missing working directory is recreated with a warning rather than
        failing the whole run.
        """
        if root.resolve() not in expected.resolve().parents:
            raise FilesystemError(
                f"Working directory {expected} is outside project root {root}",
                stage=self.state.value,
                path=expected,
            )
        if not expected.is_dir():
            print_warning(f"Expected working directory is missing, recreating: {expected}")
            await asyncio.to_thread(_make_subdir, expected)

    async def _write_summary(self, root: Path, config: ProjectConfig) -> None:
        content = self.renderer.render(
            "README.md.j2",
            {
                "project_name": config.name,
                "install_command": install_command(config.package_manager),
                "dev_command": script_command(config.package_manager, "dev"),
                "frontend_port": FRONTEND_PORT,
                "backend_port": BACKEND_PORT,
            },
        )
        target = root / SUMMARY_FILE
        try:
            await asyncio.to_thread(target.write_text, content, "utf-8")
        except OSError as exc:
            raise SummaryWriteError(
                f"Both projects were created but {SUMMARY_FILE} could not be written: {exc}",
                stage="write-summary",
                path=target,
            ) from exc


def _make_subdir(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FilesystemError(f"Failed to create directory {path}: {exc}", stage="create-subprojects", path=path) from exc
