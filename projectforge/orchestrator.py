"""Top-level scaffolding transaction.

``Scaffolder`` checks prerequisites, creates the project root through the
``LifecycleManager``, dispatches to the generator(s) for the project type
and guarantees that a root created by this run is either committed or
rolled back -- including when the run is interrupted.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Protocol

from pydantic import BaseModel, Field

from projectforge.config import ProjectConfig
from projectforge.executor import CommandExecutor, SubprocessExecutor
from projectforge.lifecycle import DirectoryHandle, LifecycleManager
from projectforge.models import PackageManager, ProjectType
from projectforge.packages import check_runtime
from projectforge.rollback import RollbackCoordinator
from projectforge.scaffolder import (
    BackendGenerator,
    CompositeOrchestrator,
    FrontendGenerator,
    GenerationManifest,
    Generator,
    TemplateRenderer,
)
from projectforge.utils import print_info, print_success


class ScaffoldResult(BaseModel):
    """Outcome of a successful run."""

    project_path: Path
    project_type: ProjectType
    package_manager: PackageManager
    runtime_version: Optional[str] = None
    manifests: list[GenerationManifest] = Field(default_factory=list)
    summary_written: bool = False


class ProjectBuilder(Protocol):
    """Anything that can fill a created root handle for a config."""

    async def run(
        self, handle: DirectoryHandle, config: ProjectConfig
    ) -> list[GenerationManifest]:
        ...


class SingleProjectBuilder:
    """Runs one generator directly in the project root, then commits it."""

    def __init__(self, generator: Generator, lifecycle: LifecycleManager) -> None:
        self.generator = generator
        self.lifecycle = lifecycle

    async def run(
        self, handle: DirectoryHandle, config: ProjectConfig
    ) -> list[GenerationManifest]:
        manifest = await self.generator.generate(handle.path, config)
        self.lifecycle.commit(handle)
        return [manifest]


class Scaffolder:
    """Creates one project described by a ``ProjectConfig``.

    Attributes:
        config: The validated, immutable run configuration.
        executor: Runs every external command; swap in a fake for tests.
        lifecycle: Owns the project root handle.
        coordinator: Rolls the root back on any failure.
    """

    def __init__(
        self,
        config: ProjectConfig,
        executor: CommandExecutor | None = None,
        lifecycle: LifecycleManager | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.config = config
        self.executor = executor or SubprocessExecutor()
        self.lifecycle = lifecycle or LifecycleManager()
        self.renderer = renderer or TemplateRenderer()
        self.coordinator = RollbackCoordinator(self.lifecycle)
        self.handle: DirectoryHandle | None = None

    def builder_for(self, project_type: ProjectType) -> ProjectBuilder:
        """Return the builder that scaffolds *project_type*."""
        if project_type is ProjectType.FRONTEND:
            return SingleProjectBuilder(
                FrontendGenerator(self.executor, self.renderer), self.lifecycle
            )
        if project_type is ProjectType.BACKEND:
            return SingleProjectBuilder(
                BackendGenerator(self.executor, self.renderer), self.lifecycle
            )
        return CompositeOrchestrator(
            backend=BackendGenerator(self.executor, self.renderer),
            frontend=FrontendGenerator(self.executor, self.renderer),
            lifecycle=self.lifecycle,
            renderer=self.renderer,
        )

    async def run(
        self, overwrite: bool = False, check_prerequisites: bool = True
    ) -> ScaffoldResult:
        """Scaffold the project.

        Args:
            overwrite: Replace an existing project directory.
            check_prerequisites: Verify Node.js is installed before touching
                the filesystem.

        Raises:
            PrerequisiteMissingError: Node.js is missing; nothing was created.
            DirectoryConflictError: Target exists and *overwrite* is false.
            ExternalToolError, FilesystemError: A stage failed; the project
                root has been rolled back.
            SummaryWriteError: Full-stack projects were committed but the
                README could not be written.
        """
        runtime_version: str | None = None
        if check_prerequisites:
            runtime_version = await check_runtime(self.executor, self.config.base_path)
            print_info(f"Using Node.js version: {runtime_version}")

        handle = self.lifecycle.begin_project(
            self.config.base_path, self.config.name, overwrite=overwrite
        )
        self.handle = handle
        async with self.coordinator.guard(handle):
            print_success(f"Created project directory: {handle.path}")
            builder = self.builder_for(self.config.type)
            manifests = await builder.run(handle, self.config)

        return ScaffoldResult(
            project_path=handle.path,
            project_type=self.config.type,
            package_manager=self.config.package_manager,
            runtime_version=runtime_version,
            manifests=manifests,
            summary_written=self.config.type is ProjectType.BOTH,
        )
