"""Common interface for project generators."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from projectforge.config import ProjectConfig
from projectforge.executor import CommandExecutor

from .plan import GenerationManifest, GenerationPlan
from .runner import PlanRunner
from .templates import TemplateRenderer


class Generator(ABC):
    """Builds and runs the ``GenerationPlan`` for one kind of project.

    Subclasses only describe *what* to create (:meth:`build_plan`); running
    the plan and reporting the failing stage is shared.  A generator never
    cleans up after a failure, that is the rollback coordinator's job.
    """

    kind: str = ""

    def __init__(
        self,
        executor: CommandExecutor,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.executor = executor
        self.renderer = renderer or TemplateRenderer()

    @abstractmethod
    def build_plan(self, config: ProjectConfig) -> GenerationPlan:
        """Return the steps for *config*.  Must not touch the filesystem."""

    async def generate(self, cwd: str | Path, config: ProjectConfig) -> GenerationManifest:
        """Run this generator's plan inside *cwd*.

        Raises:
            ExternalToolError: An external command exited nonzero.
            FilesystemError: A directory or file could not be written.
        """
        plan = self.build_plan(config)
        runner = PlanRunner(self.executor, config.package_manager)
        return await runner.run(plan, cwd)
