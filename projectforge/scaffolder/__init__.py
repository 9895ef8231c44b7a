"""ProjectForge scaffolder -- turns a ``ProjectConfig`` into a project tree.

Generators describe their work as a ``GenerationPlan`` (pure data) which a
``PlanRunner`` executes inside an explicit working directory.  The
``CompositeOrchestrator`` chains the backend and frontend generators for
full-stack projects.

Quick usage::

    from projectforge.executor import SubprocessExecutor
    from projectforge.scaffolder import FrontendGenerator

    generator = FrontendGenerator(SubprocessExecutor())
    plan = generator.build_plan(config)           # inspect without side effects
    manifest = await generator.generate("/tmp/my-app", config)
"""

from projectforge.scaffolder.backend import BackendGenerator
from projectforge.scaffolder.base import Generator
from projectforge.scaffolder.composite import CompositeOrchestrator, CompositeState
from projectforge.scaffolder.frontend import FrontendGenerator
from projectforge.scaffolder.plan import (
    GenerationManifest,
    GenerationPlan,
    InstallDeps,
    MakeDirs,
    RunExternal,
    SetScripts,
    WriteFile,
)
from projectforge.scaffolder.runner import PlanRunner
from projectforge.scaffolder.templates import TemplateRenderer

__all__ = [
    "BackendGenerator",
    "CompositeOrchestrator",
    "CompositeState",
    "FrontendGenerator",
    "GenerationManifest",
    "GenerationPlan",
    "Generator",
    "InstallDeps",
    "MakeDirs",
    "PlanRunner",
    "RunExternal",
    "SetScripts",
    "TemplateRenderer",
    "WriteFile",
]
