"""Generation plans: the data half of scaffolding.

A ``GenerationPlan`` is an ordered list of steps.  Building one is pure;
only :mod:`projectforge.scaffolder.runner` executes them.  All paths are
relative to the working directory the plan is run in.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field


class MakeDirs(BaseModel):
    """Create directories (and their parents)."""
    kind: Literal["make_dirs"] = "make_dirs"
    stage: str = Field(default="create-directories")
    paths: list[str] = Field(default_factory=list)


class WriteFile(BaseModel):
    """Write *content* to *path*; an empty string creates a placeholder."""
    kind: Literal["write_file"] = "write_file"
    stage: str = Field(default="write-files")
    path: str
    content: str = ""


class RunExternal(BaseModel):
    """Run an external program to completion."""
    kind: Literal["run_external"] = "run_external"
    stage: str
    program: str
    args: list[str] = Field(default_factory=list)

    @property
    def command_line(self) -> str:
        return " ".join([self.program, *self.args])


class InstallDeps(BaseModel):
    """Install packages through the package manager's ``add`` command."""
    kind: Literal["install_deps"] = "install_deps"
    stage: str = Field(default="install-dependencies")
    packages: list[str] = Field(default_factory=list)
    dev: bool = False


class SetScripts(BaseModel):
    """Replace the ``scripts`` table of ``package.json``."""
    kind: Literal["set_scripts"] = "set_scripts"
    stage: str = Field(default="configure-scripts")
    manifest: str = Field(default="package.json")
    scripts: dict[str, str] = Field(default_factory=dict)


GenerationStep = Annotated[
    Union[MakeDirs, WriteFile, RunExternal, InstallDeps, SetScripts],
    Field(discriminator="kind"),
]


class GenerationPlan(BaseModel):
    """Ordered steps produced by a generator for one working directory."""

    generator: str = Field(..., description="'frontend' or 'backend'")
    steps: list[GenerationStep] = Field(default_factory=list)

    def directories(self) -> list[str]:
        """All directories the plan creates, in order."""
        return [p for step in self.steps if isinstance(step, MakeDirs) for p in step.paths]

    def files(self) -> list[str]:
        """All files the plan writes, in order."""
        return [step.path for step in self.steps if isinstance(step, WriteFile)]

    def file_content(self, path: str) -> str | None:
        """Content the plan writes to *path*, or ``None`` if it never does."""
        for step in self.steps:
            if isinstance(step, WriteFile) and step.path == path:
                return step.content
        return None


class GenerationManifest(BaseModel):
    """What a successful generation produced."""

    generator: str
    cwd: str
    directories: list[str] = Field(default_factory=list)
    files: list[str] = Field(default_factory=list)
    commands: list[str] = Field(default_factory=list)
