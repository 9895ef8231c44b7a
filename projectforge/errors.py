"""Exception hierarchy for ProjectForge.

Every error carries the ``stage`` it was raised in so the CLI can report
which step failed.  Errors raised once a project directory exists are routed
through the rollback coordinator before the process exits.
"""

from __future__ import annotations

from pathlib import Path


class ScaffoldError(Exception):
    """Base class for every error raised while scaffolding a project."""

    def __init__(self, message: str, stage: str = "") -> None:
        self.stage = stage
        super().__init__(message)


class InputValidationError(ScaffoldError):
    """Raised for a bad project name, type or base path.

    Recoverable by asking the user again; nothing on disk has been touched.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message, stage="validation")


class PrerequisiteMissingError(ScaffoldError):
    """Raised when a required runtime (Node.js) cannot be found."""

    def __init__(self, message: str, tool: str = "") -> None:
        self.tool = tool
        super().__init__(message, stage="prerequisites")


class DirectoryConflictError(ScaffoldError):
    """Raised when the target directory exists and overwrite was not confirmed."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(
            f"Project directory already exists: {self.path}", stage="create-directory"
        )


class ExternalToolError(ScaffoldError):
    """Raised when an external command exits nonzero, times out, or is missing."""

    def __init__(
        self,
        message: str,
        stage: str = "",
        command: str = "",
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message, stage=stage)


class FilesystemError(ScaffoldError):
    """Raised when creating, writing or deleting a path fails."""

    def __init__(self, message: str, stage: str = "", path: str | Path | None = None) -> None:
        self.path = Path(path) if path is not None else None
        super().__init__(message, stage=stage)


class SummaryWriteError(FilesystemError):
    """Raised when the composite README cannot be written.

    Both sub-projects are already committed at that point, so this error is
    reported but never rolled back.
    """
