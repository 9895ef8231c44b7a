"""ProjectForge configuration.

``ProjectConfig`` is the immutable, validated description of a single
scaffolding run.  ``Settings`` carries user defaults that can come from the
environment and are overridden by command-line flags.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from projectforge.errors import InputValidationError
from projectforge.models import PackageManager, ProjectType
from projectforge.validators import check_name, validate_type

_FALSE_VALUES = {"0", "false", "no", "off"}


class ProjectConfig(BaseModel):
    """Everything needed to scaffold one project.

    Constructed once from validated input and passed explicitly to every
    component.  The model is frozen: nothing downstream may mutate it.
    """

    model_config = ConfigDict(frozen=True)

    type: ProjectType = Field(..., description="frontend, backend or both")
    name: str = Field(..., description="Project directory name")
    base_path: Path = Field(default=Path("."), description="Existing parent directory")
    package_manager: PackageManager = Field(default=PackageManager.NPM)
    use_typescript: bool = Field(default=True)
    use_stylesheets: bool = Field(default=True, description="Generate SCSS partials")

    @field_validator("type", mode="before")
    @classmethod
    def _parse_type(cls, value: Any) -> ProjectType:
        if isinstance(value, str):
            try:
                return validate_type(value)
            except InputValidationError as exc:
                raise ValueError(str(exc)) from exc
        return value

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        reason = check_name(value)
        if reason is not None:
            raise ValueError(reason)
        return value

    @field_validator("base_path")
    @classmethod
    def _check_base_path(cls, value: Path) -> Path:
        if not value.is_dir():
            raise ValueError(f"Base path is not an existing directory: {value}")
        return value

    @property
    def project_path(self) -> Path:
        """Directory the project is created in."""
        return self.base_path / self.name


class Settings(BaseModel):
    """User defaults for the CLI.

    Every field can be provided through a ``PROJECTFORGE_*`` environment
    variable (see :meth:`from_env`); explicit flags always win.
    """

    default_path: Path = Field(default=Path("."))
    prefer_yarn: bool = Field(default=False)
    prefer_pnpm: bool = Field(default=False)
    use_typescript: bool = Field(default=True)
    use_stylesheets: bool = Field(default=True)
    command_timeout: Optional[float] = Field(
        default=None, gt=0, description="Per-command timeout in seconds; None waits forever"
    )
    stream_output: bool = Field(
        default=True, description="Show package-manager output instead of capturing it"
    )

    @classmethod
    def from_env(cls) -> "Settings":
        """Build ``Settings`` from environment variables.

        Recognised variables (all optional):
            PROJECTFORGE_PATH, PROJECTFORGE_PACKAGE_MANAGER (yarn|pnpm),
            PROJECTFORGE_TYPESCRIPT, PROJECTFORGE_SCSS,
            PROJECTFORGE_COMMAND_TIMEOUT, PROJECTFORGE_STREAM_OUTPUT.

        Raises:
            ValueError: A variable holds a value that cannot be used (a
                pydantic ``ValidationError`` is a ``ValueError`` too).
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("PROJECTFORGE_PATH"):
            kwargs["default_path"] = Path(os.environ["PROJECTFORGE_PATH"])

        manager = os.environ.get("PROJECTFORGE_PACKAGE_MANAGER", "").strip().lower()
        if manager == PackageManager.YARN.value:
            kwargs["prefer_yarn"] = True
        elif manager == PackageManager.PNPM.value:
            kwargs["prefer_pnpm"] = True

        if os.environ.get("PROJECTFORGE_TYPESCRIPT"):
            kwargs["use_typescript"] = _env_flag("PROJECTFORGE_TYPESCRIPT")
        if os.environ.get("PROJECTFORGE_SCSS"):
            kwargs["use_stylesheets"] = _env_flag("PROJECTFORGE_SCSS")
        raw_timeout = os.environ.get("PROJECTFORGE_COMMAND_TIMEOUT", "").strip()
        if raw_timeout:
            try:
                kwargs["command_timeout"] = float(raw_timeout)
            except ValueError:
                raise ValueError(
                    f"PROJECTFORGE_COMMAND_TIMEOUT must be a number of seconds, got {raw_timeout!r}"
                ) from None
        if os.environ.get("PROJECTFORGE_STREAM_OUTPUT"):
            kwargs["stream_output"] = _env_flag("PROJECTFORGE_STREAM_OUTPUT")

        return cls(**kwargs)


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() not in _FALSE_VALUES
