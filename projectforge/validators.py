"""Pure validation of user-supplied project names, types and paths.

Nothing here touches the filesystem except :func:`validate_base_path`, which
only inspects it.
"""

from __future__ import annotations

import re
from pathlib import Path

from projectforge.errors import InputValidationError
from projectforge.models import PROJECT_TYPE_ALIASES, ProjectType

NAME_PATTERN = re.compile(r"^[a-z]([a-z0-9-]*[a-z0-9])?$")

_UPPERCASE = re.compile(r"[A-Z]")
_ALLOWED_CHARS = re.compile(r"^[a-z0-9-]+$")


def check_name(name: str) -> str | None:
    """Return the reason *name* is rejected, or ``None`` if it is valid.

    Checks run in a fixed order and stop at the first failure:

    1. non-empty after trimming
    2. no uppercase letters
    3. only lowercase letters, digits and hyphens
    4. starts with a lowercase letter
    5. does not start or end with a hyphen
    """
    if not name or not name.strip():
        return "Project name cannot be empty."
    if _UPPERCASE.search(name):
        return "Project name cannot contain capital letters. Please use lowercase only."
    if not _ALLOWED_CHARS.fullmatch(name):
        return "Project name can only contain lowercase letters, numbers, and hyphens."
    if not name[0].islower():
        return "Project name must start with a lowercase letter."
    if name.startswith("-") or name.endswith("-"):
        return "Project name cannot start or end with a hyphen."
    return None


def validate_name(name: str) -> str:
    """Return *name* unchanged if valid.

    Raises:
        InputValidationError: With the first failing check's reason.
    """
    reason = check_name(name)
    if reason is not None:
        raise InputValidationError(reason)
    return name


def validate_type(value: str) -> ProjectType:
    """Map a user-supplied type string to a :class:`ProjectType`.

    Accepts ``nextjs``/``frontend``, ``nodejs``/``backend`` and ``both``.
    Anything else is rejected rather than defaulted.
    """
    if isinstance(value, ProjectType):
        return value
    project_type = PROJECT_TYPE_ALIASES.get(value)
    if project_type is None:
        raise InputValidationError(
            f"Invalid project type: '{value}'. "
            "Choose one of: nextjs (frontend), nodejs (backend), both."
        )
    return project_type


def validate_base_path(path: str | Path) -> Path:
    """Return *path* as a ``Path`` if it is an existing directory."""
    base = Path(path)
    if not base.is_dir():
        raise InputValidationError(f"Base path is not an existing directory: {base}")
    return base
