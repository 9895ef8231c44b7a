"""Creation, commit and rollback of project directories.

A ``DirectoryHandle`` is the unit of rollback: it records the directory
this run created (plus any parent directories it had to create on the way)
and moves through ``planned -> created -> committed`` or
``created -> rolled_back``.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from projectforge.errors import DirectoryConflictError, FilesystemError
from projectforge.utils import print_info, print_warning


class DirectoryStatus(str, Enum):
    """Lifecycle state of a ``DirectoryHandle``."""
    PLANNED = "planned"
    CREATED = "created"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


@dataclass
class DirectoryHandle:
    """A directory created by the current run."""

    path: Path
    status: DirectoryStatus = DirectoryStatus.PLANNED
    created_parents: list[Path] = field(default_factory=list)


class LifecycleManager:
    """Owns the project directories created during one run."""

    def begin_project(
        self, base_path: str | Path, name: str, overwrite: bool = False
    ) -> DirectoryHandle:
        """Create ``base_path/name`` and return a handle in ``created`` state.

        Args:
            base_path: Parent directory.
            name: Project directory name.
            overwrite: Remove an existing target first.  Without it an
                existing target is left untouched.

        Raises:
            DirectoryConflictError: Target exists and *overwrite* is false.
            FilesystemError: Removing or creating the directory failed.  Any
                parent directory created before the failure is removed again.
            KeyboardInterrupt: Interrupted while creating; partial parents
                are removed as well.
        """
        handle = DirectoryHandle(path=Path(base_path) / name)
        target = handle.path

        if path_occupied(target):
            if not overwrite:
                raise DirectoryConflictError(target)
            print_warning(f"Removing existing project directory: {target}")
            _remove_path(target, stage="create-directory")

        missing: list[Path] = []
        current = target
        while not current.exists():
            missing.append(current)
            if current.parent == current:
                break
            current = current.parent
        missing.reverse()

        created: list[Path] = []
        try:
            for directory in missing:
                directory.mkdir()
                created.append(directory)
        except BaseException as exc:
            # Also covers an interrupt between two mkdir calls.
            for directory in reversed(created):
                try:
                    directory.rmdir()
                except OSError as cleanup_exc:
                    print_warning(f"Could not remove {directory}: {cleanup_exc}")
            if not isinstance(exc, OSError):
                raise
            raise FilesystemError(
                f"Failed to create project directory {target}: {exc}",
                stage="create-directory",
                path=target,
            ) from exc

        handle.created_parents = created[:-1]
        handle.status = DirectoryStatus.CREATED
        return handle

    def commit(self, handle: DirectoryHandle) -> None:
        """Mark *handle* committed.  Committed handles are never rolled back."""
        if handle.status is DirectoryStatus.CREATED:
            handle.status = DirectoryStatus.COMMITTED

    def rollback(self, handle: DirectoryHandle) -> bool:
        """Delete everything *handle* created.

        Idempotent: a handle that was never created, was already rolled back,
        or whose directory is already gone is a no-op.  Committed handles are
        left alone.  A failure while deleting is reported as a warning and
        does not raise, so it never masks the error that caused the rollback.

        Returns:
            ``True`` if the directory no longer exists afterwards.
        """
        if handle.status in (DirectoryStatus.PLANNED, DirectoryStatus.ROLLED_BACK):
            return not handle.path.exists()
        if handle.status is DirectoryStatus.COMMITTED:
            return False

        try:
            _remove_path(handle.path)
        except FilesystemError as exc:
            print_warning(f"Rollback incomplete: {exc}")
            return False

        for parent in reversed(handle.created_parents):
            if parent.is_dir() and not any(parent.iterdir()):
                try:
                    parent.rmdir()
                except OSError as exc:
                    print_warning(f"Could not remove {parent}: {exc}")

        handle.status = DirectoryStatus.ROLLED_BACK
        print_info(f"Cleaned up failed project directory: {handle.path}")
        return True


def path_occupied(path: Path) -> bool:
    """Return ``True`` if anything, even a dangling symlink, sits at *path*."""
    return path.exists() or path.is_symlink()


def _remove_path(path: Path, stage: str = "rollback") -> None:
    """Remove a file, symlink or directory tree; an absent path is fine."""
    try:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink()
    except FileNotFoundError:
        return
    except OSError as exc:
        raise FilesystemError(f"Failed to remove {path}: {exc}", stage=stage, path=path) from exc
