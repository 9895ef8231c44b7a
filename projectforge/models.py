"""Enumerations shared across ProjectForge."""

from __future__ import annotations

from enum import Enum


class ProjectType(str, Enum):
    """Kind of project to scaffold."""
    FRONTEND = "frontend"
    BACKEND = "backend"
    BOTH = "both"

    @property
    def label(self) -> str:
        """Human-readable description used in menus and summaries."""
        return _PROJECT_TYPE_LABELS[self]


_PROJECT_TYPE_LABELS: dict[ProjectType, str] = {
    ProjectType.FRONTEND: "Next.js (Frontend React Framework)",
    ProjectType.BACKEND: "Node.js (Backend API Server)",
    ProjectType.BOTH: "Both (Full-stack with Next.js + Node.js)",
}

# Alternate spellings accepted on the command line.
PROJECT_TYPE_ALIASES: dict[str, ProjectType] = {
    "nextjs": ProjectType.FRONTEND,
    "frontend": ProjectType.FRONTEND,
    "nodejs": ProjectType.BACKEND,
    "backend": ProjectType.BACKEND,
    "both": ProjectType.BOTH,
}


class PackageManager(str, Enum):
    """Supported JavaScript package managers."""
    YARN = "yarn"
    PNPM = "pnpm"
    NPM = "npm"
