"""ProjectForge -- scaffolds Next.js frontends, Node.js backends, or both.

Quick usage::

    from projectforge import ProjectConfig, ProjectType, Scaffolder

    config = ProjectConfig(type=ProjectType.BOTH, name="my-app", base_path=".")
    result = await Scaffolder(config).run()
"""

from projectforge.config import ProjectConfig, Settings
from projectforge.models import PackageManager, ProjectType
from projectforge.orchestrator import ScaffoldResult, Scaffolder

__version__ = "1.0.0"

__all__ = [
    "PackageManager",
    "ProjectConfig",
    "ProjectType",
    "ScaffoldResult",
    "Scaffolder",
    "Settings",
    "__version__",
]
