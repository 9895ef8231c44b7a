"""Next.js frontend generator."""

from __future__ import annotations

from projectforge.config import ProjectConfig
from projectforge.packages import bootstrap_command

from .base import Generator
from .plan import GenerationPlan, MakeDirs, RunExternal, WriteFile

FRONTEND_DIRECTORIES: list[str] = [
    "components/ui",
    "components/forms",
    "components/layout",
    "hooks",
    "utils",
    "types",
    "constants",
    "services",
    "styles",
    "public/images",
    "public/icons",
]

# Partials first; globals.scss imports them in this order.
STYLE_PARTIALS: list[str] = ["variables", "mixins", "components"]

COMPONENT_PLACEHOLDERS: list[str] = [
    "components/layout/Header",
    "components/layout/Footer",
    "components/layout/Layout",
    "components/ui/Button",
    "components/ui/Card",
]

UTILITY_PLACEHOLDERS: list[str] = [
    "utils/helpers",
    "utils/validation",
    "types/index",
    "constants/config",
]


class FrontendGenerator(Generator):
    """Bootstraps a Next.js app with ``create-next-app`` and adds a folder layout."""

    kind = "frontend"

    def build_plan(self, config: ProjectConfig) -> GenerationPlan:
        program, *args = bootstrap_command(
            config.package_manager, config.use_typescript, config.use_stylesheets
        )
        steps: list = [
            RunExternal(stage="bootstrap-nextjs", program=program, args=args),
            MakeDirs(paths=list(FRONTEND_DIRECTORIES)),
        ]

        if config.use_stylesheets:
            for partial in STYLE_PARTIALS:
                steps.append(
                    WriteFile(
                        stage="write-stylesheets",
                        path=f"styles/{partial}.scss",
                        content=self.renderer.render(f"frontend/styles/{partial}.scss.j2"),
                    )
                )
            steps.append(
                WriteFile(
                    stage="write-stylesheets",
                    path="styles/globals.scss",
                    content=self.renderer.render("frontend/styles/globals.scss.j2"),
                )
            )

        component_ext = ".tsx" if config.use_typescript else ".jsx"
        module_ext = ".ts" if config.use_typescript else ".js"
        steps.extend(
            WriteFile(stage="write-components", path=f"{stem}{component_ext}")
            for stem in COMPONENT_PLACEHOLDERS
        )
        steps.extend(
            WriteFile(stage="write-utilities", path=f"{stem}{module_ext}")
            for stem in UTILITY_PLACEHOLDERS
        )

        return GenerationPlan(generator=self.kind, steps=steps)
