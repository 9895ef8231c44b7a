"""Node.js (Express) backend generator."""

from __future__ import annotations

from projectforge.config import ProjectConfig
from projectforge.packages import init_command

from .base import Generator
from .plan import GenerationPlan, InstallDeps, MakeDirs, RunExternal, SetScripts, WriteFile

BACKEND_DIRECTORIES: list[str] = [
    "src",
    "src/controllers",
    "src/models",
    "src/routes",
    "src/middleware",
    "src/services",
    "src/utils",
    "src/types",
    "src/config",
    "tests",
    "tests/unit",
    "tests/integration",
    "docs",
    "logs",
]

SOURCE_PLACEHOLDERS: list[str] = [
    "src/app",
    "src/server",
    "src/routes/index",
    "src/controllers/index",
    "src/middleware/index",
    "src/config/database",
    "src/config/app",
    "src/types/index",
    "src/utils/logger",
    "tests/setup",
]

DEPENDENCIES: list[str] = ["express", "cors", "helmet", "morgan", "dotenv", "winston"]
DEV_DEPENDENCIES: list[str] = ["nodemon", "jest", "supertest", "@types/node"]

TYPESCRIPT_DEPENDENCIES: list[str] = ["reflect-metadata"]
TYPESCRIPT_DEV_DEPENDENCIES: list[str] = [
    "typescript",
    "@types/express",
    "@types/cors",
    "@types/morgan",
    "ts-node",
    "ts-node-dev",
]

TYPESCRIPT_SCRIPTS: dict[str, str] = {
    "start": "node dist/server.js",
    "dev": "ts-node-dev --respawn --transpile-only src/server.ts",
    "build": "tsc",
    "test": "jest",
    "test:watch": "jest --watch",
    "lint": "eslint src/**/*.ts",
}

JAVASCRIPT_SCRIPTS: dict[str, str] = {
    "start": "node src/server.js",
    "dev": "nodemon src/server.js",
    "test": "jest",
    "test:watch": "jest --watch",
}


class BackendGenerator(Generator):
    """Initialises a Node.js API project and installs its base dependencies."""

    kind = "backend"

    def build_plan(self, config: ProjectConfig) -> GenerationPlan:
        program, *args = init_command(config.package_manager)
        ext = ".ts" if config.use_typescript else ".js"

        steps: list = [
            RunExternal(stage="init-package", program=program, args=args),
            MakeDirs(paths=list(BACKEND_DIRECTORIES)),
        ]
        steps.extend(
            WriteFile(stage="write-sources", path=f"{stem}{ext}") for stem in SOURCE_PLACEHOLDERS
        )
        steps.extend([
            WriteFile(stage="write-sources", path="docs/README.md"),
            WriteFile(
                stage="write-config",
                path=".env.example",
                content=self.renderer.render("backend/env.example.j2"),
            ),
            WriteFile(
                stage="write-config",
                path=".gitignore",
                content=self.renderer.render("backend/gitignore.j2"),
            ),
        ])

        dependencies = list(DEPENDENCIES)
        dev_dependencies = list(DEV_DEPENDENCIES)
        if config.use_typescript:
            dependencies += TYPESCRIPT_DEPENDENCIES
            dev_dependencies += TYPESCRIPT_DEV_DEPENDENCIES
            steps.append(
                WriteFile(
                    stage="write-config",
                    path="tsconfig.json",
                    content=self.renderer.render("backend/tsconfig.json.j2"),
                )
            )

        steps.extend([
            InstallDeps(packages=dependencies),
            InstallDeps(stage="install-dev-dependencies", packages=dev_dependencies, dev=True),
            SetScripts(
                scripts=dict(TYPESCRIPT_SCRIPTS if config.use_typescript else JAVASCRIPT_SCRIPTS)
            ),
        ])

        return GenerationPlan(generator=self.kind, steps=steps)
