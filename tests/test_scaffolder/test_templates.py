"""Unit tests for the Jinja2 TemplateRenderer."""

from __future__ import annotations

import json
from pathlib import Path

import jinja2
import pytest

from projectforge.scaffolder.templates import TemplateRenderer


@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


class TestBundledTemplates:
    @pytest.mark.unit
    def test_unknown_template_is_an_error(self, renderer):
        with pytest.raises(jinja2.TemplateNotFound):
            renderer.render("backend/nope.j2")

    @pytest.mark.unit
    def test_globals_imports_partials_in_order(self, renderer):
        content = renderer.render("frontend/styles/globals.scss.j2")
        imports = [line for line in content.splitlines() if line.startswith("@import")]
        assert imports == ["@import 'variables';", "@import 'mixins';", "@import 'components';"]

    @pytest.mark.unit
    def test_tsconfig_is_valid_json(self, renderer):
        data = json.loads(renderer.render("backend/tsconfig.json.j2"))
        assert data["compilerOptions"]["outDir"] == "./dist"
        assert data["compilerOptions"]["rootDir"] == "./src"

    @pytest.mark.unit
    def test_gitignore_ignores_dependencies_and_env(self, renderer):
        lines = renderer.render("backend/gitignore.j2").splitlines()
        assert "node_modules/" in lines
        assert ".env" in lines

    @pytest.mark.unit
    def test_readme(self, renderer):
        content = renderer.render(
            "README.md.j2",
            {
                "project_name": "my-stack",
                "install_command": "pnpm install",
                "dev_command": "pnpm dev",
                "frontend_port": 3000,
                "backend_port": 3001,
            },
        )
        assert content.startswith("# my-stack\n")
        assert "cd frontend\npnpm install\npnpm dev" in content
        assert "http://localhost:3000" in content
        assert "http://localhost:3001" in content
        assert content.endswith("\n")

    @pytest.mark.unit
    def test_missing_variable_is_an_error(self, renderer):
        with pytest.raises(jinja2.UndefinedError):
            renderer.render("README.md.j2", {"project_name": "x"})


class TestCustomTemplateDir:
    @pytest.mark.unit
    def test_custom_directory(self, tmp_path: Path):
        (tmp_path / "hello.txt.j2").write_text("Hello {{ name }}!\n")
        renderer = TemplateRenderer(tmp_path)
        assert renderer.render("hello.txt.j2", {"name": "forge"}) == "Hello forge!\n"
