"""Command-line entry point.

Usage::

    projectforge                                  # fully interactive
    projectforge -t nextjs -p my-app              # direct mode
    projectforge -t both -p my-stack --pnpm --path ~/code
    python -m projectforge --help
"""

from __future__ import annotations

import argparse
import asyncio
import sys
import time
from pathlib import Path
from typing import NoReturn

from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm, Prompt

from projectforge.config import ProjectConfig, Settings
from projectforge.errors import InputValidationError, ScaffoldError, SummaryWriteError
from projectforge.executor import SubprocessExecutor
from projectforge.lifecycle import path_occupied
from projectforge.models import ProjectType
from projectforge.orchestrator import ScaffoldResult, Scaffolder
from projectforge.packages import install_command, resolve_package_manager, script_command
from projectforge.rollback import install_signal_handlers
from projectforge.utils import (
    console,
    format_duration,
    print_error,
    print_header,
    print_summary_table,
    print_warning,
)
from projectforge.validators import check_name, validate_base_path, validate_type

NAME_RULES = "Project names must be lowercase and contain only letters, numbers, and hyphens."
NAME_EXAMPLES = "Examples: myapp, myapi, blog-app, ecommerce-api"

_MENU: list[ProjectType] = [ProjectType.FRONTEND, ProjectType.BACKEND, ProjectType.BOTH]


class _ArgumentParser(argparse.ArgumentParser):
    """Exit with status 1 (not argparse's 2) on bad arguments."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="projectforge",
        description="ProjectForge -- scaffold a Next.js frontend, a Node.js backend, or both",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Project types:\n"
            "  nextjs | frontend   Next.js frontend application\n"
            "  nodejs | backend    Node.js backend API server\n"
            "  both                Full-stack with Next.js + Node.js\n"
            "\n"
            f"{NAME_RULES}\n"
            f"{NAME_EXAMPLES}\n"
            "\n"
            "Examples:\n"
            "  projectforge\n"
            "  projectforge -t nextjs -p myapp\n"
            "  projectforge -t both -p my-stack --pnpm --no-scss\n"
        ),
    )
    parser.add_argument("--type", "-t", dest="type", default=None, help="Project type")
    parser.add_argument("--name", "--project", "-p", dest="name", default=None, help="Project name")
    parser.add_argument("--path", default=None, help="Parent directory (default: current directory)")
    parser.add_argument("--yarn", action="store_true", help="Use Yarn if it is installed")
    parser.add_argument("--pnpm", action="store_true", help="Use pnpm if it is installed")
    parser.add_argument(
        "--no-typescript", dest="typescript", action="store_false", default=None,
        help="Disable TypeScript (default: enabled)",
    )
    parser.add_argument(
        "--no-scss", dest="scss", action="store_false", default=None,
        help="Disable SCSS (default: enabled)",
    )
    parser.add_argument(
        "--force", action="store_true",
        help="Replace an existing project directory without asking",
    )
    parser.add_argument(
        "--quiet", "-q", action="store_true",
        help="Hide package-manager output (shown only when a command fails)",
    )
    return parser


# ---------------------------------------------------------------------------
# Interactive prompts
# ---------------------------------------------------------------------------


def prompt_project_type() -> ProjectType:
    """Ask for a project type until a valid menu choice is entered."""
    console.print()
    console.print("[bold cyan]=== Choose Project Type ===[/bold cyan]")
    for index, project_type in enumerate(_MENU, start=1):
        console.print(f"{index}. {project_type.label}")
    console.print()

    while True:
        choice = Prompt.ask("Enter your choice (1, 2, or 3)").strip()
        if choice in {"1", "2", "3"}:
            return _MENU[int(choice) - 1]
        try:
            return validate_type(choice)
        except InputValidationError:
            print_error("Invalid choice. Please enter 1, 2, or 3.")


def prompt_project_name() -> str:
    """Ask for a project name until it passes validation."""
    console.print()
    console.print("[bold cyan]=== Project Name ===[/bold cyan]")
    console.print("Enter a name for your project.")
    console.print("Examples: myapp, myapi, myfullstack, blogapp, ecommerceapi")
    print_warning(f"Note: {NAME_RULES}")
    console.print()

    while True:
        name = Prompt.ask("Project name")
        reason = check_name(name)
        if reason is None:
            return name
        print_error(reason)


def confirm_overwrite(path: Path) -> bool:
    print_warning(f"Project directory already exists: {escape(str(path))}")
    return Confirm.ask("Do you want to remove it and create a new one?", default=False)


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


def print_banner() -> None:
    print_header("ProjectForge - Project Setup")
    console.print("[cyan]This tool will help you set up a new project.[/cyan]")
    console.print("[cyan]You can run it with parameters or interactively.[/cyan]")
    print_warning(f"Important: {NAME_RULES}")
    console.print(f"[cyan]{NAME_EXAMPLES}[/cyan]")


def print_completion(result: ScaffoldResult, elapsed: float) -> None:
    manager = result.package_manager
    install = install_command(manager)
    dev = script_command(manager, "dev")
    if result.project_type is ProjectType.BOTH:
        steps = [
            f"1. cd frontend && {install} && {dev}",
            f"2. cd backend && {install} && {dev}",
        ]
    else:
        steps = [f"1. {install}", f"2. {dev}"]

    body = "\n".join([
        f"[green]Your project has been created successfully at:[/green] {escape(str(result.project_path))}",
        f"[dim]Finished in {format_duration(elapsed)}[/dim]",
        "",
        "[bold cyan]Next steps:[/bold cyan]",
        *steps,
    ])
    console.print()
    console.print(Panel(body, title="Setup Complete!", border_style="green"))


def print_cleanup_help() -> None:
    console.print()
    console.print("[bold cyan]=== Cleanup Help ===[/bold cyan]")
    console.print("If a failed project directory was left behind, you can clean it up:")
    console.print("1. Remove the failed project folder manually")
    console.print("2. Run projectforge again with a valid project name")
    print_warning("Valid project names: lowercase letters, numbers, and hyphens only")


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``projectforge`` and ``python -m projectforge``."""
    args = build_parser().parse_args(argv)
    try:
        settings = Settings.from_env()
    except ValueError as exc:
        print_error(f"Invalid environment setting: {escape(str(exc))}")
        return 1
    print_banner()

    try:
        project_type = _resolve_type(args.type)
        name = _resolve_name(args.name)
    except (EOFError, KeyboardInterrupt):
        print_error("\nSetup cancelled.")
        return 1

    try:
        base_path = validate_base_path(args.path or settings.default_path)
    except InputValidationError as exc:
        print_error(f"Error: {escape(str(exc))}")
        return 1

    package_manager = resolve_package_manager(
        prefer_yarn=args.yarn or settings.prefer_yarn,
        prefer_pnpm=args.pnpm or settings.prefer_pnpm,
    )
    config = ProjectConfig(
        type=project_type,
        name=name,
        base_path=base_path,
        package_manager=package_manager,
        use_typescript=settings.use_typescript if args.typescript is None else args.typescript,
        use_stylesheets=settings.use_stylesheets if args.scss is None else args.scss,
    )

    print_summary_table(
        {
            "Project Type": config.type.label,
            "Project Name": config.name,
            "Project Path": str(config.base_path),
            "TypeScript": str(config.use_typescript),
            "SCSS": str(config.use_stylesheets),
            "Package Manager": config.package_manager.value,
        },
        title="Project Settings",
    )

    overwrite = args.force
    if path_occupied(config.project_path) and not overwrite:
        try:
            overwrite = confirm_overwrite(config.project_path)
        except (EOFError, KeyboardInterrupt):
            overwrite = False
        if not overwrite:
            print_error("Setup cancelled.")
            return 1

    install_signal_handlers()
    executor = SubprocessExecutor(
        timeout=settings.command_timeout,
        capture=args.quiet or not settings.stream_output,
    )
    scaffolder = Scaffolder(config, executor=executor)
    started = time.monotonic()
    try:
        result = asyncio.run(scaffolder.run(overwrite=overwrite))
    except SummaryWriteError as exc:
        print_warning(escape(str(exc)))
        print_warning(f"The frontend and backend projects are intact at {escape(str(config.project_path))}")
        return 1
    except ScaffoldError as exc:
        stage = f" during {exc.stage}" if exc.stage else ""
        print_error(f"Setup failed{stage}: {escape(str(exc))}")
        print_cleanup_help()
        return 1
    except KeyboardInterrupt:
        print_error("Setup interrupted.")
        return 1

    print_completion(result, time.monotonic() - started)
    return 0


def _resolve_type(value: str | None) -> ProjectType:
    if value is not None:
        try:
            return validate_type(value.strip())
        except InputValidationError as exc:
            print_error(escape(str(exc)))
            console.print("[cyan]Please choose from the available options:[/cyan]")
    return prompt_project_type()


def _resolve_name(value: str | None) -> str:
    if value is not None:
        reason = check_name(value)
        if reason is None:
            return value
        print_error(reason)
    return prompt_project_name()


if __name__ == "__main__":
    sys.exit(main())
