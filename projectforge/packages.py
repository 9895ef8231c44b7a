"""Package manager resolution and command lines.

``resolve_package_manager`` is a pure decision over an injected "is this
tool on PATH" capability.  The remaining helpers turn a ``PackageManager``
into the exact argv each scaffolding step needs.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from projectforge.errors import PrerequisiteMissingError
from projectforge.executor import CommandExecutor, tool_available
from projectforge.models import PackageManager
from projectforge.utils import print_warning

NEXT_APP_PACKAGE = "create-next-app@latest"


def resolve_package_manager(
    prefer_yarn: bool = False,
    prefer_pnpm: bool = False,
    is_available: Callable[[str], bool] = tool_available,
) -> PackageManager:
    """Decide which package manager to use.

    Priority: yarn (if preferred and on PATH), then pnpm (if preferred and
    on PATH), then npm.  When npm cannot be found either, a warning is
    printed and npm is returned anyway since it ships with Node.js.
    """
    if prefer_yarn and is_available(PackageManager.YARN.value):
        return PackageManager.YARN
    if prefer_pnpm and is_available(PackageManager.PNPM.value):
        return PackageManager.PNPM
    if is_available(PackageManager.NPM.value):
        return PackageManager.NPM
    print_warning("No package manager found. Falling back to npm.")
    return PackageManager.NPM


# ---------------------------------------------------------------------------
# Command lines
# ---------------------------------------------------------------------------


def bootstrap_command(
    manager: PackageManager, use_typescript: bool, use_stylesheets: bool
) -> list[str]:
    """``create-next-app`` invocation that scaffolds into the current directory."""
    flags = [".", "--yes", "--typescript" if use_typescript else "--js"]
    if use_stylesheets:
        flags.append("--no-tailwind")

    if manager is PackageManager.NPM:
        return ["npx", NEXT_APP_PACKAGE, *flags]
    return [manager.value, "create", NEXT_APP_PACKAGE.removeprefix("create-"), *flags]


def init_command(manager: PackageManager) -> list[str]:
    """Command that writes a fresh ``package.json``."""
    if manager is PackageManager.PNPM:
        return ["pnpm", "init"]
    return [manager.value, "init", "-y"]


def add_command(manager: PackageManager, packages: list[str], dev: bool = False) -> list[str]:
    """Command that installs *packages* as (dev) dependencies."""
    verb = "install" if manager is PackageManager.NPM else "add"
    argv = [manager.value, verb]
    if dev:
        argv.append("-D")
    return [*argv, *packages]


def script_command(manager: PackageManager, script: str) -> str:
    """Shell line that runs a ``package.json`` script, e.g. ``npm run dev``."""
    if manager is PackageManager.NPM:
        return f"npm run {script}"
    return f"{manager.value} {script}"


def install_command(manager: PackageManager) -> str:
    """Shell line that installs all declared dependencies."""
    return f"{manager.value} install"


# ---------------------------------------------------------------------------
# Runtime prerequisite
# ---------------------------------------------------------------------------


async def check_runtime(executor: CommandExecutor, cwd: str | Path = ".") -> str:
    """Return the Node.js version string.

    The version is only displayed, never compared.

    Raises:
        PrerequisiteMissingError: If ``node`` is not on PATH or fails to run.
    """
    message = "Node.js is not installed. Please install Node.js first."
    if not executor.is_available("node"):
        raise PrerequisiteMissingError(message, tool="node")

    result = await executor.run("node", ["--version"], Path(cwd))
    if not result.ok:
        raise PrerequisiteMissingError(message, tool="node")
    return result.stdout.strip()
