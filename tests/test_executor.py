"""Unit tests for projectforge.executor."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from projectforge import executor as executor_module
from projectforge.executor import (
    CommandExecutor,
    CommandResult,
    SubprocessExecutor,
    resolve_argv,
    tool_available,
)


class TestCommandResult:
    @pytest.mark.unit
    def test_ok(self):
        assert CommandResult(returncode=0).ok
        assert not CommandResult(returncode=1).ok
        assert not CommandResult(returncode=-1).ok


class TestResolveArgv:
    @pytest.mark.unit
    def test_empty_rejected(self):
        with pytest.raises(ValueError):
            resolve_argv([])

    @pytest.mark.unit
    def test_path_like_program_untouched(self):
        argv = ["./bin/tool", "--flag"]
        assert resolve_argv(argv) == argv

    @pytest.mark.unit
    def test_unknown_program_untouched(self, monkeypatch):
        monkeypatch.setattr(executor_module.shutil, "which", lambda cmd: None)
        assert resolve_argv(["npm", "init"]) == ["npm", "init"]

    @pytest.mark.unit
    def test_posix_resolves_to_full_path(self, monkeypatch):
        monkeypatch.setattr(executor_module, "_IS_WINDOWS", False)
        monkeypatch.setattr(executor_module.shutil, "which", lambda cmd: "/usr/bin/npm")
        assert resolve_argv(["npm", "init", "-y"]) == ["/usr/bin/npm", "init", "-y"]

    @pytest.mark.unit
    def test_windows_cmd_shim_runs_through_comspec(self, monkeypatch):
        # Only the module flag flips; the os module stays POSIX.
        monkeypatch.setattr(executor_module, "_IS_WINDOWS", True)
        monkeypatch.setenv("ComSpec", "C:\\Windows\\system32\\cmd.exe")
        monkeypatch.setattr(
            executor_module.shutil, "which", lambda cmd: "C:\\nodejs\\npm.CMD"
        )
        assert resolve_argv(["npm", "install"]) == [
            "C:\\Windows\\system32\\cmd.exe", "/d", "/c", "C:\\nodejs\\npm.CMD", "install",
        ]

    @pytest.mark.unit
    def test_windows_exe_runs_directly(self, monkeypatch):
        monkeypatch.setattr(executor_module, "_IS_WINDOWS", True)
        monkeypatch.setattr(
            executor_module.shutil, "which", lambda cmd: "C:\\nodejs\\node.exe"
        )
        assert resolve_argv(["node", "--version"]) == ["C:\\nodejs\\node.exe", "--version"]


class TestToolAvailable:
    @pytest.mark.unit
    def test_python_is_available(self):
        assert tool_available(sys.executable)

    @pytest.mark.unit
    def test_missing_tool(self):
        assert not tool_available("definitely-not-a-real-program-xyz")


class TestSubprocessExecutor:
    @pytest.mark.unit
    def test_satisfies_protocol(self):
        assert isinstance(SubprocessExecutor(), CommandExecutor)

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_runs_in_cwd(self, tmp_path: Path):
        result = await SubprocessExecutor().run(
            sys.executable, ["-c", "import os; print(os.getcwd())"], tmp_path
        )
        assert result.ok
        assert Path(result.stdout).resolve() == tmp_path.resolve()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_nonzero_exit(self, tmp_path: Path):
        result = await SubprocessExecutor().run(
            sys.executable, ["-c", "import sys; sys.exit(2)"], tmp_path
        )
        assert result.returncode == 2

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_missing_program_is_127(self, tmp_path: Path):
        result = await SubprocessExecutor().run("definitely-not-a-real-program-xyz", [], tmp_path)
        assert result.returncode == 127
        assert "Command not found" in result.stderr

    @pytest.mark.unit
    @pytest.mark.asyncio
    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX permissions")
    async def test_non_executable_program_is_126(self, tmp_path: Path):
        script = tmp_path / "tool.sh"
        script.write_text("#!/bin/sh\necho hi\n")
        script.chmod(0o644)
        result = await SubprocessExecutor().run(str(script), [], tmp_path)
        assert result.returncode == 126
        assert "Cannot run" in result.stderr

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_missing_cwd_is_a_failure(self, tmp_path: Path):
        result = await SubprocessExecutor().run(
            sys.executable, ["-c", "pass"], tmp_path / "gone"
        )
        assert not result.ok

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_timeout_is_a_failure(self, tmp_path: Path):
        result = await SubprocessExecutor(timeout=0.5).run(
            sys.executable, ["-c", "import time; time.sleep(10)"], tmp_path
        )
        assert not result.ok
        assert "timed out" in result.stderr
