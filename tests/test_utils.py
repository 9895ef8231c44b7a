"""Unit tests for utility functions (projectforge.utils).

Tests cover:
- run_command (success, failure, timeout, cancellation, cwd, env vars,
  capture=False)
- format_duration
- Rich output helpers (print_header, print_summary_table, etc.)
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from projectforge.utils import (
    format_duration,
    print_error,
    print_header,
    print_info,
    print_success,
    print_summary_table,
    print_warning,
    run_command,
)


# ---------------------------------------------------------------------------
# run_command
# ---------------------------------------------------------------------------


class TestRunCommand:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_successful_command_list(self):
        returncode, stdout, stderr = await run_command([sys.executable, "-c", "print('hello')"])
        assert returncode == 0
        assert stdout == "hello"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_failed_command(self):
        returncode, stdout, stderr = await run_command(
            [sys.executable, "-c", "import sys; sys.stderr.write('boom'); sys.exit(3)"]
        )
        assert returncode == 3
        assert stderr == "boom"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_command_with_cwd(self, tmp_path: Path):
        returncode, stdout, _ = await run_command(
            [sys.executable, "-c", "import os; print(os.getcwd())"], cwd=tmp_path
        )
        assert returncode == 0
        assert Path(stdout).resolve() == tmp_path.resolve()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_timeout_returns_minus_one(self):
        returncode, stdout, stderr = await run_command(
            [sys.executable, "-c", "import time; time.sleep(10)"], timeout=0.5
        )
        assert returncode == -1
        assert "timed out" in stderr

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_env_vars_are_merged(self):
        returncode, stdout, _ = await run_command(
            [sys.executable, "-c", "import os; print(os.environ['PF_TEST_VAR'])"],
            env={"PF_TEST_VAR": "forge"},
        )
        assert returncode == 0
        assert stdout == "forge"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_no_capture_returns_empty_output(self):
        returncode, stdout, stderr = await run_command(
            [sys.executable, "-c", "pass"], capture=False
        )
        assert returncode == 0
        assert stdout == ""
        assert stderr == ""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_missing_program_raises(self):
        with pytest.raises(FileNotFoundError):
            await run_command(["definitely-not-a-real-program-xyz"])

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_cancel_kills_and_reaps_child(self, tmp_path: Path, monkeypatch):
        started = tmp_path / "started"
        processes = []
        real_exec = asyncio.create_subprocess_exec

        async def recording_exec(*args, **kwargs):
            process = await real_exec(*args, **kwargs)
            processes.append(process)
            return process

        monkeypatch.setattr(asyncio, "create_subprocess_exec", recording_exec)
        script = f"import pathlib, time; pathlib.Path({str(started)!r}).touch(); time.sleep(30)"
        task = asyncio.create_task(run_command([sys.executable, "-c", script]))
        for _ in range(200):
            if started.exists():
                break
            await asyncio.sleep(0.05)

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        # Reaped before the cancellation propagated.
        assert processes[0].returncode is not None


# ---------------------------------------------------------------------------
# format_duration
# ---------------------------------------------------------------------------


class TestFormatDuration:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        "seconds, expected",
        [
            (0, "0.0s"),
            (3.7, "3.7s"),
            (65.2, "1m 5s"),
            (3661.0, "1h 1m 1s"),
            (-5, "0.0s"),
        ],
    )
    def test_format(self, seconds, expected):
        assert format_duration(seconds) == expected


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


class TestOutputHelpers:
    @pytest.mark.unit
    def test_print_helpers_use_console(self):
        with patch("projectforge.utils.console") as mock_console:
            print_success("done")
            print_error("failed")
            print_warning("careful")
            print_info("working")
        printed = [call.args[0] for call in mock_console.print.call_args_list]
        assert printed == [
            "[bold green]done[/bold green]",
            "[bold red]failed[/bold red]",
            "[bold yellow]careful[/bold yellow]",
            "[cyan]working[/cyan]",
        ]

    @pytest.mark.unit
    def test_print_header(self):
        with patch("projectforge.utils.console") as mock_console:
            print_header("ProjectForge")
        assert mock_console.print.call_count == 3

    @pytest.mark.unit
    def test_print_summary_table(self):
        with patch("projectforge.utils.console") as mock_console:
            print_summary_table({"Project Name": "my-app"}, title="Project Settings")
        table = mock_console.print.call_args_list[0].args[0]
        assert table.title == "Project Settings"
        assert table.row_count == 1
