"""Tests for relpack.platform.process module."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from relpack.core.result import Err, Ok
from relpack.platform.process import ProcessError, run, run_silent

PY = sys.executable


class TestProcessError:
    def test_str_short_command(self) -> None:
        error = ProcessError(command=("zip", "-9"), returncode=12, stdout="", stderr="")
        assert str(error) == "zip -9 failed (exit 12)"

    def test_str_long_command_truncated(self) -> None:
        error = ProcessError(
            command=("cargo", "build", "--release", "--target", "x86_64-pc-windows-gnu"),
            returncode=101,
            stdout="",
            stderr="error",
        )
        assert str(error) == "cargo build --release ... failed (exit 101)"

    def test_launch_failure(self) -> None:
        error = ProcessError(("tar",), -1, "", "not found", launch_failed=True)
        assert error.launch_failed
        assert str(error) == "tar could not be started"

    def test_missing_exit_status_alone_is_not_launch_failure(self) -> None:
        error = ProcessError(command=("cargo",), returncode=-1, stdout="", stderr="")
        assert not error.launch_failed
        assert str(error) == "cargo failed (exit -1)"

    def test_timeout_is_not_launch_failure(self) -> None:
        error = ProcessError(("cargo",), -1, "", "timed out", timed_out=True)
        assert not error.launch_failed
        assert str(error) == "cargo timed out"

    def test_stderr_tail(self) -> None:
        stderr = "\n".join(f"line {i}" for i in range(10)) + "\n\n"
        error = ProcessError(("cargo",), 101, "", stderr)
        assert error.stderr_tail(2) == "line 8\nline 9"

    def test_frozen(self) -> None:
        error = ProcessError(("cmd",), 1, "", "")
        with pytest.raises(AttributeError):
            error.returncode = 2  # type: ignore[misc]


class TestRun:
    def test_success_returns_stdout(self, tmp_path: Path) -> None:
        result = run([PY, "-c", "print('hello')"], cwd=tmp_path)

        assert isinstance(result, Ok)
        assert "hello" in result.value

    def test_failure_captures_stderr(self, tmp_path: Path) -> None:
        result = run(
            [PY, "-c", "import sys; sys.stderr.write('error msg'); sys.exit(3)"],
            cwd=tmp_path,
        )

        assert isinstance(result, Err)
        assert result.error.returncode == 3
        assert "error msg" in result.error.stderr

    def test_command_not_found(self, tmp_path: Path) -> None:
        result = run(["relpack_nonexistent_command_12345"], cwd=tmp_path)

        assert isinstance(result, Err)
        assert result.error.launch_failed
        assert len(result.error.stderr) > 0

    def test_uses_cwd(self, tmp_path: Path) -> None:
        (tmp_path / "demo").write_text("binary")

        result = run([PY, "-c", "import os; print(os.listdir('.'))"], cwd=tmp_path)

        assert isinstance(result, Ok)
        assert "demo" in result.value

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX signals")
    def test_killed_by_signal_is_not_launch_failure(self, tmp_path: Path) -> None:
        result = run(
            [PY, "-c", "import os, signal; os.kill(os.getpid(), signal.SIGHUP)"],
            cwd=tmp_path,
        )

        assert isinstance(result, Err)
        assert result.error.returncode == -1
        assert not result.error.launch_failed
        assert str(result.error).endswith("failed (exit -1)")

    def test_timeout(self, tmp_path: Path) -> None:
        result = run([PY, "-c", "import time; time.sleep(10)"], cwd=tmp_path, timeout=0.2)

        assert isinstance(result, Err)
        assert result.error.timed_out
        assert "timed out" in result.error.stderr.lower()


class TestRunSilent:
    def test_success_returns_none(self, tmp_path: Path) -> None:
        result = run_silent([PY, "-c", "pass"], cwd=tmp_path, timeout=10.0)

        assert result == Ok(None)

    def test_failure_returns_error(self, tmp_path: Path) -> None:
        result = run_silent([PY, "-c", "import sys; sys.exit(101)"], cwd=tmp_path)

        assert isinstance(result, Err)
        assert result.error.returncode == 101

    def test_uses_env(self, tmp_path: Path) -> None:
        import os

        env = os.environ.copy()
        env["CARGO_TARGET_DIR"] = "elsewhere"

        result = run_silent(
            [PY, "-c", "import os, sys; sys.exit(os.environ['CARGO_TARGET_DIR'] != 'elsewhere')"],
            cwd=tmp_path,
            env=env,
        )

        assert result == Ok(None)

    def test_timeout_returns_error(self, tmp_path: Path) -> None:
        result = run_silent([PY, "-c", "import time; time.sleep(10)"], cwd=tmp_path, timeout=0.2)

        assert isinstance(result, Err)
        assert result.error.timed_out

    def test_command_not_found(self, tmp_path: Path) -> None:
        result = run_silent(["relpack_nonexistent_command_12345"], cwd=tmp_path)

        assert isinstance(result, Err)
        assert result.error.returncode == -1
        assert result.error.launch_failed
