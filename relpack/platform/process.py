"""Subprocess execution with Result-based error handling.

This is the only module that talks to `subprocess` directly. Callers get a
structured ProcessError instead of having to catch exceptions.

Usage:
    result = run(["tar", "-caf", "demo-linux.tar.xz", "demo"], cwd=release_dir)
    match result:
        case Ok(stdout):
            ...
        case Err(error):
            print(f"Failed: {error.stderr}")
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path

from relpack.core.result import Err, Ok, Result

__all__ = ["ProcessError", "run", "run_silent"]

# returncode used when the process never produced an exit status
NO_EXIT_STATUS = -1


@dataclass(frozen=True, slots=True)
class ProcessError:
    """Error from a failed subprocess execution.

    Attributes:
        command: The command that was executed.
        returncode: The exit code; -1 if there is none, negative for a signal.
        stdout: Standard output (may be empty).
        stderr: Standard error, or the launch/timeout reason.
        timed_out: True if the process was killed after its timeout.
        launch_failed: True if the executable could not be started.
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str
    timed_out: bool = False
    launch_failed: bool = False

    def stderr_tail(self, lines: int = 5) -> str:
        """Last non-empty lines of stderr, for short error hints."""
        kept = [ln for ln in self.stderr.splitlines() if ln.strip()]
        return "\n".join(kept[-lines:])

    def __str__(self) -> str:
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        if self.timed_out:
            return f"{cmd_str} timed out"
        if self.launch_failed:
            return f"{cmd_str} could not be started"
        return f"{cmd_str} failed (exit {self.returncode})"


def _timeout_error(cmd: list[str], timeout: float | None) -> ProcessError:
    return ProcessError(
        command=tuple(cmd),
        returncode=NO_EXIT_STATUS,
        stdout="",
        stderr=f"Command timed out after {timeout}s",
        timed_out=True,
    )


def _launch_error(cmd: list[str], e: OSError) -> ProcessError:
    return ProcessError(
        command=tuple(cmd),
        returncode=NO_EXIT_STATUS,
        stdout="",
        stderr=str(e),
        launch_failed=True,
    )


def run(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[str, ProcessError]:
    """Execute a command, capturing output.

    Args:
        cmd: Command and arguments to execute.
        cwd: Working directory for the command.
        env: Environment variables (uses current env if None).
        timeout: Maximum seconds to wait (None for no limit).

    Returns:
        Ok(stdout) on success, Err(ProcessError) on failure.
    """
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=env,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired:
        return Err(_timeout_error(cmd, timeout))
    except OSError as e:
        return Err(_launch_error(cmd, e))

    if proc.returncode != 0:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=proc.returncode,
                stdout=proc.stdout,
                stderr=proc.stderr,
            )
        )

    return Ok(proc.stdout)


def run_silent(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[None, ProcessError]:
    """Execute a command, letting its output stream to the terminal.

    Used for long-running compiler invocations where progress matters more
    than capturing output.

    Returns:
        Ok(None) on success, Err(ProcessError) on failure.
    """
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=env,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired:
        return Err(_timeout_error(cmd, timeout))
    except OSError as e:
        return Err(_launch_error(cmd, e))

    if proc.returncode != 0:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=proc.returncode,
                stdout="",
                stderr="",
            )
        )

    return Ok(None)
