"""Shell execution utilities.

Provides safe subprocess execution with proper error handling, and the
platform file-manager integration built on top of it.
"""

import os
import shutil
import subprocess
import sys
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Result of a shell command execution.

    Attributes:
        stdout: Standard output from the command.
        stderr: Standard error from the command.
        returncode: Exit code of the command.
    """

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        """Check if command executed successfully."""
        return self.returncode == 0


def run_command(
    args: list[str],
    *,
    check: bool = False,
    timeout: float | None = 60.0,
    cwd: str | None = None,
) -> CommandResult:
    """Execute a shell command and return the result.

    Args:
        args: Command and arguments to execute.
        check: If True, raise CalledProcessError on non-zero exit.
        timeout: Maximum time in seconds to wait for command.
        cwd: Working directory for the command. If None, uses current directory.

    Returns:
        CommandResult with stdout, stderr, and returncode.

    Raises:
        subprocess.CalledProcessError: If check=True and command fails.
        subprocess.TimeoutExpired: If command exceeds timeout.
        FileNotFoundError: If command executable is not found.
    """
    result = subprocess.run(
        args,
        capture_output=True,
        text=True,
        check=check,
        timeout=timeout,
        cwd=cwd,
    )
    return CommandResult(
        stdout=result.stdout,
        stderr=result.stderr,
        returncode=result.returncode,
    )


def command_exists(name: str) -> bool:
    """Check if a command exists in the system PATH.

    Args:
        name: Command name to check.

    Returns:
        True if command exists, False otherwise.
    """
    return shutil.which(name) is not None


def file_manager_command(path: str, platform: str = sys.platform) -> list[str]:
    """Build the command that reveals a path in the platform file manager.

    Files are selected inside their folder where the file manager
    supports it; on Linux the containing folder is opened instead.

    Args:
        path: File or directory to reveal.
        platform: Value of ``sys.platform`` to build the command for.

    Returns:
        Command and arguments.
    """
    is_file = os.path.isfile(path)

    if platform == "win32":
        return ["explorer", f"/select,{path}"] if is_file else ["explorer", path]
    if platform == "darwin":
        return ["open", "-R", path] if is_file else ["open", path]
    return ["xdg-open", os.path.dirname(path) if is_file else path]


def open_in_file_manager(path: str) -> CommandResult:
    """Reveal a path in the platform file manager.

    Args:
        path: Existing file or directory.

    Returns:
        CommandResult of the launcher command.

    Raises:
        FileNotFoundError: If the path or the launcher does not exist.
    """
    if not os.path.exists(path):
        msg = f"Path does not exist: {path}"
        raise FileNotFoundError(msg)
    args = file_manager_command(path)
    if not command_exists(args[0]):
        msg = f"File manager launcher not found: {args[0]}"
        raise FileNotFoundError(msg)
    result = run_command(args, timeout=15.0)
    if sys.platform == "win32" and result.returncode == 1:
        # explorer.exe exits with 1 even when it succeeds
        return CommandResult(stdout=result.stdout, stderr=result.stderr, returncode=0)
    return result
