"""Error presentation utilities.

Centralized release error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from relpack.core.config import ConfigError
from relpack.core.errors import ErrorCode
from relpack.output.console import Style
from relpack.services.release_errors import (
    ArchiveFailure,
    ArtifactNotFound,
    BuildFailure,
    ReleaseError,
    RelocationFailure,
)

if TYPE_CHECKING:
    from relpack.output.console import ConsoleProtocol

__all__ = [
    "config_error_exit_code",
    "print_config_error",
    "print_release_error",
    "release_error_exit_code",
]


def print_release_error(error: ReleaseError, console: ConsoleProtocol) -> None:
    """Print a release error naming the failing step and platform."""
    match error:
        case BuildFailure(platform=platform, reason=reason, hint=hint):
            console.error(f"[{platform}] build failed: {reason}")
            if hint:
                console.print(hint, Style.DIM)
        case ArtifactNotFound(platform=platform, path=path):
            console.error(f"[{platform}] build succeeded but binary not found: {path}")
            console.print(
                "hint: check the app name and cargo target directory", Style.DIM
            )
        case ArchiveFailure(platform=platform, reason=reason, hint=hint):
            console.error(f"[{platform}] archive failed: {reason}")
            if hint:
                console.print(hint, Style.DIM)
        case RelocationFailure(
            platform=platform, source=source, destination=destination, reason=reason
        ):
            console.error(f"[{platform}] move failed: {source} -> {destination} ({reason})")


def release_error_exit_code(error: ReleaseError) -> int:
    """Get exit code for a release error."""
    match error:
        case BuildFailure(environment=True) | ArchiveFailure(environment=True):
            return int(ErrorCode.ENV_ERROR)
        case BuildFailure():
            return int(ErrorCode.BUILD_ERROR)
        case ArchiveFailure():
            return int(ErrorCode.ARCHIVE_ERROR)
        case ArtifactNotFound() | RelocationFailure():
            return int(ErrorCode.IO_ERROR)


def print_config_error(error: ConfigError, console: ConsoleProtocol) -> None:
    console.error(error.message)
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)


def config_error_exit_code(error: ConfigError) -> int:
    return int(ErrorCode.USER_ERROR)
