"""Build target definitions.

A BuildTarget is configuration, not runtime state: it fixes where cargo puts
the release binary for a platform and what the published archive is called.
Two targets exist, native Linux and cross-compiled Windows.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

from relpack.core.config import ReleaseConfig
from relpack.platform.detection import Platform

__all__ = [
    "ArchiveFormat",
    "BuildTarget",
    "default_targets",
    "linux_target",
    "windows_target",
]


class ArchiveFormat(StrEnum):
    TAR_XZ = "tar.xz"
    ZIP = "zip"


@dataclass(frozen=True, slots=True)
class BuildTarget:
    """One platform to release for.

    Attributes:
        platform: Platform the binary runs on; also the archive name suffix.
        app_name: Cargo binary name.
        archive_format: Archive flavour for this platform.
        triple: Cross-compilation target triple, None for a native build.
        host: Host platform the build must run on, None if any host works.
    """

    platform: Platform
    app_name: str
    archive_format: ArchiveFormat
    triple: str | None = None
    host: Platform | None = None

    @property
    def name(self) -> str:
        return str(self.platform)

    @property
    def binary_name(self) -> str:
        return self.platform.exe_name(self.app_name)

    @property
    def archive_name(self) -> str:
        return f"{self.app_name}-{self.platform}.{self.archive_format}"

    def release_dir(self, target_dir: Path) -> Path:
        """Cargo's release output directory for this target."""
        if self.triple:
            return target_dir / self.triple / "release"
        return target_dir / "release"

    def binary_path(self, target_dir: Path) -> Path:
        return self.release_dir(target_dir) / self.binary_name

    def build_command(self, cargo: str) -> list[str]:
        cmd = [cargo, "build", "--release"]
        if self.triple:
            cmd += ["--target", self.triple]
        return cmd


def linux_target(app_name: str) -> BuildTarget:
    return BuildTarget(
        platform=Platform.LINUX,
        app_name=app_name,
        archive_format=ArchiveFormat.TAR_XZ,
        host=Platform.LINUX,
    )


def windows_target(app_name: str, triple: str) -> BuildTarget:
    return BuildTarget(
        platform=Platform.WINDOWS,
        app_name=app_name,
        archive_format=ArchiveFormat.ZIP,
        triple=triple,
    )


def default_targets(app_name: str, config: ReleaseConfig) -> tuple[BuildTarget, ...]:
    """The configured targets, in release order."""
    return (
        linux_target(app_name),
        windows_target(app_name, config.windows.triple),
    )
