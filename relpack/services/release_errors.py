from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class BuildFailure:
    """Compiler invocation failed (toolchain missing, bad triple, compile error)."""

    platform: str
    reason: str
    returncode: int | None = None
    environment: bool = False
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class ArtifactNotFound:
    """Build reported success but the binary is not where it should be."""

    platform: str
    path: Path


@dataclass(frozen=True, slots=True)
class ArchiveFailure:
    platform: str
    reason: str
    returncode: int | None = None
    environment: bool = False
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class RelocationFailure:
    platform: str
    source: Path
    destination: Path
    reason: str


ReleaseError = BuildFailure | ArtifactNotFound | ArchiveFailure | RelocationFailure


def step_name(error: ReleaseError) -> str:
    """Name of the pipeline step an error came from."""
    match error:
        case BuildFailure():
            return "build"
        case ArtifactNotFound():
            return "locate"
        case ArchiveFailure():
            return "archive"
        case RelocationFailure():
            return "relocate"
