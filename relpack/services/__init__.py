# SPDX-License-Identifier: MIT
"""Release services.

Services implement the release pipeline, coordinating between the domain
layer (core/) and infrastructure (platform/).
"""

from relpack.services.release import PublishedArchive, ReleaseReport, ReleaseService
from relpack.services.release_errors import (
    ArchiveFailure,
    ArtifactNotFound,
    BuildFailure,
    ReleaseError,
    RelocationFailure,
)
from relpack.services.targets import ArchiveFormat, BuildTarget, default_targets

__all__ = [
    # orchestration
    "PublishedArchive",
    "ReleaseReport",
    "ReleaseService",
    # errors
    "ArchiveFailure",
    "ArtifactNotFound",
    "BuildFailure",
    "ReleaseError",
    "RelocationFailure",
    # targets
    "ArchiveFormat",
    "BuildTarget",
    "default_targets",
]
