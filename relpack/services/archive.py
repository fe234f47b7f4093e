"""Archiver commands and archive inspection.

Archives are produced by the platform tools (`tar` with xz, `zip -9`) run
from inside the release directory, so the binary is stored without any
leading path. Inspection uses the stdlib readers to confirm an archive holds
exactly the release binary.
"""

from __future__ import annotations

import lzma
import tarfile
import zipfile
from pathlib import Path

from relpack.core.config import ArchiveConfig
from relpack.core.result import Err, Ok, Result
from relpack.services.targets import ArchiveFormat, BuildTarget

__all__ = ["archive_command", "list_members"]


def archive_command(target: BuildTarget, tools: ArchiveConfig) -> list[str]:
    """Command that archives the target's binary, run from its release dir."""
    match target.archive_format:
        case ArchiveFormat.TAR_XZ:
            # -a picks xz compression from the .tar.xz suffix
            return [tools.tar, "-caf", target.archive_name, target.binary_name]
        case ArchiveFormat.ZIP:
            return [tools.zip, "-9", target.archive_name, target.binary_name]


def list_members(path: Path, fmt: ArchiveFormat) -> Result[list[str], str]:
    """List the regular-file members of an archive.

    Returns:
        Ok(sorted member names), or Err(reason) if the archive is unreadable.
    """
    try:
        match fmt:
            case ArchiveFormat.TAR_XZ:
                with tarfile.open(path, "r:xz") as tf:
                    return Ok(sorted(m.name for m in tf.getmembers() if m.isfile()))
            case ArchiveFormat.ZIP:
                with zipfile.ZipFile(path) as zf:
                    return Ok(sorted(i.filename for i in zf.infolist() if not i.is_dir()))
    except (OSError, EOFError, lzma.LZMAError, tarfile.TarError, zipfile.BadZipFile) as e:
        return Err(f"unreadable archive {path.name}: {e}")
