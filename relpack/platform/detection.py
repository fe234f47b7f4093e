"""Host platform detection.

Release targets name the platform they produce binaries for; the host
platform decides whether a native build is possible at all.
"""

from __future__ import annotations

import sys as _sys
from enum import Enum
from functools import lru_cache

__all__ = [
    "Platform",
    "detect_platform",
]


class Platform(Enum):
    """Operating system platform.

    Values double as the platform suffix in archive names
    (`{app_name}-{platform}.{ext}`).
    """

    LINUX = "linux"
    MACOS = "macos"
    WINDOWS = "windows"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value

    @property
    def exe_suffix(self) -> str:
        """Get executable file suffix for this platform."""
        return ".exe" if self == Platform.WINDOWS else ""

    def exe_name(self, name: str) -> str:
        """Get executable name with platform-appropriate suffix.

        Example: exe_name("demo") -> "demo.exe" on Windows, "demo" elsewhere.
        """
        return f"{name}{self.exe_suffix}"


@lru_cache(maxsize=1)
def detect_platform() -> Platform:
    """Detect the current operating system (cached)."""
    # NOTE: avoid platform.system() on Windows, it may query WMI (slow).
    system = _sys.platform.lower()
    if system.startswith("linux"):
        return Platform.LINUX
    if system.startswith("darwin"):
        return Platform.MACOS
    if system.startswith(("win32", "cygwin", "msys")):
        return Platform.WINDOWS
    return Platform.UNKNOWN