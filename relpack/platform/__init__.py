"""Platform abstraction layer."""

from .detection import Platform, detect_platform
from .process import ProcessError, run, run_silent

__all__ = [
    # detection
    "Platform",
    "detect_platform",
    # process
    "ProcessError",
    "run",
    "run_silent",
]
