"""Error codes for CLI exit status.

Each release failure kind maps to one of these codes, so scripts driving
`relpack` can tell a broken toolchain from a broken archiver without parsing
output.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    These values are used as process exit codes and should remain stable:
    - 0: Success
    - 1: User error (bad config, unknown app name)
    - 2: Environment error (missing tools, wrong host)
    - 3: Build error (compilation failed)
    - 5: I/O error (artifact missing, move failed)
    - 6: Archive error (archiver failed)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    BUILD_ERROR = 3
    IO_ERROR = 5
    ARCHIVE_ERROR = 6
