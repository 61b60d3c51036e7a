"""Process exit codes.

Every failure that reaches the command line is mapped onto one of these
values, so CI jobs can tell a missing setting from a failed build.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for docship commands.

    - 0: Success
    - 1: Configuration error (config file, section or required value missing)
    - 2: User error (unknown target, malformed pipeline)
    - 3: Build error (an external tool exited non-zero)
    - 4: Network error (GitHub API unreachable or rejected the call)
    - 5: I/O error (files could not be read, written or removed)
    """

    OK = 0
    CONFIG_ERROR = 1
    USER_ERROR = 2
    BUILD_ERROR = 3
    NETWORK_ERROR = 4
    IO_ERROR = 5
