"""Application error type with machine-readable codes."""

from typing import Literal

ErrorCode = Literal[
    "BACKUP_CREATION_FAILED",
    "BACKUP_ERROR",
    "BFG_DOWNLOAD_FAILED",
    "BFG_ERROR",
    "BFG_NOT_FOUND",
    "BRANCH_NOT_CHECKED_OUT",
    "COMMIT_LIST_FAILED",
    "EMPTY_REPO",
    "FILE_READ_ERROR",
    "FILTER_BRANCH_FAILED",
    "GET_BRANCH_FAILED",
    "INVALID_CONFIG",
    "INVALID_FILENAME",
    "INVALID_OPTIONS",
    "INVALID_PATTERN",
    "INVALID_PATTERN_TABLE",
    "JAVA_CONFIG_FAILED",
    "JAVA_INSTALL_FAILED",
    "MISE_INSTALL_FAILED",
    "MISSING_DEPENDENCIES",
    "NOT_GIT_REPO",
    "SCAN_ERROR",
    "UNSUPPORTED_PLATFORM",
    "WORKING_TREE_CHECK_FAILED",
    "WORKING_TREE_DIRTY",
]


class CleanerError(Exception):
    """Error raised for expected failure conditions.

    The CLI catches these and reports `code: message` instead of a traceback.

    Attributes:
        code: Machine-readable error code
        cause: Underlying exception, if any (also set as __cause__ when
            raised with `from`)
    """

    def __init__(self, message: str, code: ErrorCode, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.cause = cause
