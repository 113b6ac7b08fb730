"""Exception classes for the kb_export package.

This module defines custom exceptions used throughout the kb_export package
so a failed export reports which stage stopped it.
"""


class KbExportException(Exception):
    """Base exception for all knowledge-base export errors.

    Catching this exception will catch every kb_export-specific error.
    """
    pass


class ApiRequestError(KbExportException):
    """Raised when a request to the knowledge-base API fails.

    This can occur due to:
    - Network connectivity issues
    - Non-2xx responses (bad API key, unknown document, server errors)
    - A response body that is not the expected JSON shape
    """
    pass


class ExportWriteError(KbExportException):
    """Raised when an export directory or document file cannot be written."""
    pass


class ArchiveError(KbExportException):
    """Raised when the zip archive of exported documents cannot be built."""
    pass


class PrompterClosedError(KbExportException):
    """Raised when the interactive prompter is used after it was closed."""
    pass
