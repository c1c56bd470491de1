"""Error taxonomy for library operations.

Each error carries the HTTP status it maps to, so the daemon can translate
service failures without a lookup table and the client can rebuild the same
exception from a response.
"""


class LibraryError(Exception):
    """Base class for all library operation failures."""

    status_code: int = 500


class ValidationError(LibraryError):
    """A required field is missing or invalid."""

    status_code = 400


class UnsupportedTypeError(LibraryError):
    """The file type does not allow the requested operation."""

    status_code = 400


class AccessDeniedError(LibraryError):
    """The path escapes the library root, or targets the root itself."""

    status_code = 403


class NotFoundError(LibraryError):
    """The file or directory does not exist."""

    status_code = 404


class LibraryInternalError(LibraryError):
    """Unexpected filesystem or runtime failure."""

    status_code = 500


class AdminRequiredError(LibraryError):
    """Raised client-side when an admin-only action is attempted without login."""

    status_code = 403


_BY_STATUS: dict[int, type[LibraryError]] = {
    400: ValidationError,
    403: AccessDeniedError,
    404: NotFoundError,
}


def error_for_status(status_code: int, message: str) -> LibraryError:
    """Build the library error matching an HTTP status.

    400 responses are ambiguous between ValidationError and UnsupportedTypeError;
    the message decides.

    Args:
        status_code: HTTP status code from the response
        message: Error detail text

    Returns:
        LibraryError instance (not raised)
    """
    if status_code == 400 and "not editable" in message:
        return UnsupportedTypeError(message)
    error_cls = _BY_STATUS.get(status_code, LibraryInternalError)
    return error_cls(message)
