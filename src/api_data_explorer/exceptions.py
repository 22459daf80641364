"""Custom exceptions for the API data explorer."""

from .models import ErrorKind

TIMEOUT_MESSAGE = "Request timeout. Please try again."
NETWORK_MESSAGE = "Network error. Please check your connection."
UNKNOWN_MESSAGE = "Failed to fetch data"

STATUS_MESSAGES: dict[int, str] = {
    400: "Bad request. Please check your input.",
    401: "Unauthorized. Please login again.",
    403: "Forbidden. You do not have permission.",
    404: "Not found. The requested resource does not exist.",
    500: "Server error. Please try again later.",
}


def message_for_status(status: int) -> str:
    """Human-readable message for a non-2xx HTTP status."""
    return STATUS_MESSAGES.get(status, f"Request failed with status {status}")


class ApiExplorerError(Exception):
    """Base exception for API explorer errors."""

    pass


class UnknownSourceError(ApiExplorerError):
    """Raised when a source name does not match any known collection."""

    pass


class FetchError(ApiExplorerError):
    """Raised when a remote request fails. Carries a user-presentable message."""

    kind: ErrorKind = ErrorKind.UNKNOWN

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.message = message
        self.status = status


class RequestTimeoutError(FetchError):
    """Raised when the remote service does not answer within the timeout."""

    kind = ErrorKind.TIMEOUT

    def __init__(self, message: str = TIMEOUT_MESSAGE):
        super().__init__(message)


class NetworkUnreachableError(FetchError):
    """Raised when the remote service cannot be reached at all."""

    kind = ErrorKind.NETWORK_UNREACHABLE

    def __init__(self, message: str = NETWORK_MESSAGE):
        super().__init__(message)


class ClientError(FetchError):
    """Raised for 4xx (and other non-5xx) error responses."""

    kind = ErrorKind.CLIENT_ERROR

    def __init__(self, status: int):
        super().__init__(message_for_status(status), status=status)


class ServerError(FetchError):
    """Raised for 5xx error responses."""

    kind = ErrorKind.SERVER_ERROR

    def __init__(self, status: int):
        super().__init__(message_for_status(status), status=status)


class UnknownFetchError(FetchError):
    """Raised when a response cannot be used for a reason outside the taxonomy."""

    kind = ErrorKind.UNKNOWN

    def __init__(self, message: str = UNKNOWN_MESSAGE):
        super().__init__(message)


def error_for_status(status: int) -> FetchError:
    """Build the matching FetchError for a non-2xx status code."""
    if status >= 500:
        return ServerError(status)
    return ClientError(status)
