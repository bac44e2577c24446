# ABOUTME: Exception types describing why a single image download failed
# ABOUTME: Only TransientFetchError is retried; every other subclass is terminal


class FetchError(Exception):
    """Base class for image download failures."""

    pass


class TransientFetchError(FetchError):
    """Raised for network blips, 429/5xx responses and interrupted body reads."""

    pass


class HTTPStatusFetchError(FetchError):
    """Raised when the server answers with a non-retryable status code."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class InvalidContentTypeError(FetchError):
    """Raised when the Content-Type header is missing or not an accepted image type."""

    pass


class FileTooLargeError(FetchError):
    """Raised when the declared or streamed body exceeds the size ceiling."""

    pass


class EmptyResponseError(FetchError):
    """Raised when a successful response carries no body."""

    pass


class RequestBuildError(FetchError):
    """Raised when the URL cannot be turned into an HTTP request."""

    pass


class FetchCancelledError(FetchError):
    """Raised when the batch was cancelled before or during the download."""

    pass
