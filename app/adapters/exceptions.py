"""Custom exceptions for job board adapters."""


class AdapterError(Exception):
    """Base exception for all adapter errors.

    Raised inside the request layer; the public adapter methods catch it and
    turn it into "no data" for the source or posting concerned.
    """

    pass


class AdapterHTTPError(AdapterError):
    """Board API returned a non-success status, or the connection failed.

    A status_code of 0 means no HTTP response was received at all.
    """

    def __init__(self, message: str, status_code: int, url: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class AdapterTimeoutError(AdapterError):
    """Board API did not answer within the configured timeout."""

    def __init__(self, message: str, url: str) -> None:
        super().__init__(message)
        self.url = url


class AdapterResponseError(AdapterError):
    """Response body was not JSON or did not have the expected shape."""

    pass


class AdapterConfigurationError(AdapterError):
    """Adapter was given invalid settings (unknown board type, bad timeout)."""

    pass
