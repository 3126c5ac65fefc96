"""Domain-specific exceptions."""


class ServiceError(Exception):
    pass


class FetchError(ServiceError):
    """A read against the content service did not produce a result page."""

    def __init__(self, message: str, *, endpoint: str) -> None:
        super().__init__(message)
        self.endpoint = endpoint


class TransportFailure(FetchError):
    """Network-level failure: connection refused, timeout, broken protocol."""


class ServerFailure(FetchError):
    """The service answered, but not with a usable success response."""

    def __init__(
        self,
        message: str,
        *,
        endpoint: str,
        status_code: int | None = None,
        detail: str | None = None,
    ) -> None:
        super().__init__(message, endpoint=endpoint)
        self.status_code = status_code
        self.detail = detail
