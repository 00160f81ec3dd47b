from typing import Optional


class TubeCompareError(Exception):
    """Base class for every error raised by the service."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ConfigurationError(TubeCompareError):
    pass


class InvalidInputError(TubeCompareError):
    pass


class InvalidFilenameError(InvalidInputError):
    pass


class UpstreamError(TubeCompareError):
    """
    Failure reported by the YouTube Data API.

    kind:
      http_status -> non-2xx response (status is set)
      api_error   -> 2xx response whose payload carries an "error" object
      transport   -> the request never got a response
    """

    HTTP_STATUS = "http_status"
    API_ERROR = "api_error"
    TRANSPORT = "transport"

    def __init__(self, message: str, kind: str, status: Optional[int] = None):
        super().__init__(message)
        self.kind = kind
        self.status = status


class StorageError(TubeCompareError):
    pass


class NotFoundError(StorageError):
    pass


class CorruptDataError(StorageError):
    pass
