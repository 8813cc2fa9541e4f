"""
Exceptions raised or returned by helperkit
"""
from typing import Optional


class HelperError(Exception):
    """Base class for every helperkit error."""


class NotASequence(HelperError, TypeError):
    def __init__(self, value, param: str = "data"):
        self.value = value
        super().__init__(f"Parameter {param} is not a sequence: {type(value).__name__}")


class IndexOutOfRange(HelperError, IndexError):
    def __init__(self, index: int, length: int):
        self.index = index
        self.length = length
        super().__init__(f"Index {index} is out of range for length {length}")


class RequestError(HelperError):
    """Base class for failures of an HTTP send."""


class UnsupportedMethod(RequestError):
    def __init__(self, method: str):
        self.method = method
        super().__init__(f"Request method is not supported: {method}")


class TransportError(RequestError):
    """No response was obtained from the peer."""

    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"Transport error: {cause}")
        self.__cause__ = cause


class BodyReadError(RequestError):
    """The peer answered but the response body could not be read."""

    def __init__(self, cause: Exception, status_code: Optional[int] = None):
        self.cause = cause
        self.status_code = status_code
        super().__init__(f"Error reading response body: {cause}")
        self.__cause__ = cause
