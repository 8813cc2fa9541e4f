"""
General purpose helpers: an HTTP request sender, sequence helpers and an
environment variable accessor.
"""
from .env import get_env, load_env_file
from .errors import (
    BodyReadError,
    HelperError,
    IndexOutOfRange,
    NotASequence,
    RequestError,
    TransportError,
    UnsupportedMethod,
)
from .requester import AsyncHTTPRequester, HTTPRequester, RequestOptions, Response, send_request
from .sequence import deep_equal, index_of, remove_at

__version__ = "0.1.0"

__all__ = [
    "AsyncHTTPRequester",
    "BodyReadError",
    "HTTPRequester",
    "HelperError",
    "IndexOutOfRange",
    "NotASequence",
    "RequestError",
    "RequestOptions",
    "Response",
    "TransportError",
    "UnsupportedMethod",
    "deep_equal",
    "get_env",
    "index_of",
    "load_env_file",
    "remove_at",
    "send_request",
]
