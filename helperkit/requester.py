"""
Send GET, POST and PUT requests and return the drained response body.

GET requests carry query parameters in the URI. POST and PUT requests carry a
raw body, or the form-urlencoded query parameters when no raw body is given.
"""
import time
from collections.abc import Mapping
from typing import Dict, List, Optional, Tuple, Union
from urllib.parse import urlencode, urlsplit

import httpx
import structlog

from .config import Config, default_config
from .errors import BodyReadError, TransportError, UnsupportedMethod

logger = structlog.get_logger(__name__)

QUERY_METHODS = ("GET",)
BODY_METHODS = ("POST", "PUT")
SUPPORTED_METHODS = QUERY_METHODS + BODY_METHODS

# Status reported when no response was received from the peer
TRANSPORT_FAILURE_STATUS = 500
METHOD_NOT_ALLOWED_STATUS = 405

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

QueryParams = Union[Mapping, List[Tuple[str, str]]]
HeaderValues = Union[Mapping, List[Tuple[str, str]]]


class RequestOptions:
    def __init__(
        self,
        query_params: Optional[QueryParams] = None,
        headers: Optional[HeaderValues] = None,
        body: Optional[bytes] = None,
    ):
        """Optional parts of a request, any subset may be set.

        Args:
            query_params: ordered multi-map, values may be a string or a list
                of strings. Query string for GET, form body for POST/PUT.
            headers: replaces the default header set when given.
            body: raw payload for POST/PUT, ignored for GET.
        """
        self.query_params = query_params
        self.headers = headers
        self.body = body


class Response:
    def __init__(
        self,
        url: str,
        status_code: int,
        body: bytes = b'',
        headers: Dict[str, str] = None,
        fetch_time: float = 0.0,
        error: Exception = None,
        encoding: str = None
    ):
        self.url = url
        self.status_code = status_code
        self.body = body
        self.headers = headers or {}
        self.fetch_time = fetch_time
        self.error = error
        self.encoding = encoding

    @property
    def success(self) -> bool:
        """Check if the request completed with no error and a 2xx status code."""
        return self.error is None and 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        if not self.body:
            return ""
        return self.body.decode(self.encoding or 'utf-8', errors='replace')

    @property
    def size(self) -> int:
        return len(self.body)

    def raise_for_error(self) -> "Response":
        if self.error is not None:
            raise self.error
        return self

    def __iter__(self):
        # Allows `body, status_code, error = requester.send(...)`
        return iter((self.body, self.status_code, self.error))

    def __repr__(self) -> str:
        return f"<Response [{self.status_code}] {self.url} error={self.error!r}>"


def encode_query(params: QueryParams) -> str:
    """Form-urlencode params keeping their insertion order."""
    items = params.items() if isinstance(params, Mapping) else params
    return urlencode(list(items), doseq=True)


def _header_bytes(value) -> bytes:
    # httpx only accepts ASCII str header values, raw bytes go out untouched
    return value.encode('utf-8') if isinstance(value, str) else value


def _header_items(headers: HeaderValues) -> List[Tuple[bytes, bytes]]:
    if isinstance(headers, httpx.Headers):
        items = headers.multi_items()
    elif isinstance(headers, Mapping):
        items = headers.items()
    else:
        items = headers

    result = []
    for name, value in items:
        values = value if isinstance(value, (list, tuple)) else [value]
        result.extend((_header_bytes(name), _header_bytes(v)) for v in values)
    return result


def _replace_query(uri: str, query: str) -> str:
    try:
        parts = urlsplit(uri)
    except ValueError as e:
        raise httpx.InvalidURL(str(e)) from e
    return parts._replace(query=query).geturl()


class _BaseRequester:
    def __init__(self, config: Config = None):
        http_config = (config or default_config).http

        self.user_agent = http_config.get('user_agent', 'helperkit')
        self.timeout = http_config.get('timeout')
        self.follow_redirects = http_config.get('follow_redirects', True)
        self.max_redirects = http_config.get('max_redirects', 10)

    def _default_headers(self) -> Dict[str, str]:
        return {'User-Agent': self.user_agent}

    def _build_request(self, method: str, uri: str, options: RequestOptions) -> httpx.Request:
        headers = self._default_headers()
        content = None

        if method in QUERY_METHODS:
            if options.query_params is not None:
                uri = _replace_query(uri, encode_query(options.query_params))
        elif options.body is not None:
            content = bytes(options.body)
        elif options.query_params is not None:
            content = encode_query(options.query_params).encode('ascii')
            headers['Content-Type'] = FORM_CONTENT_TYPE

        if options.headers is not None:
            headers = options.headers

        # Timeout and redirects come from the client, owned or injected
        return httpx.Request(
            method,
            uri,
            headers=_header_items(headers),
            content=content,
            extensions={'timeout': self._client.timeout.as_dict()},
        )

    def _unsupported(self, method: str, uri: str) -> Response:
        logger.warning("unsupported_request_method", method=method, uri=uri)
        return Response(url=uri, status_code=METHOD_NOT_ALLOWED_STATUS, error=UnsupportedMethod(method))

    def _transport_failure(self, method: str, uri: str, exc: Exception, start_time: float) -> Response:
        logger.warning("request_transport_error", method=method, uri=uri, error=str(exc))
        return Response(
            url=uri,
            status_code=TRANSPORT_FAILURE_STATUS,
            fetch_time=time.time() - start_time,
            error=TransportError(exc),
        )

    def _read_failure(self, method: str, uri: str, response: httpx.Response, exc: Exception,
                      start_time: float) -> Response:
        logger.warning("response_body_read_error",
                       method=method,
                       uri=uri,
                       status_code=response.status_code,
                       error=str(exc))
        return Response(
            url=str(response.url),
            status_code=response.status_code,
            headers=dict(response.headers),
            fetch_time=time.time() - start_time,
            error=BodyReadError(exc, response.status_code),
        )

    def _completed(self, method: str, response: httpx.Response, content: bytes, start_time: float) -> Response:
        fetch_time = time.time() - start_time
        logger.debug("request_completed",
                     method=method,
                     uri=str(response.url),
                     status_code=response.status_code,
                     size=len(content),
                     fetch_time=fetch_time)
        return Response(
            url=str(response.url),
            status_code=response.status_code,
            body=content,
            headers=dict(response.headers),
            fetch_time=fetch_time,
            encoding=response.charset_encoding,
        )


class HTTPRequester(_BaseRequester):
    """Blocking requester issuing exactly one round-trip per send."""

    def __init__(
        self,
        client: httpx.Client = None,
        transport: httpx.BaseTransport = None,
        config: Config = None
    ):
        super().__init__(config)

        if client is not None and transport is not None:
            raise ValueError("Pass either client or transport, not both")

        self._owns_client = client is None
        if client is None:
            client = httpx.Client(
                transport=transport,
                timeout=httpx.Timeout(self.timeout),
                follow_redirects=self.follow_redirects,
                max_redirects=self.max_redirects,
            )
        self._client = client

    def send(self, method: str, uri: str, options: RequestOptions = None) -> Response:
        """Send the request and return a Response carrying body, status and error.

        Failures are returned in Response.error rather than raised.
        """
        method = method.upper()
        options = options or RequestOptions()

        if method not in SUPPORTED_METHODS:
            return self._unsupported(method, uri)

        start_time = time.time()

        try:
            request = self._build_request(method, uri, options)
            response = self._client.send(request, stream=True)
        except (httpx.RequestError, httpx.InvalidURL) as e:
            return self._transport_failure(method, uri, e, start_time)

        try:
            content = response.read()
        except (httpx.HTTPError, httpx.StreamError) as e:
            return self._read_failure(method, uri, response, e, start_time)
        finally:
            response.close()

        return self._completed(method, response, content, start_time)

    def close(self):
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "HTTPRequester":
        return self

    def __exit__(self, *exc_info):
        self.close()


class AsyncHTTPRequester(_BaseRequester):
    """Same contract as HTTPRequester on top of httpx.AsyncClient."""

    def __init__(
        self,
        client: httpx.AsyncClient = None,
        transport: httpx.AsyncBaseTransport = None,
        config: Config = None
    ):
        super().__init__(config)

        if client is not None and transport is not None:
            raise ValueError("Pass either client or transport, not both")

        self._owns_client = client is None
        if client is None:
            client = httpx.AsyncClient(
                transport=transport,
                timeout=httpx.Timeout(self.timeout),
                follow_redirects=self.follow_redirects,
                max_redirects=self.max_redirects,
            )
        self._client = client

    async def send(self, method: str, uri: str, options: RequestOptions = None) -> Response:
        method = method.upper()
        options = options or RequestOptions()

        if method not in SUPPORTED_METHODS:
            return self._unsupported(method, uri)

        start_time = time.time()

        try:
            request = self._build_request(method, uri, options)
            response = await self._client.send(request, stream=True)
        except (httpx.RequestError, httpx.InvalidURL) as e:
            return self._transport_failure(method, uri, e, start_time)

        try:
            content = await response.aread()
        except (httpx.HTTPError, httpx.StreamError) as e:
            return self._read_failure(method, uri, response, e, start_time)
        finally:
            await response.aclose()

        return self._completed(method, response, content, start_time)

    async def aclose(self):
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "AsyncHTTPRequester":
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()


def send_request(
    method: str,
    uri: str,
    *,
    query_params: Optional[QueryParams] = None,
    headers: Optional[HeaderValues] = None,
    body: Optional[bytes] = None,
    transport: httpx.BaseTransport = None,
    config: Config = None
) -> Response:
    """Send a single request with a throwaway HTTPRequester."""
    options = RequestOptions(query_params=query_params, headers=headers, body=body)
    with HTTPRequester(transport=transport, config=config) as requester:
        return requester.send(method, uri, options)
