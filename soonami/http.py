import functools
import http.client
import logging
import urllib.error
import urllib.parse
import urllib.request
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

CONNECT_TIMEOUT: float = 15.0
READ_TIMEOUT: float = 10.0


class HTTPClientError(Exception):
    pass


class InvalidURLError(HTTPClientError):
    pass


class FetchError(HTTPClientError):
    """
    Raised when the request never produced an HTTP response, e.g., DNS
    failure, refused connection or an exceeded timeout.
    """


@dataclass
class Response:
    status: int = 0
    headers: dict[str, object] = field(default_factory=dict)
    body: str = ""


class _ReadTimeoutMixin:
    # urllib passes a single timeout to the connection; it is used for
    # connect() and then replaced with the read timeout on the socket.
    read_timeout: float = READ_TIMEOUT

    def connect(self):
        super().connect()  # type: ignore[misc]
        self.sock.settimeout(self.read_timeout)  # type: ignore[attr-defined]


class _HTTPConnection(_ReadTimeoutMixin, http.client.HTTPConnection):
    def __init__(self, *args, read_timeout: float = READ_TIMEOUT, **kwargs):
        super().__init__(*args, **kwargs)
        self.read_timeout = read_timeout


class _HTTPSConnection(_ReadTimeoutMixin, http.client.HTTPSConnection):
    def __init__(self, *args, read_timeout: float = READ_TIMEOUT, **kwargs):
        super().__init__(*args, **kwargs)
        self.read_timeout = read_timeout


class _HTTPHandler(urllib.request.HTTPHandler):
    def __init__(self, read_timeout: float):
        super().__init__()
        self.read_timeout = read_timeout

    def http_open(self, req):
        return self.do_open(
            functools.partial(_HTTPConnection, read_timeout=self.read_timeout), req
        )


class _HTTPSHandler(urllib.request.HTTPSHandler):
    def __init__(self, read_timeout: float):
        super().__init__()
        self.read_timeout = read_timeout

    def https_open(self, req):
        return self.do_open(
            functools.partial(_HTTPSConnection, read_timeout=self.read_timeout),
            req,
            context=self._context,  # type: ignore[attr-defined]
        )


def build_opener(read_timeout: float = READ_TIMEOUT) -> urllib.request.OpenerDirector:
    """
    Return an opener whose connections switch to `read_timeout` once
    connected. Redirects are handled by the default redirect handler.
    """
    return urllib.request.build_opener(
        _HTTPHandler(read_timeout=read_timeout),
        _HTTPSHandler(read_timeout=read_timeout),
    )


def validate_url(url: str) -> str:
    try:
        parts = urllib.parse.urlsplit(url)
        _ = parts.port
    except ValueError as e:
        raise InvalidURLError(f"{url!r}: {e}") from e

    if parts.scheme not in ("http", "https"):
        raise InvalidURLError(f"{url!r}: unsupported scheme {parts.scheme!r}")
    if not parts.hostname:
        raise InvalidURLError(f"{url!r}: missing host")
    if any(c.isspace() or not c.isprintable() for c in url):
        raise InvalidURLError(f"{url!r}: whitespace or control character")

    return url


def upgrade_scheme(url: str) -> str:
    """
    Swap a leading http scheme for https, leaving the rest of the URL as is.
    """
    if url[:5].lower() == "http:":
        return "https" + url[4:]
    return url


def request(
    url: str,
    method: str = "GET",
    connect_timeout: float = CONNECT_TIMEOUT,
    read_timeout: float = READ_TIMEOUT,
    opener: urllib.request.OpenerDirector | None = None,
) -> Response:
    """
    Perform a single HTTP request over https.

    Args:
        url (str): The URL to request; http URLs are upgraded to https.
        method (str): HTTP method ('GET', 'POST', etc.).
        connect_timeout (float): Seconds allowed to establish the connection.
        read_timeout (float): Seconds allowed for each read once connected.
        opener (OpenerDirector): Optional opener, mostly for tests.

    Returns:
        Response: the body is only populated for a 200; every other
        status comes back with an empty body.

    Raises:
        FetchError: the request failed before a response arrived.
    """
    url = upgrade_scheme(url)
    opener = opener or build_opener(read_timeout=read_timeout)
    req = urllib.request.Request(url, method=method)

    logger.debug(f"{method} {url}")
    try:
        resp = opener.open(req, timeout=connect_timeout)
    except urllib.error.HTTPError as e:
        try:
            if e.code == 400:
                logger.warning(f"HTTP 400 returned for {url}, malformed request")
            else:
                logger.warning(f"HTTP {e.code} returned for {url}, ignoring body")
            return Response(status=e.code, headers=dict(e.headers or {}), body="")
        finally:
            e.close()
    except (OSError, http.client.HTTPException) as e:
        raise FetchError(f"{method} {url} failed: {e}") from e

    try:
        status = resp.status
        headers = dict(resp.getheaders())
        if status != 200:
            logger.warning(f"HTTP {status} returned for {url}, ignoring body")
            return Response(status=status, headers=headers, body="")
        body = resp.read().decode("utf-8", errors="replace")
    except (OSError, http.client.HTTPException) as e:
        raise FetchError(f"{method} {url} failed while reading: {e}") from e
    finally:
        resp.close()

    return Response(status=status, headers=headers, body=body)
