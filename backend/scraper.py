"""Page fetcher and markup parser for the audit engine.

Fetches a single URL (no subpage crawling), measures retrieval latency and
turns the body into a BeautifulSoup tree. Every failure is raised as a
FetchError or ParseError carrying a message meant for the end user.
"""

import logging
import socket
import time
from urllib.parse import urlparse

import requests
from bs4 import BeautifulSoup, NavigableString, Tag
from urllib3.exceptions import ReadTimeoutError

from config import FETCH_MAX_REDIRECTS, FETCH_TIMEOUT_SECONDS
from errors import FetchError, FetchErrorKind, ParseError
from models import FetchResult

logger = logging.getLogger(__name__)

_REQUEST_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,image/apng,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
    "Accept-Encoding": "gzip, deflate, br",
    "Connection": "keep-alive",
    "Upgrade-Insecure-Requests": "1",
    "Sec-Fetch-Dest": "document",
    "Sec-Fetch-Mode": "navigate",
    "Sec-Fetch-Site": "none",
    "Cache-Control": "max-age=0",
}

INVALID_URL_MESSAGE = "Invalid URL format. Please provide a complete URL including http:// or https://"
EMPTY_BODY_MESSAGE = (
    "Received empty response from the website. The page may not exist or is not accessible."
)
TIMEOUT_MESSAGE = "Connection timeout. The website is taking too long to respond."

_DNS_TOKENS = (
    "name or service not known",
    "nodename nor servname",
    "getaddrinfo failed",
    "name resolution",
    "no address associated",
)
_REFUSED_TOKENS = ("connection refused", "errno 111", "winerror 10061", "actively refused")
_TIMEOUT_TOKENS = ("timed out",)

# Top-level elements whose text never belongs to the page body.
_NON_BODY_TAGS = {"head", "title", "meta", "link", "base", "script", "style", "template"}
_RAW_WHITESPACE_TAGS = {"pre", "textarea", "title"}


def validate_url(url: str) -> str:
    """Return the stripped URL, or raise InvalidUrl for anything but absolute http(s)."""
    candidate = str(url or "").strip()
    try:
        parsed = urlparse(candidate)
    except ValueError:
        raise FetchError(FetchErrorKind.INVALID_URL, INVALID_URL_MESSAGE) from None
    if parsed.scheme.lower() not in {"http", "https"} or not parsed.netloc:
        raise FetchError(FetchErrorKind.INVALID_URL, INVALID_URL_MESSAGE)
    return candidate


def _status_error(status: int) -> FetchError:
    if status == 403:
        return FetchError(
            FetchErrorKind.FORBIDDEN,
            "Website blocked the audit request. This website may have anti-bot protection. "
            "Try a different URL or ensure the website is publicly accessible.",
        )
    if status == 404:
        return FetchError(
            FetchErrorKind.NOT_FOUND, "Page not found (404). Please check the URL and try again."
        )
    if status == 401:
        return FetchError(
            FetchErrorKind.UNAUTHORIZED, "Unauthorized (401). This page requires authentication."
        )
    if status == 503:
        return FetchError(
            FetchErrorKind.SERVER_UNAVAILABLE,
            "Service unavailable (503). The website may be down or experiencing issues.",
        )
    if status >= 500:
        return FetchError(
            FetchErrorKind.SERVER_ERROR,
            f"Server error ({status}). The website is experiencing technical difficulties.",
        )
    return FetchError(
        FetchErrorKind.OTHER, f"Failed to access website (HTTP {status}). Please try again."
    )


def _exception_chain(exc: BaseException) -> list[BaseException]:
    """Flatten the wrapped errors requests/urllib3 nest inside a ConnectionError."""
    seen: list[BaseException] = []
    pending: list[BaseException] = [exc]
    while pending:
        current = pending.pop()
        if any(current is item for item in seen):
            continue
        seen.append(current)
        nested = [arg for arg in getattr(current, "args", ()) if isinstance(arg, BaseException)]
        for candidate in (getattr(current, "reason", None), current.__cause__, current.__context__, *nested):
            if isinstance(candidate, BaseException):
                pending.append(candidate)
    return seen


def _connection_error(exc: requests.exceptions.ConnectionError) -> FetchError:
    chain = _exception_chain(exc)
    if any(isinstance(item, socket.gaierror) for item in chain):
        kind = FetchErrorKind.DNS_FAILURE
    elif any(isinstance(item, ConnectionRefusedError) for item in chain):
        kind = FetchErrorKind.CONNECTION_REFUSED
    # requests re-raises a stalled body read as ConnectionError, not Timeout.
    elif any(isinstance(item, (ReadTimeoutError, TimeoutError)) for item in chain):
        kind = FetchErrorKind.TIMEOUT
    else:
        text = " ".join(str(item) for item in chain).lower()
        if any(token in text for token in _DNS_TOKENS):
            kind = FetchErrorKind.DNS_FAILURE
        elif any(token in text for token in _REFUSED_TOKENS):
            kind = FetchErrorKind.CONNECTION_REFUSED
        elif any(token in text for token in _TIMEOUT_TOKENS):
            kind = FetchErrorKind.TIMEOUT
        else:
            kind = FetchErrorKind.OTHER

    if kind is FetchErrorKind.TIMEOUT:
        return FetchError(kind, TIMEOUT_MESSAGE)
    if kind is FetchErrorKind.DNS_FAILURE:
        return FetchError(
            kind,
            "Website not found. Please check the URL and ensure it includes http:// or https://",
        )
    if kind is FetchErrorKind.CONNECTION_REFUSED:
        return FetchError(
            kind, "Connection refused. The website may be down or blocking requests."
        )
    return FetchError(kind, f"Failed to fetch page: {exc}")


def fetch_page(
    url: str,
    session: requests.Session | None = None,
    timeout: float = FETCH_TIMEOUT_SECONDS,
    max_redirects: int = FETCH_MAX_REDIRECTS,
) -> FetchResult:
    """
    GET `url` once with browser-like headers and return its HTML and load time.
    Statuses of 400 and above, transport errors and empty bodies raise FetchError.
    """
    target = validate_url(url)

    owns_session = session is None
    http = session if session is not None else requests.Session()
    # Redirect cap lives on the session; restored below for injected sessions.
    previous_max_redirects = http.max_redirects
    http.max_redirects = max_redirects

    try:
        start = time.perf_counter()
        response = http.get(target, headers=_REQUEST_HEADERS, timeout=timeout, allow_redirects=True)
        load_time_ms = max(0, int(round((time.perf_counter() - start) * 1000)))
    except requests.exceptions.Timeout:
        raise FetchError(FetchErrorKind.TIMEOUT, TIMEOUT_MESSAGE) from None
    except requests.exceptions.TooManyRedirects:
        raise FetchError(
            FetchErrorKind.OTHER,
            f"Too many redirects. The website redirected more than {max_redirects} times.",
        ) from None
    except requests.exceptions.ConnectionError as e:
        raise _connection_error(e) from e
    except (requests.exceptions.InvalidURL, requests.exceptions.MissingSchema, requests.exceptions.InvalidSchema):
        raise FetchError(FetchErrorKind.INVALID_URL, INVALID_URL_MESSAGE) from None
    except requests.RequestException as e:
        raise FetchError(FetchErrorKind.OTHER, f"Failed to fetch page: {e}") from e
    finally:
        if owns_session:
            http.close()
        else:
            http.max_redirects = previous_max_redirects

    status = int(response.status_code)
    if status >= 400:
        raise _status_error(status)

    response.encoding = response.apparent_encoding or "utf-8"
    html = response.text or ""
    if not html.strip():
        raise FetchError(FetchErrorKind.OTHER, EMPTY_BODY_MESSAGE)

    logger.debug("Fetched %s: status=%s bytes=%d in %dms", target, status, len(html), load_time_ms)
    return {"html": html, "load_time_ms": load_time_ms}


def parse_html(html: str) -> BeautifulSoup:
    """Parse markup into a queryable tree; raise ParseError if the parser gives up."""
    try:
        # Keep whitespace-only titles at their raw length.
        return BeautifulSoup(html, "html.parser", preserve_whitespace_tags=_RAW_WHITESPACE_TAGS)
    except Exception as e:
        raise ParseError(f"Could not parse the page markup: {e}") from e


def _loose_text(nodes) -> list[str]:
    parts: list[str] = []
    for node in nodes:
        if isinstance(node, Tag):
            if node.name not in _NON_BODY_TAGS:
                parts.append(node.get_text())
        elif type(node) is NavigableString:
            parts.append(str(node))
    return parts


def body_text(doc: BeautifulSoup) -> str:
    """
    Visible text of the <body>, script and style contents excluded.

    html.parser leaves markup that follows </body> (or </html>) outside the
    body element; browsers move it into the body, so it is appended here.
    Fragments without a <body> element use everything outside the head.
    """
    body = doc.body
    if body is None:
        root = doc.html if doc.html is not None else doc
        return "".join(_loose_text(root.children))

    parts = [body.get_text(), *_loose_text(body.next_siblings)]
    if doc.html is not None and body.parent is doc.html:
        parts.extend(_loose_text(doc.html.next_siblings))
    return "".join(parts)


def page_title(doc: BeautifulSoup) -> str:
    return "".join(tag.get_text() for tag in doc.find_all("title"))


def meta_content(doc: BeautifulSoup, name: str) -> str | None:
    tag = doc.select_one(f'meta[name="{name}"]')
    if tag is None:
        return None
    return tag.get("content")
