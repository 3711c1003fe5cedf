"""Builds the HTTP request for one operation from its descriptor and arguments."""

import logging
from urllib.parse import parse_qsl, quote, urlencode, urlsplit, urlunsplit

import httpx

from openapi_cli.config import RequestConfig
from openapi_cli.errors import InvalidServerURL
from openapi_cli.parser.base import OperationDescriptor
from openapi_cli.request.body import encode_body
from openapi_cli.request.serialize import (
    cookie_header,
    serialize_cookies,
    serialize_headers,
    serialize_path,
    serialize_query,
)

logger = logging.getLogger(__name__)

# Characters left as-is in a path: RFC 3986 pchar plus "/".
_PATH_SAFE = "/:@!$&'()*+,;=-._~"


def compile_request(
    descriptor: OperationDescriptor, payload: dict, config: RequestConfig | None = None
) -> httpx.Request:
    """Place every argument on the wire and return the unsent request."""
    config = config or RequestConfig()

    path = serialize_path(descriptor.path, descriptor.path_params, payload)
    query = serialize_query(descriptor.query_params, payload)
    if config.query_key:
        query.append(("key", config.query_key))
    url = _build_url(_base_url(descriptor, config), path, query)

    headers: list[tuple[str, str]] = []
    if config.bearer_token:
        headers.append(("Authorization", f"Bearer {config.bearer_token}"))
    headers.extend(serialize_headers(descriptor.header_params, payload))

    cookies = serialize_cookies(descriptor.cookie_params, payload)
    if cookies:
        headers.append(("Cookie", cookie_header(cookies)))

    body_kwargs = {}
    if descriptor.body_content_type:
        body_headers, body_kwargs = encode_body(descriptor.body_content_type, payload)
        headers.extend(body_headers.items())

    logger.debug("Compiled %s %s", descriptor.method, path)
    # httpx encodes str header values as ASCII; send argument text as UTF-8.
    raw_headers = [(name, value.encode("utf-8")) for name, value in headers]
    return httpx.Request(descriptor.method, url, headers=raw_headers, **body_kwargs)


def _base_url(descriptor: OperationDescriptor, config: RequestConfig) -> str:
    server = descriptor.server or config.default_host or ""
    if not server:
        raise InvalidServerURL(
            f"operation {descriptor.operation_id} has no server and no default host is configured"
        )
    if not server.startswith("http"):
        raise InvalidServerURL(f"invalid server URL: {server} (must use HTTP or HTTPS)")
    return server


def _build_url(server: str, path: str, query: list[tuple[str, str]]) -> str:
    """Join server and path with one slash; server query pairs come first."""
    scheme, netloc, base_path, server_query, fragment = urlsplit(server)
    full_path = base_path.rstrip("/") + "/" + quote(path.lstrip("/"), safe=_PATH_SAFE)
    pairs = parse_qsl(server_query, keep_blank_values=True) + query
    return urlunsplit((scheme, netloc, full_path, urlencode(pairs), fragment))
