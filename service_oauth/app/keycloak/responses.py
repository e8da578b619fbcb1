"""
Terminal responses for the authorize and token flows.

Building a response ends the exchange: callers return it straight away and
do not read or write the request afterwards.
"""

import json
from typing import Iterable, Mapping, Optional, Tuple, Union

from fastapi import Response

ERROR_CONTENT_TYPE = "application/json;charset=UTF-8"

# The runtime recomputes framing, and httpx has already decoded the body.
SKIPPED_HEADERS = frozenset({
    "connection",
    "keep-alive",
    "content-length",
    "content-encoding",
    "transfer-encoding",
})

Headers = Union[Mapping[str, str], Iterable[Tuple[str, str]]]


def _header_items(headers: Optional[Headers]) -> Iterable[Tuple[str, str]]:
    if headers is None:
        return ()
    if hasattr(headers, "multi_items"):
        return headers.multi_items()
    if isinstance(headers, Mapping):
        return headers.items()
    return headers


def respond(status: int, body: Union[bytes, str, None], headers: Optional[Headers] = None) -> Response:
    """Build the final response with the given status, body and headers."""
    response = Response(content=body or b"", status_code=status)
    for name, value in _header_items(headers):
        if name.lower() in SKIPPED_HEADERS:
            continue
        if name.lower() == "content-type":
            response.headers[name] = value
        else:
            response.headers.append(name, value)
    return response


def respond_with_error(status: int, message: str) -> Response:
    """Build an OAuth error response: ``{"error": message}``."""
    # TODO: add WWW-Authenticate on 401 (RFC 6749 section 5.2)
    body = json.dumps({"error": message}, separators=(",", ":"))
    return respond(status, body, {"Content-Type": ERROR_CONTENT_TYPE})
