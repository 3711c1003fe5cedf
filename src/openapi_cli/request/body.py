"""Request body encoding for the supported content types."""

import json
import os
from typing import Any

from openapi_cli.errors import InvalidBodyShape, UnsupportedMIME
from openapi_cli.parser.base import REQUEST_BODY_ARGUMENT
from openapi_cli.request.serialize import stringify

_MISSING = object()


def encode_body(content_type: str, payload: dict) -> tuple[dict[str, str], dict[str, Any]]:
    """Encode ``requestBodyContent`` from the payload.

    Returns the headers to set and the keyword arguments for ``httpx.Request``.
    Non-empty multipart and form bodies get their Content-Type from httpx, which also
    picks the multipart boundary.
    """
    value = payload.get(REQUEST_BODY_ARGUMENT, _MISSING)

    if content_type == "application/json":
        body = {} if value is _MISSING else value
        return {"Content-Type": "application/json"}, {"content": json.dumps(body).encode("utf-8")}

    if content_type == "text/plain":
        text = "" if value is _MISSING else stringify(value)
        return {"Content-Type": "text/plain"}, {"content": text.encode("utf-8")}

    if content_type == "multipart/form-data":
        fields = _form_fields(content_type, value)
        if not fields:
            # httpx writes nothing for an empty files map; send a closed multipart body.
            boundary = os.urandom(16).hex()
            return (
                {"Content-Type": f"multipart/form-data; boundary={boundary}"},
                {"content": f"--{boundary}--\r\n".encode("ascii")},
            )
        # A (None, value) tuple makes httpx write a plain field with no filename.
        return {}, {"files": {key: (None, item) for key, item in fields.items()}}

    if content_type == "application/x-www-form-urlencoded":
        return {}, {"data": _form_fields(content_type, value)}

    raise UnsupportedMIME(f"unsupported MIME type: {content_type}")


def _form_fields(content_type: str, value: Any) -> dict[str, str]:
    if not isinstance(value, dict):
        raise InvalidBodyShape(f"{content_type} requires an object as the {REQUEST_BODY_ARGUMENT}")
    return {key: stringify(item) for key, item in value.items()}
