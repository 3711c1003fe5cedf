"""Argument schema extraction.

Finds one operation by id and flattens its parameters and request body into
a single JSON Schema object, together with an OperationDescriptor that
records where each argument goes when the request is built.
"""

import json
import logging
from typing import Any

from openapi_cli.errors import UnsupportedBodyMIME
from openapi_cli.parser.base import (
    REQUEST_BODY_ARGUMENT,
    SUPPORTED_BODY_MIME_TYPES,
    OperationDescriptor,
    Parameter,
)
from openapi_cli.parser.loader import iter_operations
from openapi_cli.parser.refs import inline_schema, resolve_ref
from openapi_cli.parser.servers import resolve_server

logger = logging.getLogger(__name__)

_LOCATION_BUCKETS = {
    "query": "query_params",
    "path": "path_params",
    "header": "header_params",
    "cookie": "cookie_params",
}


def extract_schema(
    doc: dict, operation_id: str
) -> tuple[dict | None, OperationDescriptor | None, bool]:
    """Build the argument schema and descriptor for ``operation_id``.

    Returns ``(schema, descriptor, found)``. ``found`` is False, with no
    error, when the document does not declare the operation.
    """
    for path, method, path_item, operation in iter_operations(doc):
        if operation.get("operationId") != operation_id:
            continue

        logger.debug("Found operation %s at %s %s", operation_id, method, path)
        server = resolve_server(
            operation.get("servers"), path_item.get("servers"), doc.get("servers")
        )
        descriptor = OperationDescriptor(
            operation_id=operation_id, server=server, path=path, method=method
        )
        arguments: dict[str, Any] = {"type": "object", "properties": {}, "required": []}

        parameters = [*(operation.get("parameters") or []), *(path_item.get("parameters") or [])]
        for raw in parameters:
            param = resolve_ref(doc, raw)
            _add_parameter(doc, param, arguments, descriptor)

        if operation.get("requestBody"):
            body = resolve_ref(doc, operation["requestBody"])
            mime, body_schema = _extract_body(doc, body, operation_id)
            descriptor.body_content_type = mime
            arguments["properties"][REQUEST_BODY_ARGUMENT] = body_schema
            arguments["required"].append(REQUEST_BODY_ARGUMENT)

        return arguments, descriptor, True

    return None, None, False


def get_schema_json(doc: dict, operation_id: str) -> tuple[str, OperationDescriptor | None, bool]:
    """Like :func:`extract_schema`, with the schema rendered as indented JSON."""
    schema, descriptor, found = extract_schema(doc, operation_id)
    if not found:
        return "", None, False
    return json.dumps(schema, indent=4), descriptor, True


def _add_parameter(
    doc: dict, param: dict, arguments: dict[str, Any], descriptor: OperationDescriptor
) -> None:
    if not isinstance(param, dict):
        logger.warning("Skipping malformed parameter %r", param)
        return
    name = param.get("name")
    location = param.get("in")
    if not name or location not in _LOCATION_BUCKETS:
        logger.warning("Skipping parameter %r with location %r", name, location)
        return

    schema = inline_schema(doc, _parameter_schema(doc, param))
    if isinstance(schema, dict) and not schema.get("description") and param.get("description"):
        schema["description"] = param["description"]

    arguments["properties"][name] = schema
    if param.get("required") and name not in arguments["required"]:
        arguments["required"].append(name)

    getattr(descriptor, _LOCATION_BUCKETS[location]).append(
        Parameter(
            name=name,
            location=location,
            style=param.get("style") or "",
            explode=param.get("explode"),
        )
    )


def _parameter_schema(doc: dict, param: dict) -> Any:
    if "schema" in param:
        return param["schema"]
    # Parameters may describe their value with a single-entry content map.
    for media in (param.get("content") or {}).values():
        media = resolve_ref(doc, media) or {}
        if "schema" in media:
            return media["schema"]
    return {}


def _extract_body(doc: dict, body: dict, operation_id: str) -> tuple[str, Any]:
    content = body.get("content") or {}
    for mime, media in content.items():
        if mime not in SUPPORTED_BODY_MIME_TYPES:
            continue

        media = resolve_ref(doc, media) or {}
        schema = inline_schema(doc, media.get("schema") or {})
        if isinstance(schema, dict):
            _drop_read_only(schema)
            if not schema.get("description") and body.get("description"):
                schema["description"] = body["description"]
        return mime, schema

    raise UnsupportedBodyMIME(
        f"no supported MIME type found for request body in operation {operation_id} "
        f"(declared: {', '.join(content) or 'none'})"
    )


def _drop_read_only(schema: dict) -> None:
    """Remove server-only properties, which clients never send."""
    properties = schema.get("properties")
    if not isinstance(properties, dict):
        return
    read_only = [
        key for key, prop in properties.items() if isinstance(prop, dict) and prop.get("readOnly")
    ]
    for key in read_only:
        del properties[key]
    if read_only and isinstance(schema.get("required"), list):
        schema["required"] = [key for key in schema["required"] if key not in read_only]
