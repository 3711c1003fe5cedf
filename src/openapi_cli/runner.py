"""Operation lookup and execution across one or more OpenAPI documents.

Files are searched strictly in the order given and the first document that
declares the operation wins. If the same operation id appears in several
files, the result therefore depends on that order.
"""

import copy
import logging
from collections.abc import Sequence
from pathlib import Path

import httpx

from openapi_cli.config import RequestConfig
from openapi_cli.errors import OpenAPICliError, OperationNotFound, TransportError
from openapi_cli.logging import redact_payload
from openapi_cli.parser.listing import list_operations_json
from openapi_cli.parser.loader import load_document
from openapi_cli.parser.schema import extract_schema, get_schema_json
from openapi_cli.request.compiler import compile_request
from openapi_cli.request.validator import check_arguments, parse_arguments

logger = logging.getLogger(__name__)


def list_files(files: Sequence[Path | str]) -> list[str]:
    """Return the operation listing JSON of each file, in order."""
    listings = []
    for file in files:
        doc = load_document(file)
        listings.append(list_operations_json(doc))
    return listings


def get_schema(operation_id: str, files: Sequence[Path | str]) -> str:
    """Return the argument schema JSON from the first file declaring the operation."""
    for file in files:
        try:
            schema_json, _descriptor, found = get_schema_json(load_document(file), operation_id)
        except OpenAPICliError as e:
            context = f"failed to get schema for operation {operation_id} in file {file}"
            raise _with_context(e, context) from e
        if found:
            return schema_json
        logger.debug("Operation %s not in %s", operation_id, file)
    raise OperationNotFound(f"operation {operation_id} not found in any file")


def run_operation(
    operation_id: str,
    file: Path | str,
    args: str | None,
    config: RequestConfig | None = None,
    client: httpx.Client | None = None,
) -> tuple[str, bool]:
    """Execute the operation if ``file`` declares it.

    Returns ``(response_text, found)``. When the operation is not in the
    document, returns ``("", False)`` so the caller can try the next file.
    """
    doc = load_document(file)
    schema, descriptor, found = extract_schema(doc, operation_id)
    if not found:
        return "", False

    payload = parse_arguments(args)
    check_arguments(schema, payload, operation_id, str(doc.get("openapi", "")))
    logger.info("Running %s with %s", operation_id, redact_payload(payload))

    request = compile_request(descriptor, payload, config)
    return _send(request, client), True


def run(
    operation_id: str,
    args: str | None,
    files: Sequence[Path | str],
    config: RequestConfig | None = None,
    client: httpx.Client | None = None,
) -> str:
    """Run the operation from the first file that declares it."""
    for file in files:
        try:
            output, found = run_operation(operation_id, file, args, config, client)
        except OpenAPICliError as e:
            raise _with_context(e, f"failed to run operation {operation_id} in file {file}") from e
        if found:
            return output
    raise OperationNotFound(f"operation {operation_id} not found in any file")


def _send(request: httpx.Request, client: httpx.Client | None) -> str:
    try:
        if client is not None:
            response = client.send(request)
        else:
            with httpx.Client() as owned:
                response = owned.send(request)
    except httpx.HTTPError as e:
        raise TransportError(f"failed to make request: {e}") from e

    logger.info("%s %s -> %s", request.method, request.url.path, response.status_code)
    return response.text


def _with_context(error: OpenAPICliError, context: str) -> OpenAPICliError:
    """Copy ``error`` with the operation and file prepended to its message."""
    wrapped = copy.copy(error)
    wrapped.args = (f"{context}: {error}",)
    return wrapped
