"""Operation directory for an OpenAPI document."""

import json

from openapi_cli.parser.base import OperationSummary
from openapi_cli.parser.loader import iter_operations


def list_operations(doc: dict) -> dict[str, OperationSummary]:
    """Map every operation id to its summary and description.

    When two operations share an id, the one declared last wins.
    """
    operations: dict[str, OperationSummary] = {}
    for _path, _method, _path_item, operation in iter_operations(doc):
        operation_id = operation.get("operationId")
        if not operation_id:
            continue
        operations[operation_id] = OperationSummary(
            description=operation.get("description") or "",
            summary=operation.get("summary") or "",
        )
    return operations


def list_operations_json(doc: dict) -> str:
    operations = {
        operation_id: summary.model_dump(exclude_defaults=True)
        for operation_id, summary in list_operations(doc).items()
    }
    return json.dumps({"operations": operations}, indent=4)
