"""Local ``$ref`` resolution for OpenAPI documents.

Schemas are never modified in place: :func:`inline_schema` builds a new tree,
so documents whose components share nodes or refer to themselves stay intact.
"""

import copy
from typing import Any
from urllib.parse import unquote

from openapi_cli.errors import DocumentLoadError

# Keywords whose values are schemas, grouped by container shape.
_SCHEMA_LIST_KEYWORDS = ("oneOf", "anyOf", "allOf", "prefixItems")
_SCHEMA_KEYWORDS = (
    "not",
    "items",
    "additionalItems",
    "additionalProperties",
    "contains",
    "propertyNames",
    "if",
    "then",
    "else",
)
_SCHEMA_MAP_KEYWORDS = ("properties", "patternProperties", "dependentSchemas")


def resolve_pointer(doc: dict, ref: str) -> Any:
    """Return the node a local JSON pointer such as ``#/components/schemas/Pet`` names."""
    if not ref.startswith("#"):
        raise DocumentLoadError(f"unsupported reference {ref}: only local references are resolved")

    node: Any = doc
    pointer = ref[1:].lstrip("/")
    if not pointer:
        return node
    for token in pointer.split("/"):
        token = unquote(token).replace("~1", "/").replace("~0", "~")
        if isinstance(node, dict) and token in node:
            node = node[token]
        elif isinstance(node, list) and token.isdigit() and int(token) < len(node):
            node = node[int(token)]
        else:
            raise DocumentLoadError(f"unresolvable reference {ref}")
    return node


def resolve_ref(doc: dict, obj: Any) -> Any:
    """Follow ``$ref`` chains on a parameter, request body or media object."""
    seen: set[str] = set()
    while isinstance(obj, dict) and "$ref" in obj:
        ref = obj["$ref"]
        if ref in seen:
            raise DocumentLoadError(f"circular reference {ref}")
        seen.add(ref)
        obj = resolve_pointer(doc, ref)
    return obj


def inline_schema(doc: dict, schema: Any, _active: frozenset[str] = frozenset()) -> Any:
    """Return a copy of ``schema`` with references inlined and discriminators dropped.

    Keys written next to a ``$ref`` override the referenced schema's keys.
    A reference back into a schema that is still being expanded becomes ``{}``.
    """
    if isinstance(schema, list):
        return [inline_schema(doc, item, _active) for item in schema]
    if not isinstance(schema, dict):
        return schema

    if "$ref" in schema:
        ref = schema["$ref"]
        if ref in _active:
            return {}
        target = resolve_pointer(doc, ref)
        if not isinstance(target, dict):
            raise DocumentLoadError(f"reference {ref} does not point to a schema")
        merged = {**target, **{k: v for k, v in schema.items() if k != "$ref"}}
        return inline_schema(doc, merged, _active | {ref})

    result: dict[str, Any] = {}
    for key, value in schema.items():
        if key == "discriminator":
            continue
        if key in _SCHEMA_LIST_KEYWORDS or key in _SCHEMA_KEYWORDS:
            result[key] = inline_schema(doc, value, _active)
        elif key in _SCHEMA_MAP_KEYWORDS and isinstance(value, dict):
            result[key] = {name: inline_schema(doc, sub, _active) for name, sub in value.items()}
        else:
            result[key] = copy.deepcopy(value)
    return result
