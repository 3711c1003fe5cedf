"""OpenAPI 3.x document loading.

Documents are read as YAML, which also accepts JSON, and returned as plain
mappings for the extractor and lister to walk.
"""

import logging
from collections.abc import Iterator
from pathlib import Path

import yaml

from openapi_cli.errors import DocumentLoadError

logger = logging.getLogger(__name__)

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")


def load_document(file_path: Path | str) -> dict:
    """Load an OpenAPI 3.x file into a mapping."""
    file_path = Path(file_path)
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise DocumentLoadError(f"failed to read OpenAPI file {file_path}: {e}") from e

    try:
        doc = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise DocumentLoadError(f"failed to parse OpenAPI file {file_path}: {e}") from e

    if not isinstance(doc, dict):
        raise DocumentLoadError(f"OpenAPI file {file_path} does not contain a mapping")

    version = str(doc.get("openapi", ""))
    if not version.startswith("3."):
        raise DocumentLoadError(
            f"{file_path} is not an OpenAPI 3.x document (openapi: {version or 'missing'})"
        )

    logger.debug("Loaded %s (openapi %s, %d paths)", file_path, version, len(doc.get("paths") or {}))
    return doc


def iter_operations(doc: dict) -> Iterator[tuple[str, str, dict, dict]]:
    """Yield (path, method, path_item, operation) in document order.

    Paths come in declared order and, within a path, methods in declared
    order, so duplicate operation ids always resolve the same way.
    """
    for path, path_item in (doc.get("paths") or {}).items():
        if not isinstance(path_item, dict):
            continue
        for method, operation in path_item.items():
            if method.lower() not in HTTP_METHODS or not isinstance(operation, dict):
                continue
            yield path, method.upper(), path_item, operation
