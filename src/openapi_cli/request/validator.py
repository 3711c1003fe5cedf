"""Validates argument payloads against an operation's argument schema."""

import json

from jsonschema.validators import Draft4Validator, Draft202012Validator

from openapi_cli.errors import ArgumentValidationError


def parse_arguments(text: str | None) -> dict:
    """Decode the JSON argument payload. Empty input means ``{}``."""
    if not text or not text.strip():
        return {}
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise ArgumentValidationError(f"arguments are not valid JSON: {e}") from e
    if not isinstance(payload, dict):
        raise ArgumentValidationError("arguments must be a JSON object")
    return payload


def _validator_for(openapi_version: str):
    # OpenAPI 3.0 schemas use draft 4 keywords, e.g. boolean exclusiveMinimum.
    if str(openapi_version).startswith("3.0"):
        return Draft4Validator
    return Draft202012Validator


def _error_key(error) -> list[tuple]:
    return [(0, p, "") if isinstance(p, int) else (1, 0, str(p)) for p in error.absolute_path]


def validate_arguments(schema: dict, payload: dict | None, openapi_version: str = "") -> list[str]:
    """Check a payload against the schema.

    ``openapi_version`` is the document's ``openapi`` field. 3.0 documents are
    checked with draft 4 rules, anything else with draft 2020-12.
    Returns one message per violated constraint, empty when the payload is valid.
    """
    if payload is None:
        payload = {}
    validator = _validator_for(openapi_version)(schema)
    errors = []
    for error in sorted(validator.iter_errors(payload), key=_error_key):
        location = "/".join(str(p) for p in error.absolute_path)
        errors.append(f"{location}: {error.message}" if location else error.message)
    return errors


def check_arguments(
    schema: dict, payload: dict | None, operation_id: str = "", openapi_version: str = ""
) -> None:
    """Raise ArgumentValidationError listing every problem with the payload."""
    errors = validate_arguments(schema, payload, openapi_version)
    if errors:
        target = f" for operation {operation_id}" if operation_id else ""
        raise ArgumentValidationError(
            f"invalid arguments{target}:\n" + "\n".join(f"- {e}" for e in errors), errors
        )
