"""OpenAPI 3 parameter serialization.

Each function reads parameter values from the argument payload by name and
renders them for one request location according to the parameter's style
and explode settings. Missing arguments produce nothing. A style that is not
defined for a value's shape (for example ``deepObject`` with an array) is
skipped rather than treated as an error.
"""

import json
from typing import Any

from openapi_cli.parser.base import Parameter

_QUERY_DELIMITERS = {"form": ",", "spaceDelimited": " ", "pipeDelimited": "|"}


def stringify(value: Any) -> str:
    """Render a JSON value the way it appears inside a serialized parameter."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return json.dumps(value, separators=(",", ":"))


def _items(value: list) -> list[str]:
    return [stringify(item) for item in value]


def _pairs(value: dict) -> list[str]:
    """Flatten an object into alternating key, value entries."""
    flat = []
    for key, item in value.items():
        flat.extend([key, stringify(item)])
    return flat


def _assignments(value: dict) -> list[str]:
    return [f"{key}={stringify(item)}" for key, item in value.items()]


def serialize_path(path: str, params: list[Parameter], payload: dict) -> str:
    """Substitute path parameters into the ``{name}`` placeholders of ``path``."""
    for param in params:
        if param.name not in payload:
            continue
        rendered = _path_value(param, payload[param.name])
        if rendered is None:
            continue
        path = path.replace("{" + param.name + "}", rendered, 1)
    return path


def _path_value(param: Parameter, value: Any) -> str | None:
    style = param.style or "simple"
    explode = bool(param.explode)
    name = param.name

    if isinstance(value, list):
        items = _items(value)
        if style == "simple":
            return ",".join(items)
        if style == "label":
            return "." + ("." if explode else ",").join(items)
        if style == "matrix":
            if explode:
                return "".join(f";{name}={item}" for item in items)
            return f";{name}=" + ",".join(items)
    elif isinstance(value, dict):
        if style == "simple":
            return ",".join(_assignments(value) if explode else _pairs(value))
        if style == "label":
            if explode:
                return "".join(f".{entry}" for entry in _assignments(value))
            return "." + ",".join(_pairs(value))
        if style == "matrix":
            if explode:
                return "".join(f";{entry}" for entry in _assignments(value))
            return f";{name}=" + ",".join(_pairs(value))
    else:
        text = stringify(value)
        if style == "simple":
            return text
        if style == "label":
            return "." + text
        if style == "matrix":
            return f";{name}={text}"
    return None


def serialize_query(params: list[Parameter], payload: dict) -> list[tuple[str, str]]:
    """Return query pairs in parameter order; names may repeat."""
    pairs: list[tuple[str, str]] = []
    for param in params:
        if param.name in payload:
            pairs.extend(_query_pairs(param, payload[param.name]))
    return pairs


def _query_pairs(param: Parameter, value: Any) -> list[tuple[str, str]]:
    style = param.style or "form"
    explode = param.explode is None or param.explode
    name = param.name

    if isinstance(value, list):
        if style not in _QUERY_DELIMITERS:
            return []
        items = _items(value)
        if explode:
            return [(name, item) for item in items]
        return [(name, _QUERY_DELIMITERS[style].join(items))]

    if isinstance(value, dict):
        if style == "form":
            if explode:
                return [(key, stringify(item)) for key, item in value.items()]
            return [(name, ",".join(_pairs(value)))]
        if style == "deepObject":
            return [(f"{name}[{key}]", stringify(item)) for key, item in value.items()]
        return []

    return [(name, stringify(value))]


def serialize_headers(params: list[Parameter], payload: dict) -> list[tuple[str, str]]:
    """Return one (name, value) header line per parameter present in the payload."""
    headers: list[tuple[str, str]] = []
    for param in params:
        if param.name not in payload:
            continue
        value = payload[param.name]
        if isinstance(value, list):
            headers.append((param.name, ",".join(_items(value))))
        elif isinstance(value, dict):
            entries = _assignments(value) if param.explode else _pairs(value)
            headers.append((param.name, ",".join(entries)))
        else:
            headers.append((param.name, stringify(value)))
    return headers


def serialize_cookies(params: list[Parameter], payload: dict) -> list[tuple[str, str]]:
    """Return one (name, value) cookie per parameter; explode is not applied."""
    cookies: list[tuple[str, str]] = []
    for param in params:
        if param.name not in payload:
            continue
        value = payload[param.name]
        if isinstance(value, list):
            cookies.append((param.name, ",".join(_items(value))))
        elif isinstance(value, dict):
            cookies.append((param.name, ",".join(_pairs(value))))
        else:
            cookies.append((param.name, stringify(value)))
    return cookies


def cookie_header(cookies: list[tuple[str, str]]) -> str:
    """Join cookies into a single ``Cookie`` header value."""
    return "; ".join(f"{name}={_cookie_value(value)}" for name, value in cookies)


def _cookie_value(value: str) -> str:
    value = "".join(ch for ch in value if 0x20 <= ord(ch) < 0x7F and ch not in '";\\')
    if " " in value or "," in value:
        return f'"{value}"'
    return value
