"""Server URL resolution."""

from openapi_cli.errors import InvalidServerURL


def resolve_server(*server_lists: list[dict] | None) -> str:
    """Pick the base URL from the most specific non-empty server list.

    Lists are given most specific first (operation, path item, document).
    Returns "" when none of them declares a server.
    """
    for servers in server_lists:
        if servers:
            return parse_server(servers[0])
    return ""


def parse_server(server: dict) -> str:
    """Substitute variable defaults into one server entry's URL."""
    url = str(server.get("url", ""))
    for name, variable in (server.get("variables") or {}).items():
        if not variable:
            continue
        if variable.get("default") not in (None, ""):
            url = url.replace("{" + name + "}", str(variable["default"]), 1)
        elif variable.get("enum"):
            url = url.replace("{" + name + "}", str(variable["enum"][0]), 1)

    if not url.startswith("http"):
        raise InvalidServerURL(
            f"invalid server URL: {url} (must use HTTP or HTTPS; relative URLs not supported)"
        )
    return url
