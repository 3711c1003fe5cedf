"""Data models shared by the extractor, lister and request compiler.

The extractor flattens one OpenAPI operation into an OperationDescriptor;
the request compiler reads it back to place each argument on the wire.
"""

from pydantic import BaseModel

SUPPORTED_BODY_MIME_TYPES = (
    "application/json",
    "application/x-www-form-urlencoded",
    "multipart/form-data",
)

REQUEST_BODY_ARGUMENT = "requestBodyContent"


class Parameter(BaseModel):
    """A single named value bound to a request location."""

    name: str
    location: str  # query / path / header / cookie
    style: str = ""  # empty means the location default
    explode: bool | None = None  # None means the style default


class OperationDescriptor(BaseModel):
    """Where and how every argument of one operation goes on the wire."""

    operation_id: str
    server: str  # absolute base URL, or "" when the document has no servers
    path: str  # /pets/{petId}
    method: str  # GET / POST / PUT / DELETE / PATCH ...
    body_content_type: str = ""
    query_params: list[Parameter] = []
    path_params: list[Parameter] = []
    header_params: list[Parameter] = []
    cookie_params: list[Parameter] = []


class OperationSummary(BaseModel):
    """Human-readable description of one operation."""

    description: str = ""
    summary: str = ""
