"""Error types raised while loading documents and running operations."""


class OpenAPICliError(Exception):
    """Base class for every error this package raises."""


class DocumentLoadError(OpenAPICliError):
    """The document could not be read, parsed, or is not OpenAPI 3.x."""


class InvalidServerURL(OpenAPICliError):
    """The resolved server URL is not an absolute http(s) URL."""


class UnsupportedBodyMIME(OpenAPICliError):
    """The operation declares a request body with no supported content type."""


class ArgumentValidationError(OpenAPICliError):
    """The argument payload does not satisfy the operation's schema."""

    def __init__(self, message: str, errors: list[str] | None = None):
        super().__init__(message)
        self.errors = errors or []


class InvalidBodyShape(OpenAPICliError):
    """A form-style request body argument is not a JSON object."""


class UnsupportedMIME(OpenAPICliError):
    """No encoder exists for the request body content type."""


class TransportError(OpenAPICliError):
    """The HTTP request could not be completed."""


class OperationNotFound(OpenAPICliError):
    """None of the searched documents declares the operation."""
