"""Exception hierarchy for storybook-mcp.

Only ``ConfigurationError`` is allowed to abort the process. Everything else
is caught at the tool dispatch boundary and reported as an ``Error: ...``
text payload.
"""


class StorybookMCPError(Exception):
    """Base class for all storybook-mcp errors."""

    pass


class ConfigurationError(StorybookMCPError):
    """Raised when required configuration is missing or unusable."""

    pass


class FetchFailedError(StorybookMCPError):
    """Raised when the Storybook index cannot be retrieved or decoded."""

    pass


class IndexSchemaError(StorybookMCPError):
    """Raised when an index document is not a usable Storybook index."""

    pass


class ComponentNotFoundError(StorybookMCPError):
    """Raised when no index entry matches the requested component."""

    def __init__(self, component_name: str, message: str = None):
        self.component_name = component_name
        super().__init__(
            message or f'Component "{component_name}" not found in Storybook'
        )


class SchemaMismatchError(ComponentNotFoundError):
    """Raised when the index lacks the collection its version requires.

    Subclasses ``ComponentNotFoundError`` so lookups treat it as not found,
    while callers that care can still tell an unusable index apart.
    """

    def __init__(self, component_name: str, collection: str):
        self.collection = collection
        super().__init__(
            component_name,
            f'Component "{component_name}" not found in Storybook '
            f"(index has no '{collection}' collection)",
        )


class BrowserOperationError(StorybookMCPError):
    """Base class for failures inside a browser page operation."""

    pass


class NavigationFailedError(BrowserOperationError):
    """Raised when a page cannot be navigated to."""

    pass


class ExtractionTimeoutError(BrowserOperationError):
    """Raised when the props table never renders on a docs page."""

    pass


class ExtractionFailedError(BrowserOperationError):
    """Raised when a rendered props table cannot be read from the page."""

    pass


class HandlerExecutionError(BrowserOperationError):
    """Raised when a custom tool handler throws inside the page."""

    pass


class UnknownToolError(StorybookMCPError):
    """Raised when a tool call names neither a built-in nor a custom tool."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class ToolArgumentsError(StorybookMCPError):
    """Raised when tool call arguments do not match the declared input schema."""

    pass


class CustomToolValidationError(StorybookMCPError):
    """Raised for a single invalid custom tool definition."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(message)
