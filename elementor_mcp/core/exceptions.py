"""
Core Exceptions

Error taxonomy for Elementor MCP operations. Every operation failure is
one of these kinds, each carrying a stable code and a message that names
the identifier or field involved.
"""


class ElementorMCPError(Exception):
    """
    Base class for errors surfaced to MCP callers.

    Usage:
        try:
            await service.remove_element(post_id, element_id)
        except ElementorMCPError as e:
            return error_result(e.message, {"code": e.code})
    """

    code = "error"

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, str]:
        return {"error": self.message, "code": self.code}


class NotFoundError(ElementorMCPError):
    """Document, element, widget type or template does not exist."""

    code = "not_found"


class InvalidInputError(ElementorMCPError):
    """
    A required parameter is missing or a value is not acceptable.

    ``field`` names the offending parameter or settings key.
    """

    code = "invalid_input"

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message)

    def to_dict(self) -> dict[str, str]:
        data = super().to_dict()
        if self.field:
            data["field"] = self.field
        return data


class StructuralConflictError(ElementorMCPError):
    """The requested mutation does not fit the tree (wrong kind, missing parent, cycle)."""

    code = "structural_conflict"


class UpstreamFailureError(ElementorMCPError):
    """A document store, widget registry or token store reported a failure."""

    code = "upstream_failure"


class MalformedElementError(AssertionError):
    """
    Raised when element data breaks the node contract.

    Signals upstream data corruption (missing id, unknown elType, widget
    without widgetType), not ordinary absence.
    """
