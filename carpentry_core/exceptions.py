"""Exception hierarchy for the carpentry calculation core."""
from typing import Any


class CarpentryError(Exception):
    """Base class for every error raised by the calculation core."""


class InvalidGeometryError(CarpentryError, ValueError):
    """
    Raised when an opening or derived pane has a non-positive dimension.

    The message names the offending field so the designer form can highlight it:
        INVALID_GEOMETRY: width_mm must be > 0 (got -20.0).
    """
    def __init__(self, field: str, value: Any, context: str = ""):
        self.field = field
        self.value = value
        self.context = context
        message = f"INVALID_GEOMETRY: {field} must be > 0 (got {value})."
        if context:
            message = f"{message} {context}"
        super().__init__(message)


class EmptyBatchError(CarpentryError, ValueError):
    """Raised when a project has no design units to convert or estimate."""
    def __init__(self, project_name: str):
        self.project_name = project_name
        super().__init__(f"EMPTY_BATCH: project '{project_name}' has no design units to process.")
