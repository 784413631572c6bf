"""
Custom exceptions for the application.
"""
from typing import Any, Dict, List, Optional


class DeckGenException(Exception):
    """Base exception for all DeckGen exceptions."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(DeckGenException):
    """Validation error exception."""

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(message, status_code=400, details=details)


class NotFoundError(DeckGenException):
    """Resource not found exception."""

    def __init__(self, resource: str, resource_id: Any):
        message = f"{resource} {resource_id} not found"
        super().__init__(message, status_code=404)


class GenerationError(DeckGenException):
    """Presentation content could not be generated."""

    def __init__(self, message: str, last_error: Optional[BaseException] = None):
        self.last_error = last_error
        details = {"cause": str(last_error)} if last_error else {}
        super().__init__(message, status_code=500, details=details)


class ParseError(DeckGenException):
    """No extraction strategy produced structured data from a model response."""

    def __init__(self, message: str, raw_text: str, reasons: Optional[List[str]] = None):
        self.raw_text = raw_text
        self.reasons = reasons or []
        super().__init__(message, status_code=422, details={"reasons": self.reasons})


class ImageError(DeckGenException):
    """Image generation failure. Handled softly by the enricher."""

    def __init__(self, message: str, description: Optional[str] = None):
        details = {"description": description} if description else {}
        super().__init__(message, status_code=502, details=details)


class RenderError(DeckGenException):
    """Rendered artifact could not be written."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        details = {"path": path} if path else {}
        super().__init__(message, status_code=500, details=details)


class StorageError(DeckGenException):
    """Storage operation error exception."""

    def __init__(self, message: str, operation: Optional[str] = None):
        details = {"operation": operation} if operation else {}
        super().__init__(message, status_code=500, details=details)
