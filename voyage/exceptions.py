# FILE: voyage/exceptions.py
"""
Error taxonomy for memory operations
"""
from typing import Any, Dict, List, Optional


class VoyageError(Exception):
    """Base exception for Voyage errors."""

    def __init__(self, message: str, kind: str = "error"):
        super().__init__(message)
        self.message = message
        self.kind = kind


class ValidationError(VoyageError):
    """Raised when a write or a filter is rejected before reaching the store."""

    def __init__(
        self,
        message: str,
        errors: Optional[List[Dict[str, Any]]] = None,
        kind: str = "invalid-field"
    ):
        super().__init__(message, kind=kind)
        self.errors = errors or []


class NotFoundError(VoyageError):
    """Raised when no record matches both the id and the owner."""

    def __init__(self, message: str = "Memory not found"):
        super().__init__(message, kind="not-found")


class StoreError(VoyageError):
    """Raised when the underlying persistence fails."""

    def __init__(self, message: str = "Store operation failed"):
        super().__init__(message, kind="store")
