"""
Exception hierarchy for the gallery catalog.

Messages use category vocabulary only; filesystem paths are kept on the
exception for logging and never rendered into API responses.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional


class GalleryError(Exception):
    """Base exception for all gallery errors."""
    pass


class ConfigError(GalleryError):
    """Raised when gallery.toml holds values we cannot use."""
    pass


class CategoryNotFound(GalleryError):
    """Raised when a category key is not registered for the requested kind."""

    def __init__(self, kind: str, key: str) -> None:
        self.kind = kind
        self.key = key
        super().__init__(f"unknown {kind} category '{key}'")


class CatalogIOError(GalleryError):
    """Raised when the media tree cannot be read consistently (stat/list failures)."""

    def __init__(self, operation: str, path: Optional[Path] = None) -> None:
        self.operation = operation
        self.path = path
        super().__init__(f"{operation} failed")

    def __str__(self) -> str:
        if self.path is not None:
            return f"{self.operation} failed for {self.path}"
        return f"{self.operation} failed"
