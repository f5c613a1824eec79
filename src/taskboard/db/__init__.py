"""Document store helpers."""

from __future__ import annotations

from .connection import close_document_store, init_document_store

__all__ = ["close_document_store", "init_document_store"]
