"""Service layer exports."""

from . import catalog, content_store, dispatcher, metadata

__all__ = ["catalog", "content_store", "dispatcher", "metadata"]
