"""
Repository layer - abstracts persistence.

Usage:
    from repositories import get_repository

    repo = get_repository(settings)  # Returns configured backend
    doc_id = repo.painpoints.add(record.to_document())
    newest = repo.painpoints.query(order_by="createdAt", descending=True, limit=50)

Backends are swappable via STORAGE_BACKEND (json, memory, firestore).
"""

from typing import Optional

from config import Settings
from .base import Collection, Repository

BACKENDS = ("json", "memory", "firestore")

# Backend override; None means use settings.storage_backend
_backend: Optional[str] = None
_instance: Optional[Repository] = None


def get_repository(settings: Settings) -> Repository:
    """Get the configured repository instance."""
    global _instance

    if _instance is None:
        backend = _backend or settings.storage_backend
        if backend == "json":
            from .json_backend import JsonRepository
            _instance = JsonRepository(
                base_path=settings.data_dir,
                primary=settings.primary_collection,
                public=settings.public_collection,
                waitlist=settings.waitlist_collection,
            )
        elif backend == "memory":
            from .memory_backend import MemoryRepository
            _instance = MemoryRepository(
                primary=settings.primary_collection,
                public=settings.public_collection,
                waitlist=settings.waitlist_collection,
            )
        elif backend == "firestore":
            # Imported lazily so local backends don't need Google credentials
            from .firestore_backend import FirestoreRepository
            _instance = FirestoreRepository(settings)
        else:
            raise ValueError(f"Unknown backend: {backend}")

    return _instance


def configure_backend(backend: Optional[str]) -> None:
    """Override the repository backend (None restores the settings value)."""
    global _backend, _instance
    if backend is not None and backend not in BACKENDS:
        raise ValueError(f"Unknown backend: {backend}")
    _backend = backend
    _instance = None  # Force re-initialization


__all__ = ["get_repository", "configure_backend", "Repository", "Collection", "BACKENDS"]
