"""
app/repositories package marker.
"""

from app.repositories.dataset_store import DatasetStore, ReadWriteLock, get_dataset_store

__all__ = [
    "DatasetStore",
    "ReadWriteLock",
    "get_dataset_store",
]
