"""
app/repositories/dataset_store.py

In-memory holder for the most recently ingested ticket dataset.
"""

from __future__ import annotations

import dataclasses
import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from functools import lru_cache

from app.domain.ticket_metrics import EMPTY_SNAPSHOT, DatasetSnapshot

logger = logging.getLogger(__name__)


class ReadWriteLock:
    """
    In-process shared/exclusive lock.

    Any number of readers may hold the lock together; a writer holds it
    alone. A waiting writer stops new readers from entering.
    """

    def __init__(self) -> None:
        self._condition = threading.Condition(threading.Lock())
        self._active_readers = 0
        self._waiting_writers = 0
        self._writer_active = False

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._condition:
            while self._writer_active or self._waiting_writers:
                self._condition.wait()
            self._active_readers += 1
        try:
            yield
        finally:
            with self._condition:
                self._active_readers -= 1
                if self._active_readers == 0:
                    self._condition.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._condition:
            self._waiting_writers += 1
            try:
                while self._writer_active or self._active_readers:
                    self._condition.wait()
            finally:
                self._waiting_writers -= 1
            self._writer_active = True
        try:
            yield
        finally:
            with self._condition:
                self._writer_active = False
                self._condition.notify_all()


class DatasetStore:
    """
    Last-write-wins store for one DatasetSnapshot.

    Snapshots are built completely by the caller before :meth:`replace`;
    the write lock only covers the reference swap, so readers observe
    either the previous or the new snapshot and never a mix.
    """

    def __init__(self) -> None:
        self._lock = ReadWriteLock()
        self._snapshot: DatasetSnapshot = EMPTY_SNAPSHOT
        self._version = 0

    def replace(self, snapshot: DatasetSnapshot) -> DatasetSnapshot:
        """
        Publish ``snapshot`` as the current dataset and return it with its assigned version.
        """

        with self._lock.write():
            self._version += 1
            published = dataclasses.replace(snapshot, version=self._version)
            self._snapshot = published

        logger.info(
            "Dataset snapshot published version=%s rows=%s",
            published.version,
            len(published.rows),
        )
        return published

    def current(self) -> DatasetSnapshot:
        """
        Return the latest snapshot, or EMPTY_SNAPSHOT when nothing was ingested.
        """

        with self._lock.read():
            return self._snapshot


@lru_cache(maxsize=1)
def get_dataset_store() -> DatasetStore:
    """
    Return the process-wide store shared by ingestion and query services.
    """

    return DatasetStore()
