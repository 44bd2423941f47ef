"""
defect_insights/repositories/defect_snapshot_repository.py

In-process holder for the most recently ingested defect set.

Each upload replaces the whole snapshot. Readers receive either the
previous snapshot or the new one, never a partially written set.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from functools import lru_cache

from defect_insights.domain.defect import Defect, IngestionResult, RowError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DefectSnapshot:
    """
    One immutable ingested record set.
    """

    defects: tuple[Defect, ...]
    errors: tuple[RowError, ...] = ()
    uploaded_at: datetime = field(default_factory=lambda: datetime.now(tz=timezone.utc))
    source_name: str | None = None


class DefectSnapshotRepository:
    """
    Thread-safe, single-slot snapshot store.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._snapshot: DefectSnapshot | None = None

    def replace(
        self,
        result: IngestionResult,
        *,
        source_name: str | None = None,
    ) -> DefectSnapshot:
        """
        Swap in a new snapshot built from *result* and return it.
        """

        snapshot = DefectSnapshot(
            defects=tuple(result.defects),
            errors=tuple(result.errors),
            source_name=source_name,
        )
        with self._lock:
            self._snapshot = snapshot
        logger.info(
            "Defect snapshot replaced defects=%d source=%r",
            len(snapshot.defects),
            source_name,
        )
        return snapshot

    def latest(self) -> DefectSnapshot | None:
        with self._lock:
            return self._snapshot

    def clear(self) -> bool:
        """
        Drop the current snapshot. Returns ``True`` if one existed.
        """

        with self._lock:
            existed = self._snapshot is not None
            self._snapshot = None
        if existed:
            logger.info("Defect snapshot cleared")
        return existed


@lru_cache(maxsize=1)
def get_defect_snapshot_repository() -> DefectSnapshotRepository:
    """
    Process-wide repository used by the API layer.
    """

    return DefectSnapshotRepository()
