from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from ..common.logging import get_logger
from ..common.records import SkippedRecord
from .model import RoomEntry
from .normalizer import RecordNormalizer
from .repository import RoomEntryRepository

logger = get_logger(__name__)


@dataclass
class IngestResult:
    stored: list[RoomEntry] = field(default_factory=list)
    skipped: list[SkippedRecord] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "ingested": len(self.stored),
            "entry_ids": [e.entry_id for e in self.stored],
            "skipped": [s.to_dict() for s in self.skipped],
        }


class RoomEntryService:
    def __init__(self, entries: RoomEntryRepository, *, normalizer: RecordNormalizer):
        self._entries = entries
        self._normalizer = normalizer

    def ingest(self, raws: Iterable[Mapping[str, Any]]) -> IngestResult:
        """Normalise raw entry payloads and store the usable ones."""
        batch = self._normalizer.entries(raws)
        result = IngestResult(skipped=list(batch.skipped))
        for entry in batch.records:
            result.stored.append(self._entries.add(entry))

        logger.info("room_entries_ingested", stored=len(result.stored), skipped=len(result.skipped))
        return result
