from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SkippedRecord:
    """A record left out of a batch because it could not be used."""

    kind: str
    record_id: Optional[object]
    reason: str

    def to_dict(self) -> dict:
        return {"kind": self.kind, "record_id": self.record_id, "reason": self.reason}
