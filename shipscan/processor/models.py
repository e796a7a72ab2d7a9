from dataclasses import dataclass
from enum import Enum

from shipscan.extraction.models import ExtractedDocument, ExtractionSource


class ProcessingStatus(str, Enum):
    """Persisted processing_status of a document."""

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class Checkpoint(Enum):
    """Ordered progress milestones of one document."""

    QUEUED = "queued"
    RECOGNIZED = "recognized"
    EXTRACTED = "extracted"
    PERSISTED = "persisted"

    @property
    def position(self) -> int:
        return list(type(self)).index(self)

    @property
    def percent(self) -> int:
        return (self.position + 1) * 100 // len(type(self))


@dataclass(frozen=True)
class ProcessingReport:
    """Outcome of one orchestrator run. ``document`` is None only when failed."""

    document_id: str
    status: ProcessingStatus
    document: ExtractedDocument | None = None
    source: ExtractionSource | None = None
    message: str = ""

    @property
    def succeeded(self) -> bool:
        return self.status is ProcessingStatus.COMPLETED
