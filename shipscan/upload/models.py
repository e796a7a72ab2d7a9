import uuid
from dataclasses import dataclass, field
from enum import Enum

from shipscan.extraction.models import ExtractedDocument
from shipscan.processor.models import Checkpoint
from shipscan.recognition.models import RawScan
from shipscan.upload.exceptions import UploadStateError


class UploadStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SUCCESS = "success"
    ERROR = "error"


@dataclass
class UploadItem:
    """One selected file moving through pending -> processing -> success|error."""

    scan: RawScan
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    status: UploadStatus = UploadStatus.PENDING
    progress: int = 0
    checkpoint: Checkpoint | None = None
    result: ExtractedDocument | None = None
    document_id: str | None = None
    error_message: str | None = None

    @property
    def is_terminal(self) -> bool:
        return self.status in (UploadStatus.SUCCESS, UploadStatus.ERROR)

    def start(self) -> None:
        self._require(UploadStatus.PENDING, "start")
        self.status = UploadStatus.PROCESSING

    def advance(self, checkpoint: Checkpoint) -> None:
        """Record a checkpoint; checkpoints only move forward."""
        self._require(UploadStatus.PROCESSING, "advance")
        if self.checkpoint is not None and checkpoint.position <= self.checkpoint.position:
            raise UploadStateError(
                f"Upload {self.id} cannot go from {self.checkpoint.value} back to "
                f"{checkpoint.value}"
            )
        self.checkpoint = checkpoint
        self.progress = max(self.progress, checkpoint.percent)

    def succeed(self, result: ExtractedDocument) -> None:
        self._require(UploadStatus.PROCESSING, "succeed")
        self.status = UploadStatus.SUCCESS
        self.result = result
        self.progress = 100

    def fail(self, message: str) -> None:
        self._require(UploadStatus.PROCESSING, "fail")
        self.status = UploadStatus.ERROR
        self.error_message = message
        self.progress = 100

    def _require(self, expected: UploadStatus, action: str) -> None:
        if self.status is not expected:
            raise UploadStateError(
                f"Cannot {action} upload {self.id} in status '{self.status.value}'"
            )
