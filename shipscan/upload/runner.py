from collections.abc import Callable

from shipscan.database.repositories.documents_repository import DocumentsRepository
from shipscan.logging.logger import Log
from shipscan.processor.models import Checkpoint
from shipscan.processor.processor import Processor
from shipscan.upload.models import UploadItem, UploadStatus

ItemListener = Callable[[UploadItem], None]


class ItemRunner:
    """Run one upload item end to end; failures stay on that item."""

    def __init__(
        self,
        doc_repo: DocumentsRepository,
        owner_id: str,
        listener: ItemListener | None = None,
    ) -> None:
        self._doc_repo = doc_repo
        self._owner_id = owner_id
        self._listener = listener

    def run(self, item: UploadItem, processor_provider: Callable[[], Processor]) -> None:
        """Drive a pending item to success or error. Never raises."""
        Log.info(f"Running upload {item.id} ({item.scan.filename})")
        try:
            item.start()
            self._notify(item)

            # No documents row until the pipeline can actually run.
            processor = processor_provider()
            record = self._doc_repo.create(
                self._owner_id,
                item.scan.filename,
                file_size=item.scan.size_bytes,
                file_type=item.scan.mime_type,
            )
            item.document_id = record.id
            self._advance(item, Checkpoint.QUEUED)

            report = processor.process(
                record.id,
                item.scan,
                on_checkpoint=lambda checkpoint: self._advance(item, checkpoint),
            )
            if report.succeeded and report.document is not None:
                item.succeed(report.document)
                Log.info(f"Upload {item.id} succeeded (document {record.id})")
            else:
                item.fail(report.message)
                Log.warning(f"Upload {item.id} failed: {report.message}")
            self._notify(item)
        except Exception as exc:
            self._handle_failure(item, exc)

    def _advance(self, item: UploadItem, checkpoint: Checkpoint) -> None:
        item.advance(checkpoint)
        self._notify(item)

    def _notify(self, item: UploadItem) -> None:
        if self._listener is not None:
            self._listener(item)

    def _handle_failure(self, item: UploadItem, exc: Exception) -> None:
        Log.error(f"Upload {item.id} failed: {exc}")
        if item.is_terminal:
            return
        if item.status is UploadStatus.PENDING:
            item.start()
        item.fail(str(exc))
        try:
            self._notify(item)
        except Exception:
            Log.exception(f"Listener failed while reporting upload {item.id}")
