"""Batch upload session.

A session owns the items a user selected, runs them one at a time in
submission order, and holds the session's recognizer lease from the pool
until it is closed.
"""

import uuid
from collections.abc import Callable, Collection, Iterable
from functools import partial
from types import TracebackType

from shipscan.config.settings import Settings
from shipscan.database.repositories.documents_repository import DocumentsRepository
from shipscan.logging.logger import Log
from shipscan.processor.processor import Processor, build_processor
from shipscan.recognition.base import BaseTextRecognizer
from shipscan.recognition.models import RawScan
from shipscan.recognition.pool import RecognizerPool
from shipscan.upload.admission import ALLOWED_MIME_TYPES, MAX_FILE_SIZE_BYTES, admit
from shipscan.upload.exceptions import UploadStateError
from shipscan.upload.models import UploadItem, UploadStatus
from shipscan.upload.runner import ItemListener, ItemRunner

ProcessorBuilder = Callable[[BaseTextRecognizer], Processor]


class UploadSession:
    """Sequential batch of uploads sharing one lazily acquired recognizer."""

    def __init__(
        self,
        *,
        owner_id: str,
        doc_repo: DocumentsRepository,
        recognizer_pool: RecognizerPool,
        processor_builder: ProcessorBuilder,
        listener: ItemListener | None = None,
        max_size_bytes: int = MAX_FILE_SIZE_BYTES,
        allowed_mime_types: Collection[str] = ALLOWED_MIME_TYPES,
    ) -> None:
        self.id = uuid.uuid4().hex
        self._pool = recognizer_pool
        self._processor_builder = processor_builder
        self._runner = ItemRunner(doc_repo, owner_id, listener)
        self._max_size_bytes = max_size_bytes
        self._allowed_mime_types = frozenset(allowed_mime_types)
        self._items: list[UploadItem] = []
        self._processor: Processor | None = None
        self._closed = False

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        owner_id: str,
        recognizer_pool: RecognizerPool,
        doc_repo: DocumentsRepository | None = None,
        listener: ItemListener | None = None,
    ) -> "UploadSession":
        doc_repo = doc_repo if doc_repo is not None else DocumentsRepository()
        return cls(
            owner_id=owner_id,
            doc_repo=doc_repo,
            recognizer_pool=recognizer_pool,
            processor_builder=partial(build_processor, settings, doc_repo=doc_repo),
            listener=listener,
            max_size_bytes=settings.upload_max_file_size_bytes,
            allowed_mime_types=settings.upload_allowed_mime_types,
        )

    def __enter__(self) -> "UploadSession":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def items(self) -> list[UploadItem]:
        return list(self._items)

    @property
    def closed(self) -> bool:
        return self._closed

    def add(self, scans: Iterable[RawScan]) -> list[UploadItem]:
        """Admit scans as pending items; unsupported or oversize files are dropped."""
        self._ensure_open()
        items = admit(scans, self._max_size_bytes, self._allowed_mime_types)
        self._items.extend(items)
        Log.info(f"Session {self.id}: {len(items)} item(s) added")
        return items

    def get(self, item_id: str) -> UploadItem:
        for item in self._items:
            if item.id == item_id:
                return item
        raise UploadStateError(f"Upload {item_id} is not part of session {self.id}")

    def remove(self, item_id: str) -> None:
        """Drop an item. Only pending items can be removed."""
        item = self.get(item_id)
        if item.status is not UploadStatus.PENDING:
            raise UploadStateError(
                f"Upload {item_id} is '{item.status.value}' and can no longer be removed"
            )
        self._items.remove(item)

    def process_all(self) -> list[UploadItem]:
        """Run every pending item in submission order, one at a time."""
        self._ensure_open()
        for item in list(self._items):
            if item.status is not UploadStatus.PENDING:
                continue
            self._runner.run(item, self._get_processor)
        return self.items

    def close(self) -> None:
        """Release the recognizer lease. Later calls are no-ops."""
        if self._closed:
            return
        self._closed = True
        self._processor = None
        self._pool.release(self.id)
        Log.info(f"Session {self.id} closed")

    def _get_processor(self) -> Processor:
        if self._processor is None:
            self._processor = self._processor_builder(self._pool.acquire(self.id))
        return self._processor

    def _ensure_open(self) -> None:
        if self._closed:
            raise UploadStateError(f"Session {self.id} is closed")
