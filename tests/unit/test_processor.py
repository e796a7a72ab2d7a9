from unittest.mock import MagicMock

import pytest

from shipscan.config.settings import Settings
from shipscan.database.repositories.documents_repository import DocumentsRepository
from shipscan.extraction.ai_extractor import AIExtractor
from shipscan.extraction.fallback_extractor import FallbackExtractor
from shipscan.extraction.models import (
    DocumentType,
    ExtractedDocument,
    ExtractionSource,
    ExtractionSuccess,
    RemoteFailure,
)
from shipscan.processor.exceptions import DocumentNotFoundError, PersistenceError
from shipscan.processor.models import Checkpoint, ProcessingStatus
from shipscan.processor.processor import Processor, build_processor, describe_failure
from shipscan.processor.steps import (
    ExtractStructuredStep,
    MarkFailedStep,
    MarkProcessingStep,
    PersistExtractionStep,
    RecognizeTextStep,
)
from shipscan.recognition.base import BaseTextRecognizer
from shipscan.recognition.exceptions import RecognitionError
from shipscan.recognition.models import RawScan, RecognitionResult

_SCAN = RawScan(content=b"img", mime_type="image/png", filename="label.png")


def _make_pipeline(
    label_text: str,
) -> tuple[Processor, MagicMock, MagicMock, MagicMock]:
    doc_repo = MagicMock(spec=DocumentsRepository)
    recognizer = MagicMock(spec=BaseTextRecognizer)
    recognizer.recognize.return_value = RecognitionResult(text=label_text, confidence=87.5)
    ai_extractor = MagicMock(spec=AIExtractor)
    ai_extractor.try_extract.return_value = ExtractionSuccess(
        ExtractedDocument.classified(True, tracking_number="AI-TRACK")
    )
    processor = Processor(
        steps=[
            MarkProcessingStep(doc_repo),
            RecognizeTextStep(recognizer),
            ExtractStructuredStep(ai_extractor=ai_extractor, fallback=FallbackExtractor()),
            PersistExtractionStep(doc_repo),
        ],
        failed_step=MarkFailedStep(doc_repo),
    )
    return processor, doc_repo, recognizer, ai_extractor


class TestProcessSuccess:
    def test_completes_with_ai_result(self, label_text: str) -> None:
        processor, doc_repo, _, ai_extractor = _make_pipeline(label_text)
        report = processor.process("doc-1", _SCAN)

        assert report.succeeded
        assert report.status is ProcessingStatus.COMPLETED
        assert report.source is ExtractionSource.AI
        assert report.document is not None
        assert report.document.tracking_number == "AI-TRACK"
        ai_extractor.try_extract.assert_called_once_with(label_text)
        doc_repo.mark_processing.assert_called_once_with("doc-1")
        doc_repo.mark_completed.assert_called_once_with(
            "doc-1",
            document=report.document,
            extracted_text=label_text,
            ocr_confidence=87.5,
        )
        doc_repo.mark_failed.assert_not_called()

    def test_remote_failure_completes_with_fallback(self, label_text: str) -> None:
        processor, doc_repo, _, ai_extractor = _make_pipeline(label_text)
        ai_extractor.try_extract.return_value = RemoteFailure("AI provider network error")
        report = processor.process("doc-1", _SCAN)

        assert report.status is ProcessingStatus.COMPLETED
        assert report.source is ExtractionSource.FALLBACK
        assert report.document is not None
        assert report.document.document_type is DocumentType.SHIPPING_LABEL
        assert report.document.tracking_number == "1Z12345E0291980026"
        doc_repo.mark_completed.assert_called_once()
        doc_repo.mark_failed.assert_not_called()

    def test_reports_checkpoints_in_order(self, label_text: str) -> None:
        processor, _, _, _ = _make_pipeline(label_text)
        seen: list[Checkpoint] = []
        processor.process("doc-1", _SCAN, on_checkpoint=seen.append)
        assert seen == [Checkpoint.RECOGNIZED, Checkpoint.EXTRACTED, Checkpoint.PERSISTED]


class TestProcessFailure:
    def test_recognition_failure_marks_document_failed(self, label_text: str) -> None:
        processor, doc_repo, recognizer, ai_extractor = _make_pipeline(label_text)
        recognizer.recognize.side_effect = RecognitionError("Tesseract engine unavailable")
        seen: list[Checkpoint] = []
        report = processor.process("doc-1", _SCAN, on_checkpoint=seen.append)

        assert report.status is ProcessingStatus.FAILED
        assert report.document is None
        assert report.message == "Text recognition failed: Tesseract engine unavailable"
        doc_repo.mark_failed.assert_called_once_with("doc-1", report.message)
        doc_repo.mark_completed.assert_not_called()
        ai_extractor.try_extract.assert_not_called()
        assert seen == []

    def test_persist_failure_marks_document_failed(self, label_text: str) -> None:
        processor, doc_repo, _, _ = _make_pipeline(label_text)
        doc_repo.mark_completed.side_effect = PersistenceError("connection lost")
        report = processor.process("doc-1", _SCAN)

        assert report.status is ProcessingStatus.FAILED
        assert report.message == "Saving document failed: connection lost"
        doc_repo.mark_failed.assert_called_once()

    def test_failure_of_mark_failed_is_swallowed(self, label_text: str) -> None:
        processor, doc_repo, recognizer, _ = _make_pipeline(label_text)
        recognizer.recognize.side_effect = RecognitionError("bad scan")
        doc_repo.mark_failed.side_effect = PersistenceError("db down")
        report = processor.process("doc-1", _SCAN)
        assert report.status is ProcessingStatus.FAILED

    def test_missing_document_fails_at_first_step(self, label_text: str) -> None:
        processor, doc_repo, recognizer, _ = _make_pipeline(label_text)
        doc_repo.mark_processing.side_effect = DocumentNotFoundError("Document doc-1 not found")
        report = processor.process("doc-1", _SCAN)
        assert report.status is ProcessingStatus.FAILED
        recognizer.recognize.assert_not_called()


class TestCheckpointListener:
    def test_raising_listener_does_not_fail_document(self, label_text: str) -> None:
        processor, doc_repo, _, _ = _make_pipeline(label_text)

        def listener(checkpoint: Checkpoint) -> None:
            raise RuntimeError("ui gone")

        report = processor.process("doc-1", _SCAN, on_checkpoint=listener)
        assert report.status is ProcessingStatus.COMPLETED
        doc_repo.mark_completed.assert_called_once()
        doc_repo.mark_failed.assert_not_called()

    def test_listener_failing_after_persist_keeps_completed_row(self, label_text: str) -> None:
        processor, doc_repo, _, _ = _make_pipeline(label_text)
        seen: list[Checkpoint] = []

        def listener(checkpoint: Checkpoint) -> None:
            seen.append(checkpoint)
            if checkpoint is Checkpoint.PERSISTED:
                raise RuntimeError("ui gone")

        report = processor.process("doc-1", _SCAN, on_checkpoint=listener)
        assert report.succeeded
        assert seen == [Checkpoint.RECOGNIZED, Checkpoint.EXTRACTED, Checkpoint.PERSISTED]
        assert [c[0] for c in doc_repo.method_calls] == ["mark_processing", "mark_completed"]


class TestUnexpectedAIErrors:
    @pytest.mark.parametrize("error", [RuntimeError("bug"), AttributeError("content")])
    def test_unexpected_client_error_completes_with_fallback(
        self, label_text: str, error: Exception
    ) -> None:
        doc_repo = MagicMock(spec=DocumentsRepository)
        recognizer = MagicMock(spec=BaseTextRecognizer)
        recognizer.recognize.return_value = RecognitionResult(text=label_text, confidence=70.0)
        client = MagicMock()
        client.create_chat_completion.side_effect = error
        processor = Processor(
            steps=[
                MarkProcessingStep(doc_repo),
                RecognizeTextStep(recognizer),
                ExtractStructuredStep(
                    ai_extractor=AIExtractor(client=client, model="m"),
                    fallback=FallbackExtractor(),
                ),
                PersistExtractionStep(doc_repo),
            ],
            failed_step=MarkFailedStep(doc_repo),
        )

        report = processor.process("doc-1", _SCAN)

        assert report.status is ProcessingStatus.COMPLETED
        assert report.source is ExtractionSource.FALLBACK
        assert report.document is not None
        assert report.document.tracking_number == "1Z12345E0291980026"
        doc_repo.mark_failed.assert_not_called()


class TestDescribeFailure:
    @pytest.mark.parametrize(
        ("exc", "expected"),
        [
            (RecognitionError("x"), "Text recognition failed: x"),
            (PersistenceError("y"), "Saving document failed: y"),
            (ValueError("z"), "Processing failed: z"),
        ],
    )
    def test_prefixes_cause(self, exc: Exception, expected: str) -> None:
        assert describe_failure(exc) == expected


class TestBuildProcessor:
    def test_builds_working_pipeline_for_example_provider(self, label_text: str) -> None:
        doc_repo = MagicMock(spec=DocumentsRepository)
        recognizer = MagicMock(spec=BaseTextRecognizer)
        recognizer.recognize.return_value = RecognitionResult(text=label_text, confidence=50.0)
        processor = build_processor(
            Settings(extraction_provider="example"), recognizer, doc_repo=doc_repo
        )
        report = processor.process("doc-9", _SCAN)
        assert report.succeeded
        assert report.source is ExtractionSource.AI
        doc_repo.mark_completed.assert_called_once()
