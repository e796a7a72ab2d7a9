from collections.abc import Callable, Sequence

from shipscan.config.settings import Settings
from shipscan.database.repositories.documents_repository import DocumentsRepository
from shipscan.extraction.factory import ExtractorFactory
from shipscan.extraction.fallback_extractor import FallbackExtractor
from shipscan.logging.logger import Log
from shipscan.processor.exceptions import PersistenceError
from shipscan.processor.models import Checkpoint, ProcessingReport, ProcessingStatus
from shipscan.processor.pipeline import PipelineContext, PipelineStep
from shipscan.processor.steps import (
    ExtractStructuredStep,
    MarkFailedStep,
    MarkProcessingStep,
    PersistExtractionStep,
    RecognizeTextStep,
)
from shipscan.recognition.base import BaseTextRecognizer
from shipscan.recognition.exceptions import RecognitionError
from shipscan.recognition.models import RawScan

CheckpointListener = Callable[[Checkpoint], None]


class Processor:
    """Runs one document through the extraction pipeline.

    Pipeline: mark processing -> recognize -> extract (AI, else fallback) -> persist.
    Every failure ends in the failed step; process() never raises.
    """

    def __init__(self, steps: Sequence[PipelineStep], failed_step: PipelineStep) -> None:
        self._steps = list(steps)
        self._failed_step = failed_step

    def process(
        self,
        document_id: str,
        scan: RawScan,
        on_checkpoint: CheckpointListener | None = None,
    ) -> ProcessingReport:
        Log.info(f"Processing document {document_id} ({scan.filename})")
        context = PipelineContext(document_id=document_id, scan=scan)
        try:
            for step in self._steps:
                context = step.run(context)
                self._notify(on_checkpoint, step, document_id)
        except Exception as exc:
            return self._fail(context, exc)

        if context.extraction is None:
            return self._fail(context, RuntimeError("Pipeline finished without a result"))
        document = context.extraction.document
        return ProcessingReport(
            document_id=document_id,
            status=ProcessingStatus.COMPLETED,
            document=document,
            source=context.extraction.source,
            message=document.message,
        )

    @staticmethod
    def _notify(
        on_checkpoint: CheckpointListener | None,
        step: PipelineStep,
        document_id: str,
    ) -> None:
        """Report a reached checkpoint. Listener errors never touch the document."""
        if step.checkpoint is None or on_checkpoint is None:
            return
        try:
            on_checkpoint(step.checkpoint)
        except Exception:
            Log.exception(
                f"Checkpoint listener failed at {step.checkpoint.value} for document {document_id}"
            )

    def _fail(self, context: PipelineContext, exc: Exception) -> ProcessingReport:
        context.error_message = describe_failure(exc)
        try:
            self._failed_step.run(context)
        except Exception:
            Log.exception(f"Could not mark document {context.document_id} as failed")
        return ProcessingReport(
            document_id=context.document_id,
            status=ProcessingStatus.FAILED,
            message=context.error_message,
        )


def describe_failure(exc: Exception) -> str:
    """Human-readable cause stored as the document's processing message."""
    if isinstance(exc, RecognitionError):
        return f"Text recognition failed: {exc}"
    if isinstance(exc, PersistenceError):
        return f"Saving document failed: {exc}"
    return f"Processing failed: {exc}"


def build_processor(
    settings: Settings,
    recognizer: BaseTextRecognizer,
    doc_repo: DocumentsRepository | None = None,
) -> Processor:
    """Build a Processor with the configured adapters around a session's recognizer."""
    doc_repo = doc_repo if doc_repo is not None else DocumentsRepository()
    steps: list[PipelineStep] = [
        MarkProcessingStep(doc_repo),
        RecognizeTextStep(recognizer),
        ExtractStructuredStep(
            ai_extractor=ExtractorFactory.create(settings),
            fallback=FallbackExtractor(),
        ),
        PersistExtractionStep(doc_repo),
    ]
    return Processor(steps=steps, failed_step=MarkFailedStep(doc_repo))
