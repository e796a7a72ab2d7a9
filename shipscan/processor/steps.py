from shipscan.database.repositories.documents_repository import DocumentsRepository
from shipscan.extraction.ai_extractor import AIExtractor
from shipscan.extraction.base import BaseExtractor
from shipscan.extraction.resolver import resolve_extraction
from shipscan.logging.logger import Log
from shipscan.processor.models import Checkpoint
from shipscan.processor.pipeline import PipelineContext, PipelineStep
from shipscan.recognition.base import BaseTextRecognizer


class MarkProcessingStep(PipelineStep):
    def __init__(self, doc_repo: DocumentsRepository) -> None:
        self._doc_repo = doc_repo

    def run(self, context: PipelineContext) -> PipelineContext:
        self._doc_repo.mark_processing(context.document_id)
        Log.info(f"Document {context.document_id} marked as processing")
        return context


class MarkFailedStep(PipelineStep):
    def __init__(self, doc_repo: DocumentsRepository) -> None:
        self._doc_repo = doc_repo

    def run(self, context: PipelineContext) -> PipelineContext:
        self._doc_repo.mark_failed(context.document_id, context.error_message)
        Log.error(f"Document {context.document_id} marked as failed: {context.error_message}")
        return context


class RecognizeTextStep(PipelineStep):
    checkpoint = Checkpoint.RECOGNIZED

    def __init__(self, recognizer: BaseTextRecognizer) -> None:
        self._recognizer = recognizer

    def run(self, context: PipelineContext) -> PipelineContext:
        context.recognition = self._recognizer.recognize(context.scan)
        Log.info(
            f"Recognized {len(context.recognition.text)} chars from document "
            f"{context.document_id}"
        )
        return context


class ExtractStructuredStep(PipelineStep):
    checkpoint = Checkpoint.EXTRACTED

    def __init__(self, ai_extractor: AIExtractor, fallback: BaseExtractor) -> None:
        self._ai_extractor = ai_extractor
        self._fallback = fallback

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.recognition is None:
            raise ValueError("PipelineContext.recognition must be set before extraction")
        text = context.recognition.text
        outcome = self._ai_extractor.try_extract(text)
        context.extraction = resolve_extraction(outcome, text, self._fallback)
        Log.info(
            f"Extracted document {context.document_id} via {context.extraction.source.value}: "
            f"{context.extraction.document.document_type.value}"
        )
        return context


class PersistExtractionStep(PipelineStep):
    checkpoint = Checkpoint.PERSISTED

    def __init__(self, doc_repo: DocumentsRepository) -> None:
        self._doc_repo = doc_repo

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.recognition is None or context.extraction is None:
            raise ValueError("PipelineContext extraction must be set before persist")
        self._doc_repo.mark_completed(
            context.document_id,
            document=context.extraction.document,
            extracted_text=context.recognition.text,
            ocr_confidence=context.recognition.confidence,
        )
        Log.info(f"Document {context.document_id} completed")
        return context
