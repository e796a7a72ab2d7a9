from collections.abc import Callable
from statistics import fmean

from shipscan.logging.logger import Log
from shipscan.recognition.base import BaseTextRecognizer
from shipscan.recognition.models import RawScan, RecognitionResult
from shipscan.recognition.page_loader import load_pages
from shipscan.recognition.tesseract_engine import TesseractEngine


class TesseractRecognizer(BaseTextRecognizer):
    """Recognizes scans with a lazily started, reused Tesseract engine."""

    def __init__(
        self,
        engine_factory: Callable[[], TesseractEngine],
        pdf_dpi: int = 300,
    ) -> None:
        self._engine_factory = engine_factory
        self._pdf_dpi = pdf_dpi
        self._engine: TesseractEngine | None = None

    @property
    def engine_started(self) -> bool:
        return self._engine is not None

    def recognize(self, scan: RawScan) -> RecognitionResult:
        engine = self._acquire_engine()
        pages = load_pages(scan, self._pdf_dpi)

        lines: list[str] = []
        confidences: list[float] = []
        for page in pages:
            page_text = engine.recognize_image(page)
            lines.extend(page_text.lines)
            confidences.extend(page_text.word_confidences)

        confidence = fmean(confidences) if confidences else 0.0
        Log.info(
            f"Recognized {len(lines)} lines from {scan.filename} "
            f"({len(pages)} page(s), confidence {confidence:.1f})"
        )
        return RecognitionResult(text="\n".join(lines), confidence=confidence)

    def close(self) -> None:
        if self._engine is not None:
            self._engine.terminate()
            self._engine = None

    def _acquire_engine(self) -> TesseractEngine:
        if self._engine is None:
            engine = self._engine_factory()
            engine.start()
            self._engine = engine
        return self._engine
