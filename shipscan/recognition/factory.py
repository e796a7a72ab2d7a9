from functools import partial

from shipscan.config.settings import Settings
from shipscan.recognition.pool import RecognizerPool
from shipscan.recognition.tesseract_engine import TesseractEngine
from shipscan.recognition.tesseract_recognizer import TesseractRecognizer


class RecognizerFactory:
    """Creates Tesseract recognizers from settings."""

    @classmethod
    def create(cls, settings: Settings) -> TesseractRecognizer:
        engine_factory = partial(
            TesseractEngine,
            language=settings.ocr_language,
            psm=settings.ocr_psm,
            char_whitelist=settings.ocr_char_whitelist,
            tesseract_cmd=settings.ocr_tesseract_cmd,
        )
        return TesseractRecognizer(engine_factory, pdf_dpi=settings.ocr_pdf_dpi)

    @classmethod
    def create_pool(cls, settings: Settings) -> RecognizerPool:
        return RecognizerPool(partial(cls.create, settings))
