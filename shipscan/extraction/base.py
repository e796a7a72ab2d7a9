from abc import ABC, abstractmethod

from shipscan.extraction.models import ExtractedDocument


class BaseExtractor(ABC):
    """Contract for all extractors."""

    @abstractmethod
    def extract(self, raw_text: str) -> ExtractedDocument:
        """Turn raw OCR text into a structured shipping document.

        Args:
            raw_text: Text produced by the recognizer, verbatim.

        Returns:
            ExtractedDocument whose type and shipping-label flag agree.
        """
