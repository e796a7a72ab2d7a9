from abc import ABC, abstractmethod

from shipscan.recognition.models import RawScan, RecognitionResult


class BaseTextRecognizer(ABC):
    """Contract for all OCR adapters."""

    @abstractmethod
    def recognize(self, scan: RawScan) -> RecognitionResult:
        """Turn an image or PDF scan into raw text plus a confidence.

        Args:
            scan: The uploaded document bytes and mime type.

        Returns:
            RecognitionResult with the recognized text and a 0-100 confidence.

        Raises:
            RecognitionError: if the engine cannot start or the scan is unreadable.
        """

    def close(self) -> None:
        """Release any engine held by the adapter. Idempotent."""
