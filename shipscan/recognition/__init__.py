from shipscan.recognition.base import BaseTextRecognizer
from shipscan.recognition.exceptions import RecognitionError
from shipscan.recognition.factory import RecognizerFactory
from shipscan.recognition.models import RawScan, RecognitionResult
from shipscan.recognition.pool import RecognizerPool

__all__ = [
    "BaseTextRecognizer",
    "RawScan",
    "RecognitionError",
    "RecognitionResult",
    "RecognizerFactory",
    "RecognizerPool",
]
