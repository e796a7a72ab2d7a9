class RecognitionError(Exception):
    """Raised when the OCR engine is unavailable or the scan cannot be read."""
