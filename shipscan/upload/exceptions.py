class UploadStateError(Exception):
    """Raised on an illegal upload item transition or removal."""
