class RemoteExtractionError(Exception):
    """Raised when remote structured extraction fails for any reason."""


class ExtractionValidationError(RemoteExtractionError):
    """Raised when the remote reply does not match the extraction schema."""


class ExtractionNetworkError(RemoteExtractionError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""
