class ProcessorError(Exception):
    """Base exception for all processor-related errors."""


class PersistenceError(ProcessorError):
    """Raised when a document record cannot be read or written."""


class DocumentNotFoundError(PersistenceError):
    """Raised when a document cannot be found in the database."""
