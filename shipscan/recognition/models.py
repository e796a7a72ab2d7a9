import mimetypes
from dataclasses import dataclass
from pathlib import Path

_FALLBACK_MIME_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class RawScan:
    """A photographed or scanned document as selected by the user."""

    content: bytes
    mime_type: str
    filename: str = "document"

    @property
    def size_bytes(self) -> int:
        return len(self.content)

    @property
    def is_pdf(self) -> bool:
        return self.mime_type == "application/pdf"

    @classmethod
    def from_path(cls, path: Path) -> "RawScan":
        """Read a scan from disk, guessing its mime type from the suffix."""
        mime_type, _ = mimetypes.guess_type(path.name)
        return cls(
            content=path.read_bytes(),
            mime_type=mime_type or _FALLBACK_MIME_TYPE,
            filename=path.name,
        )


@dataclass(frozen=True)
class RecognitionResult:
    """OCR output for one scan. Confidence is 0-100 and informational only."""

    text: str
    confidence: float = 0.0
