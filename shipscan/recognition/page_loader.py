import io

import pymupdf
from PIL import Image, UnidentifiedImageError

from shipscan.recognition.exceptions import RecognitionError
from shipscan.recognition.models import RawScan

_OCR_MODES = frozenset({"RGB", "L"})


def load_pages(scan: RawScan, pdf_dpi: int = 300) -> list[Image.Image]:
    """Decode a scan into one Pillow image per page.

    Raises:
        RecognitionError: for unsupported mime types or undecodable content.
    """
    if scan.is_pdf:
        return _render_pdf(scan.content, pdf_dpi)
    if scan.mime_type.startswith("image/"):
        return [_open_image(scan.content)]
    raise RecognitionError(f"Unsupported mime type '{scan.mime_type}' for {scan.filename}")


def _open_image(content: bytes) -> Image.Image:
    try:
        image = Image.open(io.BytesIO(content))
        image.load()
    except (UnidentifiedImageError, OSError) as exc:
        raise RecognitionError(f"Unreadable image: {exc}") from exc
    if image.mode not in _OCR_MODES:
        image = image.convert("RGB")
    return image


def _render_pdf(content: bytes, dpi: int) -> list[Image.Image]:
    try:
        with pymupdf.open(stream=content, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
            if doc.page_count == 0:
                raise RecognitionError("PDF has no pages")
            pages = [
                _open_image(page.get_pixmap(dpi=dpi).tobytes("png"))
                for page in doc
            ]
    except RecognitionError:
        raise
    except Exception as exc:
        raise RecognitionError(f"PDF rendering failed: {exc}") from exc
    return pages
