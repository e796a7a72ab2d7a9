from collections.abc import Collection, Iterable

from shipscan.logging.logger import Log
from shipscan.recognition.models import RawScan
from shipscan.upload.models import UploadItem

ALLOWED_MIME_TYPES = frozenset({"image/jpeg", "image/jpg", "image/png", "application/pdf"})
MAX_FILE_SIZE_BYTES = 5 * 1024 * 1024


def is_admissible(
    scan: RawScan,
    max_size_bytes: int = MAX_FILE_SIZE_BYTES,
    allowed_mime_types: Collection[str] = ALLOWED_MIME_TYPES,
) -> bool:
    return scan.mime_type in allowed_mime_types and scan.size_bytes <= max_size_bytes


def admit(
    scans: Iterable[RawScan],
    max_size_bytes: int = MAX_FILE_SIZE_BYTES,
    allowed_mime_types: Collection[str] = ALLOWED_MIME_TYPES,
) -> list[UploadItem]:
    """Wrap acceptable scans into pending items; drop the rest silently."""
    items: list[UploadItem] = []
    for scan in scans:
        if not is_admissible(scan, max_size_bytes, allowed_mime_types):
            Log.debug(
                f"Dropped {scan.filename}: {scan.mime_type}, {scan.size_bytes} bytes"
            )
            continue
        items.append(UploadItem(scan=scan))
    return items
