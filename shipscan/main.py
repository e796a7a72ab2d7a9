import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from shipscan.config.settings import Settings
from shipscan.database.connection import close_pool, init_pool
from shipscan.logging.logger import Log
from shipscan.recognition.factory import RecognizerFactory
from shipscan.recognition.models import RawScan
from shipscan.upload.models import UploadItem, UploadStatus
from shipscan.upload.session import UploadSession


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="shipscan",
        description="Recognize and structure shipping documents",
    )
    parser.add_argument("--owner-id", required=True, help="ID of the uploading user")
    parser.add_argument("files", nargs="+", type=Path, help="JPEG, PNG or PDF scans")
    return parser.parse_args(argv)


def _load_scans(paths: Sequence[Path]) -> list[RawScan]:
    scans: list[RawScan] = []
    for path in paths:
        try:
            scans.append(RawScan.from_path(path))
        except OSError as exc:
            Log.error(f"Skipping {path}: {exc}")
    return scans


def _report(item: UploadItem) -> None:
    if item.status is UploadStatus.SUCCESS and item.result is not None:
        Log.info(
            f"{item.scan.filename}: {item.result.document_type.value}, "
            f"tracking={item.result.tracking_number or '-'}, message={item.result.message}"
        )
    elif item.status is UploadStatus.ERROR:
        Log.error(f"{item.scan.filename}: {item.error_message}")


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point: settings -> pool -> one upload session over the given files."""
    args = _parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)
    init_pool(settings)
    recognizer_pool = RecognizerFactory.create_pool(settings)

    try:
        with UploadSession.from_settings(
            settings,
            owner_id=args.owner_id,
            recognizer_pool=recognizer_pool,
        ) as session:
            session.add(_load_scans(args.files))
            items = session.process_all()
    finally:
        recognizer_pool.close_all()
        close_pool()

    for item in items:
        _report(item)
    return 1 if any(item.status is UploadStatus.ERROR for item in items) else 0


if __name__ == "__main__":
    sys.exit(main())
