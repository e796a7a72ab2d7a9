from shipscan.extraction.base import BaseExtractor
from shipscan.extraction.models import (
    ExtractionOutcome,
    ExtractionSource,
    ExtractionSuccess,
    RemoteFailure,
    ResolvedExtraction,
)
from shipscan.logging.logger import Log


def resolve_extraction(
    outcome: ExtractionOutcome,
    raw_text: str,
    fallback: BaseExtractor,
) -> ResolvedExtraction:
    """Pick the trusted result: the remote one, or the fallback on failure."""
    if isinstance(outcome, ExtractionSuccess):
        return ResolvedExtraction(document=outcome.document, source=ExtractionSource.AI)
    if isinstance(outcome, RemoteFailure):
        Log.warning(f"AI extraction failed, using fallback: {outcome.reason}")
        return ResolvedExtraction(
            document=fallback.extract(raw_text),
            source=ExtractionSource.FALLBACK,
        )
    raise TypeError(f"Unknown extraction outcome: {outcome!r}")
