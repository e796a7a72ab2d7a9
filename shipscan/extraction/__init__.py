from shipscan.extraction.ai_extractor import AIExtractor
from shipscan.extraction.base import BaseExtractor
from shipscan.extraction.factory import ExtractorFactory
from shipscan.extraction.fallback_extractor import FallbackExtractor, extract_fallback
from shipscan.extraction.resolver import resolve_extraction

__all__ = [
    "AIExtractor",
    "BaseExtractor",
    "ExtractorFactory",
    "FallbackExtractor",
    "extract_fallback",
    "resolve_extraction",
]
