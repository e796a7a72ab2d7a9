"""Deterministic, offline extraction from OCR text.

Used whenever remote extraction fails. Classification is keyword and
tracking-number based; addresses are sliced from a fixed positional layout
under a label line (name, street, "city, state zip"). There is no recovery
for reordered or wrapped address fields.
"""

import re
from typing import ClassVar

from shipscan.extraction.base import BaseExtractor
from shipscan.extraction.models import Address, ExtractedDocument

DEFAULT_COUNTRY = "US"

ORIGIN_INDICATORS = ("FROM:", "SHIP FROM", "SENDER")
DESTINATION_INDICATORS = ("TO:", "SHIP TO", "DELIVER TO")


class FallbackExtractor(BaseExtractor):
    """Regex/keyword extractor. Pure and total: never raises for any text."""

    # Priority order: the first pattern with a match wins, even when several
    # carriers' patterns match the same text.
    TRACKING_PATTERNS: ClassVar[list[tuple[str, re.Pattern[str]]]] = [
        ("UPS", re.compile(r"1Z[0-9A-Z]{16}")),
        ("FEDEX", re.compile(r"\b[0-9]{22}\b")),
        ("USPS", re.compile(r"\b[0-9]{12}\b")),
        ("DHL", re.compile(r"\b[0-9]{20}\b")),
    ]

    SHIPPING_KEYWORDS: ClassVar[tuple[str, ...]] = (
        "SHIP",
        "DELIVER",
        "FROM:",
        "TO:",
        "TRACKING",
        "UPS",
        "FEDEX",
        "USPS",
        "DHL",
    )

    def extract(self, raw_text: str) -> ExtractedDocument:
        tracking_number = self.find_tracking_number(raw_text)
        upper_text = raw_text.upper()
        has_keyword = any(keyword in upper_text for keyword in self.SHIPPING_KEYWORDS)
        return ExtractedDocument.classified(
            has_keyword or tracking_number is not None,
            tracking_number=tracking_number,
            origin_address=extract_address(raw_text, ORIGIN_INDICATORS),
            destination_address=extract_address(raw_text, DESTINATION_INDICATORS),
        )

    def find_tracking_number(self, text: str) -> str | None:
        for _carrier, pattern in self.TRACKING_PATTERNS:
            match = pattern.search(text)
            if match:
                return match.group(0)
        return None


def extract_address(text: str, indicators: tuple[str, ...]) -> Address | None:
    """Slice an address from the three lines following the first label line.

    Indicators are tried in order; one that is found with fewer than three
    lines after it falls through to the next.
    """
    lines = [line.strip() for line in text.split("\n") if line.strip()]
    for indicator in indicators:
        index = next(
            (i for i, line in enumerate(lines) if indicator in line.upper()),
            None,
        )
        if index is None or index >= len(lines) - 3:
            continue
        return _positional_address(lines[index + 1], lines[index + 2], lines[index + 3])
    return None


def _positional_address(name: str, street: str, locality: str) -> Address:
    city, _, remainder = locality.partition(",")
    state_tokens = remainder.split()
    return Address(
        name=name or None,
        street=street or None,
        city=city.strip() or None,
        state=state_tokens[0] if state_tokens else None,
        zip=locality.split(" ")[-1] or None,
        country=DEFAULT_COUNTRY,
    )


_default_extractor = FallbackExtractor()


def extract_fallback(raw_text: str) -> ExtractedDocument:
    """Module-level shortcut for FallbackExtractor().extract()."""
    return _default_extractor.extract(raw_text)
