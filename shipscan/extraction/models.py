from dataclasses import asdict, dataclass
from enum import Enum

NOT_APPLICABLE = "N/A"
NOT_A_LABEL_MESSAGE = "Document does not appear to be a shipping label"


class DocumentType(str, Enum):
    SHIPPING_LABEL = "SHIPPING_LABEL"
    OTHER = "OTHER"


class ExtractionSource(str, Enum):
    """Which extractor produced a result."""

    AI = "ai"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class Address:
    """Postal address block. No cross-field validation."""

    name: str | None = None
    phone: str | None = None
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None
    country: str | None = None


@dataclass(frozen=True)
class ExtractedDocument:
    """Structured result of either extractor."""

    document_type: DocumentType
    is_shipping_label: bool
    tracking_number: str | None = None
    origin_address: Address | None = None
    destination_address: Address | None = None
    message: str = NOT_APPLICABLE

    def __post_init__(self) -> None:
        if self.is_shipping_label != (self.document_type is DocumentType.SHIPPING_LABEL):
            raise ValueError(
                f"is_shipping_label={self.is_shipping_label} contradicts "
                f"document_type={self.document_type.value}"
            )

    @classmethod
    def classified(
        cls,
        is_shipping_label: bool,
        *,
        tracking_number: str | None = None,
        origin_address: Address | None = None,
        destination_address: Address | None = None,
        message: str | None = None,
    ) -> "ExtractedDocument":
        """Build a result whose type and flag agree, with the canonical message."""
        if message is None:
            message = NOT_APPLICABLE if is_shipping_label else NOT_A_LABEL_MESSAGE
        return cls(
            document_type=(
                DocumentType.SHIPPING_LABEL if is_shipping_label else DocumentType.OTHER
            ),
            is_shipping_label=is_shipping_label,
            tracking_number=tracking_number,
            origin_address=origin_address,
            destination_address=destination_address,
            message=message,
        )

    def to_record(self) -> dict[str, object]:
        """Column payload for the documents table."""
        return {
            "document_type": self.document_type.value,
            "is_shipping_label": self.is_shipping_label,
            "tracking_number": self.tracking_number,
            "origin_address": _address_dict(self.origin_address),
            "destination_address": _address_dict(self.destination_address),
            "processing_message": self.message,
        }

    def to_dict(self) -> dict[str, object]:
        """Wire shape used by the extraction prompt contract."""
        return {
            "documentType": self.document_type.value,
            "isShippingLabel": self.is_shipping_label,
            "trackingNumber": self.tracking_number,
            "originAddress": _address_dict(self.origin_address),
            "destinationAddress": _address_dict(self.destination_address),
            "message": self.message,
        }


def _address_dict(address: Address | None) -> dict[str, str | None] | None:
    return asdict(address) if address is not None else None


@dataclass(frozen=True)
class ExtractionSuccess:
    document: ExtractedDocument


@dataclass(frozen=True)
class RemoteFailure:
    reason: str


ExtractionOutcome = ExtractionSuccess | RemoteFailure


@dataclass(frozen=True)
class ResolvedExtraction:
    """The trusted result and the extractor it came from."""

    document: ExtractedDocument
    source: ExtractionSource
