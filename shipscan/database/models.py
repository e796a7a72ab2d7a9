from dataclasses import dataclass
from datetime import datetime
from typing import Any

from shipscan.extraction.models import Address

ADMIN_ROLE = "admin"
APPROVED_STATUS = "approved"


@dataclass
class DocumentRecord:
    """Represents a row from the documents table."""

    id: str
    user_id: str
    filename: str
    processing_status: str
    file_size: int | None = None
    file_type: str | None = None
    upload_date: datetime | None = None
    ocr_confidence: float | None = None
    extracted_text: str | None = None
    document_type: str | None = None
    is_shipping_label: bool | None = None
    tracking_number: str | None = None
    origin_address: Address | None = None
    destination_address: Address | None = None
    processing_message: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "DocumentRecord":
        return cls(
            id=str(row["id"]),
            user_id=str(row["user_id"]),
            filename=row["filename"],
            processing_status=row["processing_status"],
            file_size=row.get("file_size"),
            file_type=row.get("file_type"),
            upload_date=row.get("upload_date"),
            ocr_confidence=row.get("ocr_confidence"),
            extracted_text=row.get("extracted_text"),
            document_type=row.get("document_type"),
            is_shipping_label=row.get("is_shipping_label"),
            tracking_number=row.get("tracking_number"),
            origin_address=_address_from_json(row.get("origin_address")),
            destination_address=_address_from_json(row.get("destination_address")),
            processing_message=row.get("processing_message"),
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
        )


def _address_from_json(raw: Any) -> Address | None:
    if not isinstance(raw, dict):
        return None
    return Address(**{key: raw.get(key) for key in Address.__dataclass_fields__})


@dataclass(frozen=True)
class UserProfile:
    """Current user as reported by the identity provider."""

    user_id: str
    role: str = "user"
    status: str = "pending"

    @property
    def is_approved_admin(self) -> bool:
        return self.role == ADMIN_ROLE and self.status == APPROVED_STATUS
