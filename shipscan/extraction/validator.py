"""Validates a parsed AI reply and builds an ExtractedDocument.

Absent keys are read as null; the pipeline never relies on the model
returning every field.
"""

from typing import Any

from shipscan.extraction.exceptions import ExtractionValidationError
from shipscan.extraction.models import Address, DocumentType, ExtractedDocument

_ADDRESS_FIELDS = ("name", "phone", "street", "city", "state", "zip", "country")
_ADDRESS_ALIASES = {"zip": ("zipCode", "zip_code", "postalCode")}


def validate_and_build(data: dict[str, Any]) -> ExtractedDocument:
    """Validate raw parsed JSON and build an ExtractedDocument.

    Raises:
        ExtractionValidationError: on any schema mismatch.
    """
    document_type = _build_document_type(data.get("documentType"))
    is_shipping_label = _build_is_shipping_label(data.get("isShippingLabel"), document_type)
    return ExtractedDocument.classified(
        is_shipping_label,
        tracking_number=_optional_text(data.get("trackingNumber"), "trackingNumber"),
        origin_address=_build_address(data.get("originAddress"), "originAddress"),
        destination_address=_build_address(
            data.get("destinationAddress"), "destinationAddress"
        ),
        message=_optional_text(data.get("message"), "message"),
    )


def _build_document_type(raw: Any) -> DocumentType | None:
    if raw is None:
        return None
    if not isinstance(raw, str):
        raise ExtractionValidationError("'documentType' must be a string or null")
    if raw.strip().upper() == DocumentType.SHIPPING_LABEL.value:
        return DocumentType.SHIPPING_LABEL
    return DocumentType.OTHER


def _build_is_shipping_label(raw: Any, document_type: DocumentType | None) -> bool:
    if raw is None:
        if document_type is None:
            raise ExtractionValidationError(
                "Either 'documentType' or 'isShippingLabel' must be provided"
            )
        return document_type is DocumentType.SHIPPING_LABEL
    if not isinstance(raw, bool):
        raise ExtractionValidationError("'isShippingLabel' must be a boolean or null")
    if document_type is not None and raw != (document_type is DocumentType.SHIPPING_LABEL):
        raise ExtractionValidationError(
            f"'isShippingLabel'={raw} contradicts 'documentType'={document_type.value}"
        )
    return raw


def _build_address(raw: Any, field_name: str) -> Address | None:
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise ExtractionValidationError(f"'{field_name}' must be an object or null")
    values: dict[str, str | None] = {}
    for key in _ADDRESS_FIELDS:
        value = raw.get(key)
        for alias in _ADDRESS_ALIASES.get(key, ()):
            if value is None:
                value = raw.get(alias)
        values[key] = _optional_text(value, f"{field_name}.{key}")
    return Address(**values)


def _optional_text(raw: Any, field_name: str) -> str | None:
    if raw is None:
        return None
    if isinstance(raw, bool):
        raise ExtractionValidationError(f"'{field_name}' must be a string or null")
    if isinstance(raw, (int, float)):
        return str(raw)
    if not isinstance(raw, str):
        raise ExtractionValidationError(f"'{field_name}' must be a string or null")
    stripped = raw.strip()
    if not stripped or stripped.lower() == "null":
        return None
    return stripped
