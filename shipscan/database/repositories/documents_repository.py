from dataclasses import asdict
from typing import Any

import psycopg
from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from shipscan.database.connection import get_connection
from shipscan.database.models import DocumentRecord, UserProfile
from shipscan.extraction.models import Address, ExtractedDocument
from shipscan.processor.exceptions import DocumentNotFoundError, PersistenceError

_DEFAULT_COMPLETED_MESSAGE = "Document processed successfully"

_COLUMNS = """
    id, user_id, filename, file_size, file_type, upload_date,
    processing_status, ocr_confidence, extracted_text, document_type,
    is_shipping_label, tracking_number, origin_address, destination_address,
    processing_message, created_at, updated_at
"""


class DocumentsRepository:
    """Database operations for the documents table.

    Every psycopg failure surfaces as PersistenceError.
    """

    def create(
        self,
        owner_id: str,
        filename: str,
        file_size: int | None = None,
        file_type: str | None = None,
    ) -> DocumentRecord:
        """Insert a pending document row and return it."""
        try:
            with get_connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(
                        f"""
                        INSERT INTO documents
                        (user_id, filename, file_size, file_type, processing_status)
                        VALUES (%s, %s, %s, %s, 'pending')
                        RETURNING {_COLUMNS}
                        """,
                        (owner_id, filename, file_size, file_type),
                    )
                    row = cur.fetchone()
                conn.commit()
        except psycopg.Error as exc:
            raise PersistenceError(f"Failed to create document {filename}: {exc}") from exc

        if row is None:
            raise PersistenceError(f"Insert of document {filename} returned no row")
        return DocumentRecord.from_row(row)

    def find_by_id(self, document_id: str) -> DocumentRecord:
        """Find a document by ID.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
        """
        try:
            with get_connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(
                        f"SELECT {_COLUMNS} FROM documents WHERE id = %s",
                        (document_id,),
                    )
                    row = cur.fetchone()
        except psycopg.Error as exc:
            raise PersistenceError(f"Failed to read document {document_id}: {exc}") from exc

        if row is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")
        return DocumentRecord.from_row(row)

    def list_for_user(self, profile: UserProfile) -> list[DocumentRecord]:
        """Newest first; only the caller's own rows unless an approved admin."""
        query = f"SELECT {_COLUMNS} FROM documents"
        params: tuple[Any, ...] = ()
        if not profile.is_approved_admin:
            query += " WHERE user_id = %s"
            params = (profile.user_id,)
        query += " ORDER BY created_at DESC"
        try:
            with get_connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(query, params)
                    rows = cur.fetchall()
        except psycopg.Error as exc:
            raise PersistenceError(f"Failed to list documents: {exc}") from exc
        return [DocumentRecord.from_row(row) for row in rows]

    def mark_processing(self, document_id: str) -> None:
        self._update(
            document_id,
            """
            UPDATE documents
            SET processing_status = 'processing', updated_at = NOW()
            WHERE id = %s
            """,
            (document_id,),
        )

    def mark_completed(
        self,
        document_id: str,
        *,
        document: ExtractedDocument,
        extracted_text: str,
        ocr_confidence: float | None = None,
    ) -> None:
        """Persist every structured field and set the status to completed."""
        self._update(
            document_id,
            """
            UPDATE documents
            SET processing_status = 'completed',
                document_type = %s,
                is_shipping_label = %s,
                tracking_number = %s,
                origin_address = %s,
                destination_address = %s,
                processing_message = %s,
                extracted_text = %s,
                ocr_confidence = %s,
                updated_at = NOW()
            WHERE id = %s
            """,
            (
                document.document_type.value,
                document.is_shipping_label,
                document.tracking_number,
                _jsonb_address(document.origin_address),
                _jsonb_address(document.destination_address),
                document.message or _DEFAULT_COMPLETED_MESSAGE,
                extracted_text,
                ocr_confidence,
                document_id,
            ),
        )

    def mark_failed(self, document_id: str, message: str) -> None:
        """Set the status to failed without touching structured fields."""
        self._update(
            document_id,
            """
            UPDATE documents
            SET processing_status = 'failed', processing_message = %s, updated_at = NOW()
            WHERE id = %s
            """,
            (message, document_id),
        )

    def _update(self, document_id: str, sql: str, params: tuple[Any, ...]) -> None:
        try:
            with get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(sql, params)
                    if cur.rowcount == 0:
                        raise DocumentNotFoundError(f"Document {document_id} not found")
                conn.commit()
        except psycopg.Error as exc:
            raise PersistenceError(f"Failed to update document {document_id}: {exc}") from exc


def _jsonb_address(address: Address | None) -> Jsonb | None:
    return Jsonb(asdict(address)) if address is not None else None
