"""Remote structured extraction through a chat-completion model."""

import json
from pathlib import Path

from shipscan.extraction.base import BaseExtractor
from shipscan.extraction.client_base import BaseExtractionClient
from shipscan.extraction.exceptions import ExtractionValidationError, RemoteExtractionError
from shipscan.extraction.models import (
    ExtractedDocument,
    ExtractionOutcome,
    ExtractionSuccess,
    RemoteFailure,
)
from shipscan.extraction.prompt_loader import render_system_prompt
from shipscan.extraction.validator import validate_and_build
from shipscan.logging.logger import Log

USER_PROMPT_PREFIX = "Extract shipping information from this OCR text: "


class AIExtractor(BaseExtractor):
    """Structures OCR text with a remote model under a fixed prompt contract."""

    def __init__(
        self,
        *,
        client: BaseExtractionClient,
        model: str,
        temperature: float = 0.1,
        max_tokens: int = 1000,
        system_prompt_path: Path | None = None,
        json_schema_path: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(0.2, temperature))
        self._max_tokens = max_tokens
        self._system_prompt = render_system_prompt(system_prompt_path, json_schema_path)

    @property
    def system_prompt(self) -> str:
        return self._system_prompt

    def extract(self, raw_text: str) -> ExtractedDocument:
        """Structure OCR text remotely.

        Raises:
            RemoteExtractionError: on network failure, non-success responses,
                or replies that are not JSON matching the schema.
        """
        user_prompt = USER_PROMPT_PREFIX + raw_text
        Log.debug(f"Extraction prompt:\n{user_prompt}")

        raw_response = self._client.create_chat_completion(
            model=self._model,
            temperature=self._temperature,
            max_tokens=self._max_tokens,
            system_prompt=self._system_prompt,
            user_prompt=user_prompt,
        )
        Log.debug(f"AI raw response:\n{raw_response}")

        document = validate_and_build(self._parse_json(raw_response))
        Log.info(
            f"AI extraction complete: {document.document_type.value}, "
            f"tracking number {'found' if document.tracking_number else 'missing'}"
        )
        return document

    def try_extract(self, raw_text: str) -> ExtractionOutcome:
        """Like extract(), but any failure comes back as a RemoteFailure."""
        try:
            return ExtractionSuccess(self.extract(raw_text))
        except RemoteExtractionError as exc:
            return RemoteFailure(reason=str(exc))
        except Exception as exc:
            Log.exception(f"Unexpected AI extraction error: {exc}")
            return RemoteFailure(reason=f"Unexpected AI extraction error: {exc}")

    @staticmethod
    def _parse_json(raw: str) -> dict[str, object]:
        cleaned = raw.strip()
        if cleaned.startswith("```"):
            lines = cleaned.splitlines()
            if lines and lines[0].startswith("```"):
                lines = lines[1:]
            if lines and lines[-1].strip() == "```":
                lines = lines[:-1]
            cleaned = "\n".join(lines)

        try:
            parsed = json.loads(cleaned)
        except json.JSONDecodeError as exc:
            raise ExtractionValidationError(f"Invalid JSON response: {exc}") from exc

        if not isinstance(parsed, dict):
            raise ExtractionValidationError("JSON response must be an object")
        return parsed
