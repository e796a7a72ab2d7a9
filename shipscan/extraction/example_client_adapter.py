"""Offline extraction client.

Returns a fixed, schema-valid reply without any network call. Used for local
development, for tests, and as the template for new provider adapters:
implement BaseExtractionClient and register the provider in ExtractorFactory.
"""

import json
from typing import ClassVar

from shipscan.extraction.client_base import BaseExtractionClient


class ExampleClientAdapter(BaseExtractionClient):
    """Answers every request with a canned non-label reply."""

    DEFAULT_RESPONSE: ClassVar[dict[str, object]] = {
        "documentType": "OTHER",
        "isShippingLabel": False,
        "trackingNumber": None,
        "originAddress": None,
        "destinationAddress": None,
        "message": "Offline extraction client: no remote analysis performed",
    }

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        max_tokens: int,
        system_prompt: str,
        user_prompt: str,
    ) -> str:
        _ = model, temperature, max_tokens, system_prompt, user_prompt
        return json.dumps(self.DEFAULT_RESPONSE)
