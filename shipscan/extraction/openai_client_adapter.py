from typing import Any

import httpx
import openai

from shipscan.extraction.client_base import BaseExtractionClient
from shipscan.extraction.exceptions import ExtractionNetworkError, RemoteExtractionError

_NETWORK_ERRORS = (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException)


class OpenAIClientAdapter(BaseExtractionClient):
    """Extraction client for any OpenAI-compatible chat endpoint.

    The SDK's own retries are off, so one failed call goes straight to the
    pattern-based fallback.
    """

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
            max_retries=0,
        )

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        max_tokens: int,
        system_prompt: str,
        user_prompt: str,
    ) -> str:
        try:
            response = self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                max_tokens=max_tokens,
                response_format={"type": "json_object"},
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
            )
        except _NETWORK_ERRORS as exc:
            raise ExtractionNetworkError(f"AI provider network error: {exc}") from exc
        except openai.OpenAIError as exc:
            raise ExtractionNetworkError(f"AI provider API error: {exc}") from exc
        return self._first_message(response)

    @staticmethod
    def _first_message(response: Any) -> str:
        if not response.choices:
            raise RemoteExtractionError("AI returned no choices")
        message = response.choices[0].message
        content = message.content if message is not None else None
        if not content:
            raise RemoteExtractionError("AI returned empty response")
        return content
