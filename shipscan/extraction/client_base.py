from abc import ABC, abstractmethod


class BaseExtractionClient(ABC):
    """Contract for provider-specific chat-completion clients."""

    @abstractmethod
    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        max_tokens: int,
        system_prompt: str,
        user_prompt: str,
    ) -> str:
        """Return the provider's reply as plain text.

        Raises:
            ExtractionNetworkError: on transport or non-success responses.
            RemoteExtractionError: when the reply carries no content.
        """
