from abc import ABC, abstractmethod


class BaseCompletionClient(ABC):
    """Contract for provider-specific text-generation clients."""

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
        """Return the generated text of the first choice."""
