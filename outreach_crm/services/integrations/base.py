"""
Base interfaces for integration providers.
Abstract base classes for third-party service integrations.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass(frozen=True)
class GenerationPrompt:
    """Everything a text-generation provider needs for one draft."""
    system: str
    user: str
    channel: str
    message_type: str
    lead: Dict[str, Optional[str]] = field(default_factory=dict)


class TextGenerationProvider(ABC):
    """Base interface for text-generation providers (OpenAI, Gemini, etc.)"""

    name: str = "provider"

    @abstractmethod
    async def complete(self, prompt: GenerationPrompt) -> str:
        """
        Generate a message for the prompt.

        Returns:
            The provider's raw text, expected to be a JSON object
            {"subject": str | null, "content": str}.

        Raises:
            GenerationUnavailableError: the provider could not produce a response.
        """
        pass
