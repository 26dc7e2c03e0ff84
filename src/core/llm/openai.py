"""
OpenAI LLM provider using official SDK.

Also serves OpenAI-compatible APIs (Groq, vLLM, ...) through `base_url`.
"""

import openai
from openai import AsyncOpenAI

from src.core.llm.base import LLMProvider
from src.utils.exceptions import LLMAuthError, LLMError, ValidationError
from src.utils.logger import get_logger

logger = get_logger(__name__)


class OpenAILLM(LLMProvider):
    """
    OpenAI LLM provider for text generation.

    Uses the official OpenAI SDK chat completions API.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        organization: str | None = None,
        base_url: str | None = None,
        timeout: float = 120.0,
    ):
        """
        Initialize OpenAI LLM provider.

        Args:
            api_key: API key
            model: Model name (e.g., "gpt-4o-mini", "llama-3.1-8b-instant")
            organization: Optional organization ID
            base_url: Optional custom base URL for OpenAI-compatible APIs
            timeout: Request timeout in seconds
        """
        self.model = model

        self.client = AsyncOpenAI(
            api_key=api_key, organization=organization, base_url=base_url, timeout=timeout
        )

    async def complete(
        self,
        prompt: str,
        system_prompt: str | None = None,
        max_tokens: int = 512,
        temperature: float = 0.7,
        **kwargs,
    ) -> str:
        """
        Generate completion using OpenAI.

        Args:
            prompt: Input prompt
            system_prompt: Optional system message
            max_tokens: Maximum tokens to generate
            temperature: Sampling temperature
            **kwargs: Additional parameters (e.g., stop, presence_penalty)
        Returns:
            Generated text
        Raises:
            ValidationError: If the prompt is empty
            LLMAuthError: If the API key is rejected
            LLMError: If OpenAI API call fails
        """
        if not prompt or not prompt.strip():
            raise ValidationError("Prompt cannot be empty")

        params = {
            "model": self.model,
            "messages": self._messages(prompt, system_prompt),
            "temperature": temperature,
            "max_tokens": max_tokens,
            **kwargs,
        }

        try:
            response = await self.client.chat.completions.create(**params)
            content = response.choices[0].message.content

            if not content:
                raise LLMError("OpenAI returned empty content")

            return content
        except LLMError:
            raise
        except (openai.AuthenticationError, openai.PermissionDeniedError) as e:
            raise LLMAuthError(
                f"OpenAI rejected credentials: {e}", context={"model": self.model}
            ) from e
        except Exception as e:
            logger.error(
                f"OpenAI API error: {e}",
                extra={"model": self.model, "error": str(e), "error_type": type(e).__name__},
            )
            raise LLMError(f"OpenAI API error: {e}", context={"model": self.model}) from e

    async def close(self):
        """Close OpenAI client."""
        await self.client.close()
