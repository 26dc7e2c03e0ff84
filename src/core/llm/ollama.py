"""
Ollama LLM provider using native ollama-python SDK.
"""

import ollama

from src.core.llm.base import LLMProvider
from src.utils.exceptions import LLMAuthError, LLMError, ValidationError
from src.utils.logger import get_logger

logger = get_logger(__name__)


class OllamaLLM(LLMProvider):
    """
    Ollama LLM provider for text generation.

    Uses native ollama-python SDK for chat completions.
    """

    def __init__(
        self,
        host: str = "http://localhost:11434",
        model: str = "llama3.1:8b",
        timeout: float = 120.0,
    ):
        """
        Initialize Ollama LLM provider.

        Args:
            host: Ollama server URL
            model: Model name for text generation (e.g., "llama3.1", "mistral")
            timeout: Request timeout in seconds
        """
        self.host = host
        self.model = model
        self.timeout = timeout

        # Create async client
        self.client = ollama.AsyncClient(host=host, timeout=timeout)

    async def complete(
        self,
        prompt: str,
        system_prompt: str | None = None,
        max_tokens: int = 512,
        temperature: float = 0.7,
        **kwargs,
    ) -> str:
        """
        Generate completion using Ollama.

        Args:
            prompt: Input prompt
            system_prompt: Optional system message
            max_tokens: Maximum tokens to generate
            temperature: Sampling temperature
            **kwargs: Additional options (passed to Ollama)

        Returns:
            Generated text

        Raises:
            ValidationError: If the prompt is empty
            LLMAuthError: If the server answers 401/403
            LLMError: For any other failure
        """
        if not prompt or not prompt.strip():
            raise ValidationError("Prompt cannot be empty")

        options = {
            "temperature": temperature,
            "num_predict": max_tokens,
            **kwargs.get("options", {}),
        }

        try:
            response = await self.client.chat(
                model=self.model,
                messages=self._messages(prompt, system_prompt),
                options=options,
                **{k: v for k, v in kwargs.items() if k != "options"},
            )
        except ollama.ResponseError as e:
            if e.status_code in (401, 403):
                raise LLMAuthError(
                    f"Ollama rejected credentials: {e}", context={"model": self.model}
                ) from e
            raise LLMError(f"Ollama error: {e}", context={"model": self.model}) from e
        except Exception as e:
            logger.error(
                f"Ollama request failed: {e}",
                extra={"model": self.model, "error_type": type(e).__name__},
            )
            raise LLMError(f"Ollama request failed: {e}", context={"model": self.model}) from e

        content = response["message"]["content"]
        if not content:
            raise LLMError("Ollama returned empty content", context={"model": self.model})
        return content
