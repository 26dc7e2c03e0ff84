"""
Content Generator - produces session text with a generative model.

Tries the configured models in order. An authentication failure ends the
attempt at once (every model shares the credentials); any other failure moves
on to the next model.
"""

from pydantic import BaseModel

from src.core.llm.base import LLMProvider
from src.utils.exceptions import LLMAuthError, LLMError, ValidationError
from src.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_SYSTEM_PROMPT = "You are a helpful assistant that writes clear, concise content."


class GeneratedContent(BaseModel):
    """Text produced by one of the models."""

    text: str
    model: str


class ContentGenerator:
    """Text generation with model fallback."""

    def __init__(
        self,
        providers: list[LLMProvider],
        system_prompt: str = DEFAULT_SYSTEM_PROMPT,
        temperature: float = 0.7,
        max_tokens: int = 512,
    ):
        """
        Initialize content generator.

        Args:
            providers: Providers to try, in order
            system_prompt: System message sent with every prompt
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate
        """
        self.providers = providers
        self.system_prompt = system_prompt
        self.temperature = temperature
        self.max_tokens = max_tokens

    async def generate(self, prompt: str) -> GeneratedContent:
        """
        Generate text for a prompt.

        Args:
            prompt: User prompt

        Returns:
            GeneratedContent with the text and the model that produced it

        Raises:
            ValidationError: If the prompt is empty
            LLMAuthError: If a provider rejects the credentials
            LLMError: If every model fails
        """
        if not prompt or not prompt.strip():
            raise ValidationError("Prompt is required")

        last_error: LLMError | None = None
        for provider in self.providers:
            logger.info(f"Trying model: {provider.model}", extra={"model": provider.model})
            try:
                text = await provider.complete(
                    prompt,
                    system_prompt=self.system_prompt,
                    max_tokens=self.max_tokens,
                    temperature=self.temperature,
                )
                return GeneratedContent(text=text, model=provider.model)
            except LLMAuthError:
                raise
            except LLMError as e:
                last_error = e
                logger.warning(
                    f"Model {provider.model} failed: {e}",
                    extra={"model": provider.model, "error_type": type(e).__name__},
                )

        raise LLMError(
            "All models are currently unavailable",
            context={
                "models": [provider.model for provider in self.providers],
                "details": str(last_error) if last_error else "",
            },
        ) from last_error

    async def close(self) -> None:
        for provider in self.providers:
            await provider.close()
