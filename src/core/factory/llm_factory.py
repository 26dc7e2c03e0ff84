"""
Factory for creating LLM providers.
"""

from src.config import LLMConfig
from src.core.llm.base import LLMProvider
from src.core.llm.ollama import OllamaLLM
from src.core.llm.openai import OpenAILLM
from src.utils.exceptions import ConfigurationError


class LLMFactory:
    """Factory for creating LLM providers from configuration."""

    @staticmethod
    def create(config: LLMConfig, model: str | None = None) -> LLMProvider:
        """
        Create LLM provider from configuration.

        Args:
            config: LLM configuration
            model: Model to use (default: first configured model)

        Returns:
            LLM provider instance

        Raises:
            ConfigurationError: If provider is not supported, no model is
                configured, or the OpenAI API key is missing
        """
        if model is None:
            if not config.models:
                raise ConfigurationError("At least one LLM model must be configured")
            model = config.models[0]

        if config.provider == "ollama":
            return OllamaLLM(
                host=config.base_url,
                model=model,
                timeout=config.timeout,
            )
        elif config.provider == "openai":
            if not config.api_key:
                raise ConfigurationError("OpenAI API key is required")
            return OpenAILLM(
                api_key=config.api_key,
                model=model,
                base_url=config.base_url,
                timeout=config.timeout,
            )
        else:
            raise ConfigurationError(f"Unsupported LLM provider: {config.provider}")

    @staticmethod
    def create_all(config: LLMConfig) -> list[LLMProvider]:
        """
        Create one provider per configured model, in fallback order.

        Raises:
            ConfigurationError: As for `create`
        """
        if not config.models:
            raise ConfigurationError("At least one LLM model must be configured")
        return [LLMFactory.create(config, model) for model in config.models]
