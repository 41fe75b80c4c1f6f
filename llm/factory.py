"""Factory for creating expense extractor instances."""

from config import Config
from errors import ConfigError
from llm.providers.base import ExpenseExtractor
from llm.providers.openai import OpenAIProvider
from logger import get_logger

logger = get_logger()


def get_extractor(config: Config) -> ExpenseExtractor:
    """Create the expense extractor described by configuration.

    Args:
        config: Application configuration.

    Returns:
        ExpenseExtractor backed by OpenAI.

    Raises:
        ConfigError: If no OpenAI API key is configured.
    """
    if not config.openai_api_key:
        raise ConfigError("OPENAI_API_KEY not set")

    logger.info(f"Initializing OpenAI extractor (model: {config.openai_model})")

    return OpenAIProvider(api_key=config.openai_api_key, model=config.openai_model)
