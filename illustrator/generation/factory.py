from illustrator.config.settings import Settings
from illustrator.generation.base import BaseGenerationClient
from illustrator.generation.example_client_adapter import ExampleGenerationClient
from illustrator.generation.openai_client_adapter import OpenAIGenerationClient


class GenerationClientFactory:
    """Creates the configured generation client."""

    PROVIDERS = ("example", "openai")

    @classmethod
    def create(cls, settings: Settings) -> BaseGenerationClient:
        provider = settings.generation_provider.lower()
        if provider == "example":
            return ExampleGenerationClient()
        if provider == "openai":
            return OpenAIGenerationClient(timeout_seconds=settings.generation_timeout_seconds)
        raise ValueError(
            f"Unknown generation provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )
