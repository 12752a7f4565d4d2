import pytest

from illustrator.config.settings import Settings
from illustrator.generation.example_client_adapter import ExampleGenerationClient
from illustrator.generation.factory import GenerationClientFactory
from illustrator.generation.openai_client_adapter import OpenAIGenerationClient


class TestGenerationClientFactory:
    def test_creates_openai_client_by_default(self, settings: Settings) -> None:
        assert isinstance(GenerationClientFactory.create(settings), OpenAIGenerationClient)

    def test_creates_example_client(self) -> None:
        settings = Settings(_env_file=None, generation_provider="Example")
        assert isinstance(GenerationClientFactory.create(settings), ExampleGenerationClient)

    def test_raises_for_unknown_provider(self) -> None:
        settings = Settings(_env_file=None, generation_provider="acme")
        with pytest.raises(ValueError, match="Unknown generation provider"):
            GenerationClientFactory.create(settings)
