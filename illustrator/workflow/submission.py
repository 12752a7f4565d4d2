from illustrator.generation.base import BaseGenerationClient
from illustrator.intake.coordinator import IntakeCoordinator
from illustrator.logging.logger import Log
from illustrator.workflow.exceptions import EmptySubmissionError, MissingApiKeyError
from illustrator.workflow.models import WorkflowStage
from illustrator.workflow.store import WorkflowStore

DEFAULT_PROMPTS = {
    "en": "Please analyze the uploaded document(s) and generate a Visual Schema.",
    "zh": "请分析上传的文档并生成视觉架构。",
}


class SchemaSubmission:
    """Sends the current intake (text and page images) to the logic model."""

    def __init__(
        self,
        store: WorkflowStore,
        coordinator: IntakeCoordinator,
        client: BaseGenerationClient,
    ) -> None:
        self._store = store
        self._coordinator = coordinator
        self._client = client

    def build_content(self) -> str:
        """Trimmed paper text, or the default instruction when only files were given."""
        text = self._store.paper_content.strip()
        return text or DEFAULT_PROMPTS[self._store.language]

    async def submit(self) -> str:
        """Generate a schema and move the workflow to Review.

        Raises:
            MissingApiKeyError: if the logic model has no API key.
            EmptySubmissionError: if there is neither text nor an image.
            GenerationError: if the generation backend fails.
        """
        config = self._store.logic_config
        if not config.api_key:
            raise MissingApiKeyError("Logic model API key is not configured")

        images = self._coordinator.images
        if not self._store.paper_content.strip() and not images:
            raise EmptySubmissionError("Enter text or upload files before generating")

        result = await self._client.generate(
            self.build_content(),
            config,
            images if images else None,
        )
        self._store.set_generated_schema(result.schema)
        self._store.set_reference_images(images)
        self._store.set_stage(WorkflowStage.REVIEW)
        Log.info(f"Schema generated ({len(result.schema)} chars from {len(images)} images)")
        return result.schema
