from collections.abc import Sequence
from typing import Any

import httpx
import openai

from illustrator.generation.base import BaseGenerationClient
from illustrator.generation.exceptions import GenerationError, GenerationNetworkError
from illustrator.generation.models import GenerationResult
from illustrator.generation.prompt_loader import load_system_prompt
from illustrator.logging.logger import Log
from illustrator.workflow.models import ModelConfig


class OpenAIGenerationClient(BaseGenerationClient):
    """Schema generation over any OpenAI-compatible chat completions API.

    A client is built per call because endpoint and key come from the
    user-editable ``ModelConfig``.
    """

    def __init__(
        self,
        *,
        timeout_seconds: int,
        temperature: float = 0.7,
        system_prompt: str | None = None,
    ) -> None:
        self._timeout_seconds = timeout_seconds
        self._temperature = temperature
        self._system_prompt = system_prompt if system_prompt is not None else load_system_prompt()

    async def generate(
        self,
        content: str,
        config: ModelConfig,
        images: Sequence[str] | None = None,
    ) -> GenerationResult:
        client = openai.AsyncOpenAI(
            api_key=config.api_key,
            base_url=config.base_url or None,
            timeout=self._timeout_seconds,
        )
        Log.info(
            f"Requesting schema from {config.model_name}",
            images=len(images or ()),
        )
        try:
            response = await client.chat.completions.create(
                model=config.model_name,
                temperature=self._temperature,
                messages=[
                    {"role": "system", "content": self._system_prompt},
                    {"role": "user", "content": self._user_content(content, images)},
                ],
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise GenerationNetworkError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise GenerationNetworkError(f"AI provider API error: {exc}") from exc
        finally:
            await client.close()

        if not response.choices:
            raise GenerationError("AI returned no choices")
        schema = response.choices[0].message.content
        if not schema or not schema.strip():
            raise GenerationError("AI returned empty response")
        return GenerationResult(schema=schema.strip())

    @staticmethod
    def _user_content(
        content: str, images: Sequence[str] | None
    ) -> str | list[dict[str, Any]]:
        if not images:
            return content
        parts: list[dict[str, Any]] = [{"type": "text", "text": content}]
        parts.extend({"type": "image_url", "image_url": {"url": image}} for image in images)
        return parts
