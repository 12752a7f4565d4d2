"""Encodes and decodes the persisted workflow record.

Stored layout (camelCase keys, wrapped in a versioned envelope)::

    {"state": {"logicConfig": {...}, "visionConfig": {...}, "language": "en",
               "paperContent": "...", "generatedSchema": "...",
               "history": [{"id", "timestamp", "schema", "imageUrl"}]},
     "version": 0}

Decoding never fails: fields that are missing or of the wrong shape fall back
to the defaults one by one, and malformed history entries are dropped.
"""

import json
from typing import Any

from illustrator.logging.logger import Log
from illustrator.workflow.models import (
    SUPPORTED_LANGUAGES,
    HistoryItem,
    ModelConfig,
    WorkflowSnapshot,
)

SNAPSHOT_VERSION = 0


def encode_snapshot(snapshot: WorkflowSnapshot) -> str:
    state = {
        "logicConfig": _config_to_dict(snapshot.logic_config),
        "visionConfig": _config_to_dict(snapshot.vision_config),
        "language": snapshot.language,
        "paperContent": snapshot.paper_content,
        "generatedSchema": snapshot.generated_schema,
        "history": [_history_item_to_dict(item) for item in snapshot.history],
    }
    return json.dumps({"state": state, "version": SNAPSHOT_VERSION}, ensure_ascii=False)


def decode_snapshot(
    raw: str,
    defaults: WorkflowSnapshot,
    max_history_items: int | None = None,
) -> WorkflowSnapshot:
    """Rebuild a snapshot from its stored form, filling gaps from ``defaults``."""
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as exc:
        Log.warning(f"Stored workflow state is not valid JSON, using defaults: {exc}")
        return defaults
    if not isinstance(data, dict):
        Log.warning("Stored workflow state is not an object, using defaults")
        return defaults

    state = data.get("state", data)
    if not isinstance(state, dict):
        return defaults

    history = _build_history(state.get("history"), defaults.history)
    if max_history_items is not None:
        history = history[:max_history_items]

    return WorkflowSnapshot(
        logic_config=_build_config(state.get("logicConfig"), defaults.logic_config),
        vision_config=_build_config(state.get("visionConfig"), defaults.vision_config),
        language=_build_language(state.get("language"), defaults.language),
        paper_content=_build_str(state.get("paperContent"), defaults.paper_content),
        generated_schema=_build_str(state.get("generatedSchema"), defaults.generated_schema),
        history=history,
    )


def _config_to_dict(config: ModelConfig) -> dict[str, str]:
    return {
        "baseUrl": config.base_url,
        "apiKey": config.api_key,
        "modelName": config.model_name,
    }


def _history_item_to_dict(item: HistoryItem) -> dict[str, Any]:
    return {
        "id": item.id,
        "timestamp": item.timestamp,
        "schema": item.schema,
        "imageUrl": item.image_url,
    }


def _build_str(raw: Any, default: str) -> str:
    return raw if isinstance(raw, str) else default


def _build_language(raw: Any, default: str) -> str:
    return raw if raw in SUPPORTED_LANGUAGES else default


def _build_config(raw: Any, default: ModelConfig) -> ModelConfig:
    if not isinstance(raw, dict):
        return default
    return ModelConfig(
        base_url=_build_str(raw.get("baseUrl"), default.base_url),
        api_key=_build_str(raw.get("apiKey"), default.api_key),
        model_name=_build_str(raw.get("modelName"), default.model_name),
    )


def _build_history(raw: Any, default: tuple[HistoryItem, ...]) -> tuple[HistoryItem, ...]:
    if not isinstance(raw, list):
        return default
    items: list[HistoryItem] = []
    for i, entry in enumerate(raw):
        item = _build_history_item(entry)
        if item is None:
            Log.warning(f"Dropping malformed history entry at position {i}")
            continue
        items.append(item)
    return tuple(items)


def _build_history_item(raw: Any) -> HistoryItem | None:
    if not isinstance(raw, dict):
        return None
    item_id = raw.get("id")
    timestamp = raw.get("timestamp")
    schema = raw.get("schema")
    image_url = raw.get("imageUrl")
    if not isinstance(item_id, str) or not isinstance(schema, str):
        return None
    if isinstance(timestamp, bool) or not isinstance(timestamp, int | float):
        return None
    if image_url is not None and not isinstance(image_url, str):
        return None
    return HistoryItem(id=item_id, timestamp=int(timestamp), schema=schema, image_url=image_url)
