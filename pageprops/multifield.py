"""Multi-field aggregation: repeating form fields parsed into typed items."""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, List, Optional, Protocol, Sequence

from .models import RenderRequest

ItemFactory = Callable[..., Any]


class MultiFieldError(RuntimeError):
    """Raised when a multi-field value cannot be turned into items."""


class MultiFieldBridge(Protocol):
    """Builds typed items from a multi-field stored on the rendered resource."""

    def build_multi_field_array(
        self, key: str, request: RenderRequest, item_type: Optional[ItemFactory]
    ) -> List[Any]:
        ...


class JsonMultiFieldBridge:
    """Reads multi-fields stored as one JSON object per value.

    Composite multi-field dialogs persist each entry as a JSON string in a
    multi-valued property, e.g. ``links = ['{"title": "Home", "url": "/"}', ...]``.
    Each decoded object is passed as keyword arguments to ``item_type``; with no
    ``item_type`` the decoded dictionaries are returned.
    """

    def build_multi_field_array(
        self, key: str, request: RenderRequest, item_type: Optional[ItemFactory] = None
    ) -> List[Any]:
        raw = request.resource.properties.get(key)
        if raw is None:
            return []
        entries: Sequence[Any] = [raw] if isinstance(raw, (str, dict)) else list(raw)
        return [self._build_item(key, index, entry, item_type) for index, entry in enumerate(entries)]

    @staticmethod
    def _build_item(
        key: str, index: int, entry: Any, item_type: Optional[ItemFactory]
    ) -> Any:
        data = _decode_entry(key, index, entry)
        if item_type is None:
            return data
        try:
            return item_type(**data)
        except TypeError as exc:
            raise MultiFieldError(
                f"Cannot build {getattr(item_type, '__name__', item_type)} from {key}[{index}]: {exc}"
            ) from exc


def _decode_entry(key: str, index: int, entry: Any) -> Dict[str, Any]:
    if isinstance(entry, dict):
        return entry
    if not isinstance(entry, str):
        raise MultiFieldError(f"Unsupported value in {key}[{index}]: {type(entry).__name__}")
    try:
        data = json.loads(entry)
    except json.JSONDecodeError as exc:
        raise MultiFieldError(f"Invalid JSON in {key}[{index}]: {exc.msg}") from exc
    if not isinstance(data, dict):
        raise MultiFieldError(f"Expected a JSON object in {key}[{index}]")
    return data


__all__ = ["ItemFactory", "JsonMultiFieldBridge", "MultiFieldBridge", "MultiFieldError"]
