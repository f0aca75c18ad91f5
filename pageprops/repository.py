"""In-process content repository used to resolve resources by path."""

from __future__ import annotations

import posixpath
from typing import Any, Dict, Mapping

from .models import RenderContext, Resource


class ResourceNotFoundError(LookupError):
    """Raised when no resource exists at the requested path."""

    def __init__(self, path: str) -> None:
        super().__init__(f"No resource found at {path}")
        self.path = path


class MemoryRepository:
    """Resolves resources from a ``{path: properties}`` mapping."""

    def __init__(self, resources: Mapping[str, Mapping[str, Any]] | None = None) -> None:
        self._resources: Dict[str, Resource] = {}
        for path, properties in (resources or {}).items():
            self.add(path, properties)

    def add(self, path: str, properties: Mapping[str, Any]) -> Resource:
        normalized = _normalize(path)
        resource = Resource(path=normalized, properties=dict(properties))
        self._resources[normalized] = resource
        return resource

    def get(self, path: str) -> Resource:
        normalized = _normalize(path)
        try:
            return self._resources[normalized]
        except KeyError:
            raise ResourceNotFoundError(normalized) from None

    async def resolve(self, path: str) -> Resource:
        return self.get(path)

    def context_for(self, path: str, **kwargs: Any) -> RenderContext:
        """Build a render context whose current resource lives at ``path``."""
        return RenderContext(resolver=self, resource=self.get(path), **kwargs)


def _normalize(path: str) -> str:
    if not path.startswith("/"):
        raise ValueError(f"Repository paths must be absolute: {path!r}")
    normalized = posixpath.normpath(path)
    # normpath keeps a leading double slash per POSIX rules.
    if normalized.startswith("//"):
        normalized = "/" + normalized.lstrip("/")
    return normalized


__all__ = ["MemoryRepository", "ResourceNotFoundError"]
