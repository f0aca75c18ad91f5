"""Core data models shared across pageprops helpers."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Awaitable, Dict, Mapping, Optional, Protocol

from .logging import get_logger

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from .multifield import MultiFieldBridge


@dataclass
class Resource:
    """A content resource and the properties bag attached to it."""

    path: str
    properties: Mapping[str, Any] = field(default_factory=dict)


@dataclass
class RenderRequest:
    """The request being rendered, as seen by multi-field bridges."""

    resource: Resource
    attributes: Dict[str, Any] = field(default_factory=dict)


class ResourceResolver(Protocol):
    """Resolves repository paths to resources."""

    def resolve(self, path: str) -> Awaitable[Resource]:
        """Return an awaitable yielding the resource at ``path``."""


class StyleSource(Protocol):
    """Design-time configuration for the component being rendered."""

    def get(self, key: str, default: Any = None) -> Any:
        ...


class ServiceLocator(Protocol):
    """Looks up platform services by type."""

    def get_service(self, service_type: type) -> Optional[Any]:
        ...


@dataclass
class RenderContext:
    """Everything a property helper may consult while rendering one component."""

    resolver: ResourceResolver
    resource: Resource
    style: StyleSource = field(default_factory=dict)
    services: Optional[ServiceLocator] = None
    multifield: Optional["MultiFieldBridge"] = None
    request: Optional[RenderRequest] = None
    logger: logging.Logger = field(default_factory=lambda: get_logger("properties"))

    def __post_init__(self) -> None:
        if self.request is None:
            self.request = RenderRequest(resource=self.resource)
