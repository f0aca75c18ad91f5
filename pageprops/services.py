"""Service lookup and externalizers used to build publish links."""

from __future__ import annotations

from typing import Any, Dict, Optional, Protocol

from .models import ResourceResolver


class Externalizer(Protocol):
    """Rewrites internal repository paths into publish-facing URLs."""

    def publish_link(self, resolver: ResourceResolver, link: str) -> str:
        ...


class ServiceRegistry:
    """Keeps platform services keyed by the type they were registered under."""

    def __init__(self) -> None:
        self._services: Dict[type, Any] = {}

    def register(self, service_type: type, instance: Any) -> None:
        self._services[service_type] = instance

    def get_service(self, service_type: type) -> Optional[Any]:
        return self._services.get(service_type)


class PrefixExternalizer:
    """Externalizer that prefixes local links with a fixed publish origin."""

    def __init__(self, origin: str) -> None:
        self.origin = origin.rstrip("/")

    def publish_link(self, resolver: ResourceResolver, link: str) -> str:
        return f"{self.origin}{link}"


__all__ = ["Externalizer", "PrefixExternalizer", "ServiceRegistry"]
