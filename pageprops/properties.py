"""Property access helpers for component templates.

Two usage patterns are supported. The primary one reads from the resource being
rendered::

    title = get_property(context, "text") or "default"

The advanced one reads from a different resource. It takes a ``Deferred``
holding that resource's properties and returns a ``Deferred`` holding the
value instead of the value itself::

    image_props = get_properties_relative(context, "image")
    image_title = get_property(context, "imageTitle", image_props, "Untitled")

The coercion helpers (``get_property_array``, ``get_property_boolean``,
``get_property_link``) accept either pattern and mirror it in their result.
"""

from __future__ import annotations

import random
import string
from typing import Any, Callable, Iterable, List, Mapping, Optional, TypeVar, Union

from .config import DEFAULT_ID_LENGTH, PagePropsConfig, default_config
from .deferred import Deferred, PendingProperties
from .links import DEFAULT_EXTENSION, add_html_extension, publish_link
from .models import RenderContext
from .multifield import ItemFactory, MultiFieldError

T = TypeVar("T")
Properties = Mapping[str, Any]
MaybeDeferred = Union[T, Deferred[T]]
PropertiesSource = Union[PendingProperties, Deferred[Properties], Properties]

_ID_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits
_TRUTHY_STRINGS = ("true", "yes", "1")


class PropertyResolutionError(RuntimeError):
    """Raised when a resource's properties cannot be resolved."""


def get_properties_absolute(context: RenderContext, path: str) -> Deferred[Properties]:
    """Return a ``Deferred`` holding the properties of the resource at ``path``."""

    def _fail(exc: Exception) -> Properties:
        raise PropertyResolutionError(str(exc)) from exc

    return Deferred(lambda: context.resolver.resolve(path)).then(
        lambda resource: resource.properties, _fail
    )


def get_properties_relative(context: RenderContext, path: str) -> Deferred[Properties]:
    """Return a ``Deferred`` holding the properties of a resource below the current one."""
    return get_properties_absolute(context, f"{context.resource.path}/{path}")


def get_property(
    context: RenderContext,
    key: str,
    properties: Optional[Deferred[Properties]] = None,
    fallback: Any = None,
) -> MaybeDeferred[Any]:
    """Read ``key`` from the current resource, or from ``properties`` when given.

    Without ``properties`` the value is returned directly and ``fallback`` is not
    applied. With ``properties`` a ``Deferred`` is returned that yields the value,
    or ``fallback`` when the value is empty or the properties failed to load.
    """
    if properties is None:
        return context.resource.properties.get(key)
    if not isinstance(properties, Deferred):
        raise TypeError(
            f"properties must be a Deferred, got {type(properties).__name__}"
        )

    def _recover(exc: Exception) -> Any:
        context.logger.debug(
            "Failed to load property %s, defaulting to %s (%s)", key, fallback, exc
        )
        return fallback

    return properties.then(lambda props: props.get(key) or fallback, _recover)


def get_style_property(context: RenderContext, key: str) -> Any:
    """Get a design-mode style property for the current component."""
    return context.style.get(key)


def get_style_property_array(context: RenderContext, key: str) -> Optional[List[Any]]:
    return to_array(get_style_property(context, key))


def get_property_array(
    context: RenderContext, key: str, properties: Optional[Deferred[Properties]] = None
) -> MaybeDeferred[Optional[List[Any]]]:
    """List value of a property. See ``get_property``."""
    return _transform_property(get_property(context, key, properties), to_array)


def get_property_boolean(
    context: RenderContext, key: str, properties: Optional[Deferred[Properties]] = None
) -> MaybeDeferred[bool]:
    """Boolean value of a property. See ``get_property``."""
    return _transform_property(get_property(context, key, properties), to_boolean)


def get_property_link(
    context: RenderContext,
    key: str,
    externalize: bool = False,
    properties: Optional[Deferred[Properties]] = None,
    *,
    extension: str = DEFAULT_EXTENSION,
) -> MaybeDeferred[Optional[str]]:
    """Link value of a property, externalized for publish when requested."""
    return _transform_property(
        get_property(context, key, properties), _to_link, externalize, context, extension
    )


def get_property_multi_field_array(
    context: RenderContext, key: str, item_type: Optional[ItemFactory] = None
) -> List[Any]:
    """Build items from the multi-field stored under ``key``.

    Returns an empty list, after logging an error, when no bridge is configured
    or the stored value cannot be parsed.
    """
    bridge = context.multifield
    if bridge is None:
        context.logger.error(
            "Missing multi-field bridge! Cannot build multi field value for %s", key
        )
        return []
    try:
        return bridge.build_multi_field_array(key, context.request, item_type)
    except MultiFieldError as exc:
        context.logger.error("Cannot build multi field value for %s: %s", key, exc)
        return []


def get_random_id(length: Optional[int] = None) -> str:
    """Return a random alphanumeric id; not suitable for secrets."""
    length = length or DEFAULT_ID_LENGTH
    return "".join(random.choice(_ID_ALPHABET) for _ in range(length))


def _transform_property(
    value: MaybeDeferred[Any], transform: Callable[..., T], *args: Any
) -> MaybeDeferred[T]:
    if isinstance(value, Deferred):
        return value.then(lambda resolved: transform(resolved, *args))
    return transform(value, *args)


def to_array(value: Any) -> Any:
    if not value:
        return value
    if isinstance(value, list):
        return value
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        return value.split(",")
    if isinstance(value, Mapping):
        # A structured value is one item, not a list of its keys.
        return [value]
    if isinstance(value, Iterable):
        return list(value)
    return str(value).split(",")


def to_boolean(value: Any) -> bool:
    if isinstance(value, str):
        return value in _TRUTHY_STRINGS
    # True, 1 and 1.0 all compare equal to one.
    return isinstance(value, (bool, int, float)) and value == 1


def _to_link(
    value: Optional[str],
    externalize: bool,
    context: RenderContext,
    extension: str = DEFAULT_EXTENSION,
) -> Optional[str]:
    url = add_html_extension(value, extension)
    if externalize:
        url = publish_link(context, url)
    return url


class PropertyUtils:
    """Property helpers bound to one render context, as exposed to templates.

    ``get_properties_absolute`` and ``get_properties_relative`` return a
    ``PendingProperties`` holder so async Jinja templates pass the handle on
    instead of awaiting it. The other helpers accept that holder, a ``Deferred``
    or an already loaded mapping wherever properties are expected.
    """

    def __init__(self, context: RenderContext, config: PagePropsConfig | None = None) -> None:
        self.context = context
        self.config = config or default_config()

    def get_properties_absolute(self, path: str) -> PendingProperties:
        return PendingProperties(get_properties_absolute(self.context, path))

    def get_properties_relative(self, path: str) -> PendingProperties:
        return PendingProperties(get_properties_relative(self.context, path))

    def get_property(
        self,
        key: str,
        properties: Optional[PropertiesSource] = None,
        fallback: Any = None,
    ) -> MaybeDeferred[Any]:
        return get_property(self.context, key, _as_deferred(properties), fallback)

    def get_style_property(self, key: str) -> Any:
        return get_style_property(self.context, key)

    def get_style_property_array(self, key: str) -> Optional[List[Any]]:
        return get_style_property_array(self.context, key)

    def get_property_array(
        self, key: str, properties: Optional[PropertiesSource] = None
    ) -> MaybeDeferred[Optional[List[Any]]]:
        return get_property_array(self.context, key, _as_deferred(properties))

    def get_property_boolean(
        self, key: str, properties: Optional[PropertiesSource] = None
    ) -> MaybeDeferred[bool]:
        return get_property_boolean(self.context, key, _as_deferred(properties))

    def get_property_link(
        self,
        key: str,
        externalize: Optional[bool] = None,
        properties: Optional[PropertiesSource] = None,
    ) -> MaybeDeferred[Optional[str]]:
        if externalize is None:
            externalize = self.config.links.externalize
        return get_property_link(
            self.context,
            key,
            externalize,
            _as_deferred(properties),
            extension=self.config.links.extension,
        )

    def get_property_multi_field_array(
        self, key: str, item_type: Optional[ItemFactory] = None
    ) -> List[Any]:
        return get_property_multi_field_array(self.context, key, item_type)

    def get_random_id(self, length: Optional[int] = None) -> str:
        return get_random_id(length or self.config.random_id_length)

    def add_html_extension(self, link: Optional[str]) -> Optional[str]:
        return add_html_extension(link, self.config.links.extension)

    def publish_link(self, link: Optional[str]) -> Optional[str]:
        return publish_link(self.context, link)


def _as_deferred(properties: Optional[PropertiesSource]) -> Optional[Deferred[Properties]]:
    if isinstance(properties, PendingProperties):
        return properties.deferred
    if properties is None or isinstance(properties, Deferred):
        return properties
    return Deferred.resolved(properties)


__all__ = [
    "PropertyResolutionError",
    "PropertyUtils",
    "get_properties_absolute",
    "get_properties_relative",
    "get_property",
    "get_property_array",
    "get_property_boolean",
    "get_property_link",
    "get_property_multi_field_array",
    "get_random_id",
    "get_style_property",
    "get_style_property_array",
    "to_array",
    "to_boolean",
]
