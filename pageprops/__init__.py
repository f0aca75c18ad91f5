"""Property access helpers for component templates."""

from .deferred import Deferred, PendingProperties
from .links import add_html_extension, publish_link
from .models import RenderContext, RenderRequest, Resource
from .multifield import JsonMultiFieldBridge, MultiFieldError
from .properties import (
    PropertyResolutionError,
    PropertyUtils,
    get_properties_absolute,
    get_properties_relative,
    get_property,
    get_property_array,
    get_property_boolean,
    get_property_link,
    get_property_multi_field_array,
    get_random_id,
    get_style_property,
    get_style_property_array,
)
from .repository import MemoryRepository, ResourceNotFoundError
from .services import Externalizer, PrefixExternalizer, ServiceRegistry

__all__ = [
    "Deferred",
    "Externalizer",
    "JsonMultiFieldBridge",
    "MemoryRepository",
    "MultiFieldError",
    "PendingProperties",
    "PrefixExternalizer",
    "PropertyResolutionError",
    "PropertyUtils",
    "RenderContext",
    "RenderRequest",
    "Resource",
    "ResourceNotFoundError",
    "ServiceRegistry",
    "add_html_extension",
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
    "publish_link",
]
