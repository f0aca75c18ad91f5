"""Jinja2 binding that exposes the property helpers to component templates."""

from __future__ import annotations

from typing import Optional

from jinja2 import Environment

from .config import PagePropsConfig, default_config
from .links import add_html_extension, publish_link
from .logging import configure_logging
from .models import RenderContext
from .properties import PropertyUtils, to_array, to_boolean
from .services import Externalizer, PrefixExternalizer, ServiceRegistry


def register_helpers(
    env: Environment,
    context: RenderContext,
    *,
    config: Optional[PagePropsConfig] = None,
    name: str = "props",
) -> PropertyUtils:
    """Install a ``PropertyUtils`` global and link/coercion filters on ``env``.

    Templates rendered with ``enable_async=True`` may use the deferred helpers
    directly; Jinja awaits the results while rendering, and a missing resource
    renders the fallback::

        {{ props.get_property("title", props.get_properties_relative("image"), "Untitled") }}

    When a config is passed, its ``logging`` section configures the pageprops
    logger. When it names a publish origin and the context has no service
    locator, a ``PrefixExternalizer`` is registered on the context.
    """
    if config is not None:
        configure_logging(verbose=config.logging.verbose, log_file=config.logging.log_file)
    config = config or default_config()
    if config.links.publish_origin and context.services is None:
        registry = ServiceRegistry()
        registry.register(Externalizer, PrefixExternalizer(config.links.publish_origin))
        context.services = registry

    utils = PropertyUtils(context, config=config)
    extension = config.links.extension
    env.globals[name] = utils
    env.filters["html_link"] = lambda link: add_html_extension(link, extension)
    env.filters["publish_link"] = lambda link: publish_link(context, link)
    env.filters["to_array"] = to_array
    env.filters["to_boolean"] = to_boolean
    return utils


__all__ = ["register_helpers"]
