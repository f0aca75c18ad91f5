"""Link formatting helpers."""

from __future__ import annotations

import re
from typing import Optional

from .models import RenderContext
from .services import Externalizer

DEFAULT_EXTENSION = ".html"

# A dot in the final path segment followed by at least one more character.
_EXTENSION_PATTERN = re.compile(r"\.[^/]+$")


def add_html_extension(link: Optional[str], extension: str = DEFAULT_EXTENSION) -> Optional[str]:
    """Append ``extension`` to repository-local links that do not carry one yet.

    Empty values and anything not starting with ``/`` (``http://``, ``mailto:``,
    anchors) are returned untouched.
    """
    if not link or not link.startswith("/"):
        return link
    if _EXTENSION_PATTERN.search(link):
        return link
    return link + extension


def publish_link(context: RenderContext, link: Optional[str]) -> Optional[str]:
    """Externalize a repository-local link through the registered externalizer.

    Without a service locator, an externalizer, or a ``publish_link`` operation
    the link is returned unchanged.
    """
    if not link or not link.startswith("/"):
        return link

    externalizer = None
    if context.services is not None:
        externalizer = context.services.get_service(Externalizer)
    publish = getattr(externalizer, "publish_link", None)
    if not callable(publish):
        context.logger.debug("No externalizer available, keeping %s", link)
        return link
    return publish(context.resolver, link)


__all__ = ["DEFAULT_EXTENSION", "add_html_extension", "publish_link"]
