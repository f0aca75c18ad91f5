from __future__ import annotations

import logging
from typing import Iterator

import pytest

from pageprops.models import RenderContext
from pageprops.repository import MemoryRepository


@pytest.fixture(autouse=True)
def _restore_pageprops_logger() -> Iterator[None]:
    """Undo configure_logging so caplog keeps seeing pageprops records."""
    logger = logging.getLogger("pageprops")
    original_handlers = list(logger.handlers)
    yield
    for handler in list(logger.handlers):
        if handler not in original_handlers:
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def repository() -> MemoryRepository:
    """Provide a small content tree with a page and an image component."""
    return MemoryRepository(
        {
            "/content/site/home": {
                "title": "Home",
                "tags": "news,featured",
                "showNav": "yes",
                "cta": "/content/site/about",
            },
            "/content/site/home/image": {
                "imageTitle": "Hero",
                "fileReference": "/content/dam/hero.png",
                "decorative": True,
            },
        }
    )


@pytest.fixture
def context(repository: MemoryRepository) -> RenderContext:
    """Render context for the home page."""
    return repository.context_for("/content/site/home")
