"""Tests for the Jinja2 template binding."""

from __future__ import annotations

import asyncio
import inspect
import json
import logging
from dataclasses import dataclass
from pathlib import Path

import pytest
from jinja2 import Environment

from pageprops.config import LinkConfig, LoggingConfig, PagePropsConfig
from pageprops.deferred import PendingProperties
from pageprops.models import RenderContext
from pageprops.multifield import JsonMultiFieldBridge
from pageprops.properties import PropertyUtils
from pageprops.repository import MemoryRepository
from pageprops.templating import register_helpers


@dataclass
class Teaser:
    title: str


def test_sync_template_reads_current_resource(context: RenderContext) -> None:
    env = Environment()
    register_helpers(env, context)

    template = env.from_string(
        "{{ props.get_property('title') }}|"
        "{{ props.get_property_link('cta') }}|"
        "{{ props.get_property_array('tags') | join(';') }}|"
        "{{ props.get_property_boolean('showNav') }}|"
        "{{ '/content/site/faq' | html_link }}|"
        "{{ 'yes' | to_boolean }}"
    )

    assert template.render() == "Home|/content/site/about.html|news;featured|True|/content/site/faq.html|True"


def test_async_template_awaits_deferred_properties(context: RenderContext) -> None:
    env = Environment(enable_async=True)
    register_helpers(env, context)

    template = env.from_string(
        "{{ props.get_property('imageTitle', props.get_properties_relative('image'), 'Untitled') }}|"
        "{{ props.get_property('caption', props.get_properties_relative('image'), 'Untitled') }}"
    )

    assert asyncio.run(template.render_async()) == "Hero|Untitled"


def test_async_template_falls_back_when_resource_is_missing(
    context: RenderContext, caplog: pytest.LogCaptureFixture
) -> None:
    env = Environment(enable_async=True)
    register_helpers(env, context)

    template = env.from_string(
        "{{ props.get_property('imageTitle', props.get_properties_relative('nope'), 'Untitled') }}|"
        "{{ props.get_property_boolean('decorative', props.get_properties_absolute('/content/gone')) }}"
    )

    with caplog.at_level(logging.DEBUG, logger="pageprops"):
        assert asyncio.run(template.render_async()) == "Untitled|False"
    assert "Failed to load property imageTitle, defaulting to Untitled" in caplog.text


def test_property_handles_are_not_awaited_by_templates(context: RenderContext) -> None:
    utils = PropertyUtils(context)
    pending = utils.get_properties_relative("image")

    assert isinstance(pending, PendingProperties)
    assert not inspect.isawaitable(pending)
    assert not pending.deferred.started


def test_register_helpers_configures_logging_from_config(
    context: RenderContext, tmp_path: Path
) -> None:
    log_file = tmp_path / "logs" / "render.log"
    config = PagePropsConfig(
        root=tmp_path, logging=LoggingConfig(verbose=True, log_file=log_file)
    )
    register_helpers(Environment(), context, config=config)

    logger = logging.getLogger("pageprops")
    assert logger.level == logging.DEBUG
    context.logger.debug("rendering %s", context.resource.path)
    for handler in logger.handlers:
        handler.flush()
    assert "rendering /content/site/home" in log_file.read_text(encoding="utf-8")


def test_register_helpers_applies_config(context: RenderContext) -> None:
    env = Environment()
    config = PagePropsConfig(
        root=Path("."),
        links=LinkConfig(
            extension=".htm", externalize=True, publish_origin="https://www.example.com"
        ),
        random_id_length=6,
    )
    utils = register_helpers(env, context, config=config, name="page")

    assert isinstance(utils, PropertyUtils)
    assert context.services is not None
    rendered = env.from_string(
        "{{ page.get_property_link('cta') }} {{ page.get_random_id() | length }}"
    ).render()
    assert rendered == "https://www.example.com/content/site/about.htm 6"


def test_property_utils_multi_field_and_style() -> None:
    repository = MemoryRepository(
        {"/content/site/teasers": {"items": [json.dumps({"title": "First"})]}}
    )
    context = repository.context_for(
        "/content/site/teasers",
        style={"layout": "grid,compact"},
        multifield=JsonMultiFieldBridge(),
    )
    utils = PropertyUtils(context)

    assert utils.get_property_multi_field_array("items", Teaser) == [Teaser(title="First")]
    assert utils.get_style_property("layout") == "grid,compact"
    assert utils.get_style_property_array("layout") == ["grid", "compact"]
    assert utils.add_html_extension("/content/site/teasers") == "/content/site/teasers.html"
    assert utils.publish_link("/content/site/teasers") == "/content/site/teasers"
    assert len(utils.get_random_id()) == 10
