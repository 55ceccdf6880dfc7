"""
Preprocessor for collapsible ``:::details`` containers.

    :::details{title="Advanced options" open}
    Hidden until the reader expands it.
    :::

``title`` defaults to "Details" and ``open`` starts the block expanded.
``:::details Advanced options`` is accepted as a shorter form of the title.
"""

import re

from django.template.loader import render_to_string
from django.utils.safestring import mark_safe

from ..pipeline import Processor
from ..support.icons import render_icon
from ..support.regions import find_containers
from .utils import nested_renderer, raw_html_block, replace_regions

TEMPLATE_NAME = "engine/components/accordion.html"

DEFAULT_TITLE = "Details"

DETAILS_HEADER_PATTERN = re.compile(
    r":::[ \t]*details[ \t]*(?:\{(?P<attributes>[^}]*)\})?[ \t]*(?P<title>.*)"
)
ATTRIBUTE_PATTERN = re.compile(r'(\w+)(?:="([^"]*)")?')


def parse_attributes(attributes):
    """``title="Setup" open`` -> ``{"title": "Setup", "open": True}``"""
    if not attributes:
        return {}
    return {
        match.group(1): match.group(2) if match.group(2) is not None else True
        for match in ATTRIBUTE_PATTERN.finditer(attributes)
    }


def parse_details_header(header):
    match = DETAILS_HEADER_PATTERN.match(header)
    if not match:
        return DEFAULT_TITLE, False
    attributes = parse_attributes(match.group("attributes"))
    title = attributes.get("title")
    if not isinstance(title, str) or not title.strip():
        title = match.group("title").strip() or DEFAULT_TITLE
    return title, "open" in attributes


def render_accordion(title, content_html, is_open):
    return render_to_string(
        TEMPLATE_NAME,
        {
            "title": title,
            "content": mark_safe(content_html),
            "open": is_open,
            "icon": render_icon("caret-right"),
        },
    ).strip()


class AccordionPreprocessor(Processor):
    priority = 10

    def preprocess(self, text, context):
        if ":::" not in text:
            return text
        regions = find_containers(text, kinds=["details"])
        if not regions:
            return text

        render = nested_renderer(context)

        def replace(region):
            title, is_open = parse_details_header(region.header(text))
            body = region.body(text).strip()
            content = render(body) if body else ""
            return raw_html_block(render_accordion(title, content, is_open))

        return replace_regions(text, regions, replace)
