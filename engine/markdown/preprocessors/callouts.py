"""
Preprocessor for callout containers.

    :::warning Before you upgrade
    Back up the **database** first.
    :::

The kind is one of note, tip, important, warning or danger. Text after the
kind replaces the default title, and the body is rendered through the full
pipeline.
"""

import re

from ..pipeline import Processor
from ..support.callouts import render_callout
from ..support.regions import CALLOUT_KINDS, find_containers
from .utils import nested_renderer, raw_html_block, replace_regions

CALLOUT_HEADER_PATTERN = re.compile(r":::[ \t]*[\w-]+[ \t]*(?P<title>.*)")


def callout_title(header):
    match = CALLOUT_HEADER_PATTERN.match(header)
    return match.group("title").strip() if match else ""


class CalloutPreprocessor(Processor):
    priority = 10

    def preprocess(self, text, context):
        if ":::" not in text:
            return text
        regions = find_containers(text, kinds=CALLOUT_KINDS)
        if not regions:
            return text

        render = nested_renderer(context)

        def replace(region):
            body = region.body(text).strip()
            content = render(body) if body else ""
            title = callout_title(region.header(text)) or None
            return raw_html_block(render_callout(region.kind, content, title))

        return replace_regions(text, regions, replace)
