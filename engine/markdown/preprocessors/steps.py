"""
Preprocessor for ``:::steps`` containers: a numbered walkthrough where each
``### heading`` starts a step.

    :::steps
    ### Install
    pip install folio
    ### Configure
    Add `engine` to `INSTALLED_APPS`.
    :::
"""

import logging
import re

from django.template.loader import render_to_string
from django.utils.safestring import mark_safe

from ..pipeline import Processor
from ..support.regions import find_containers
from ..support.tabs import split_sections
from .utils import nested_renderer, raw_html_block, replace_regions

logger = logging.getLogger(__name__)

TEMPLATE_NAME = "engine/components/steps.html"

STEP_HEADING_PATTERN = re.compile(r"###[ \t]+(?P<name>[^\n]*?)[ \t]*")


def render_steps(sections, render):
    return render_to_string(
        TEMPLATE_NAME,
        {
            "steps": [
                {
                    "number": number,
                    "title": section.name,
                    "html": mark_safe(render(section.body) if section.body else ""),
                    "is_last": number == len(sections),
                }
                for number, section in enumerate(sections, start=1)
            ],
        },
    ).strip()


class StepsPreprocessor(Processor):
    priority = 10

    def preprocess(self, text, context):
        if ":::" not in text:
            return text
        regions = find_containers(text, kinds=["steps"])
        if not regions:
            return text

        render = nested_renderer(context)

        def replace(region):
            sections = split_sections(region.body(text), STEP_HEADING_PATTERN)
            if not sections:
                logger.debug("Steps container at offset %d has no ### steps", region.start)
                return ""
            return raw_html_block(render_steps(sections, render))

        return replace_regions(text, regions, replace)
