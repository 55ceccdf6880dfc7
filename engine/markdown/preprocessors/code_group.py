"""
Preprocessor that turns ``:::code-group`` containers into a tabbed code
component.

Each labelled fence becomes one panel, rendered through the full pipeline so
its markers, highlights and line numbers work as in a standalone block. The
component is handed to Pandoc as a raw HTML block.
"""

import logging

from django.template.loader import render_to_string
from django.utils.safestring import mark_safe

from ..pipeline import Processor
from ..support.code_group import parse_code_group
from ..support.icons import IconMatch, render_icon, render_icon_match
from ..support.regions import find_containers
from .utils import nested_renderer, raw_html_block, replace_regions

logger = logging.getLogger(__name__)

TEMPLATE_NAME = "engine/components/code_group.html"


def render_code_group(panels, context):
    group_id = context.next_id("code-group")
    return render_to_string(
        TEMPLATE_NAME,
        {
            "group_id": group_id,
            "panels": [
                {
                    "label": panel.label,
                    "icon": render_icon_match(IconMatch(label=panel.label, icon=panel.icon, source=panel.icon_source)),
                    "lang": panel.lang or "",
                    "html": mark_safe(panel.html),
                    "code_text": panel.code_text,
                    "is_first": panel.is_first,
                    "tab_id": f"{group_id}-tab-{index}",
                    "panel_id": f"{group_id}-panel-{index}",
                }
                for index, panel in enumerate(panels)
            ],
            "first_code": panels[0].code_text,
            "copy_icon": render_icon("copy"),
        },
    ).strip()


class CodeGroupPreprocessor(Processor):
    priority = 12

    def preprocess(self, text, context):
        if ":::" not in text:
            return text
        regions = find_containers(text, kinds=["code-group"])
        if not regions:
            return text

        render = nested_renderer(context)

        def replace(region):
            panels = parse_code_group(region.body(text), render)
            if not panels:
                logger.debug("Empty code group at offset %d", region.start)
                return ""
            return raw_html_block(render_code_group(panels, context))

        return replace_regions(text, regions, replace)
