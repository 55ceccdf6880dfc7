"""
Preprocessor that turns ``:::tabs`` containers into a tab component.

    :::tabs
    == Ruby
    ```ruby
    puts 1
    ```
    == :terminal: Shell
    Run `make`.
    :::

Every section is rendered through the full pipeline, so tabs may hold code
groups, annotated code and even further tabs.
"""

import logging

from django.template.loader import render_to_string
from django.utils.safestring import mark_safe

from ..pipeline import Processor
from ..support.icons import IconMatch, render_icon_match
from ..support.regions import find_containers
from ..support.tabs import parse_tabs
from .utils import nested_renderer, raw_html_block, replace_regions

logger = logging.getLogger(__name__)

TEMPLATE_NAME = "engine/components/tabs.html"


def panel_icon(panel):
    return render_icon_match(IconMatch(label=panel.name, icon=panel.icon, source=panel.icon_source))


def render_tabs(panels, context):
    group_id = context.next_id("tabs")
    return render_to_string(
        TEMPLATE_NAME,
        {
            "group_id": group_id,
            "panels": [
                {
                    "name": panel.name,
                    "icon": panel_icon(panel),
                    "icon_source": panel.icon_source or "",
                    "html": mark_safe(panel.html),
                    "is_first": panel.is_first,
                    "tab_id": f"{group_id}-tab-{index}",
                    "panel_id": f"{group_id}-panel-{index}",
                }
                for index, panel in enumerate(panels)
            ],
        },
    ).strip()


class TabsPreprocessor(Processor):
    priority = 15

    def preprocess(self, text, context):
        if ":::" not in text:
            return text
        regions = find_containers(text, kinds=["tabs"])
        if not regions:
            return text

        render = nested_renderer(context)

        def replace(region):
            panels = parse_tabs(region.body(text), render)
            if not panels:
                logger.debug("Tabs container at offset %d has no sections", region.start)
                return ""
            return raw_html_block(render_tabs(panels, context))

        return replace_regions(text, regions, replace)
