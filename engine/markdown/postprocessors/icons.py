# engine/markdown/postprocessors/icons.py
"""
Postprocessor that replaces ``:name:`` shortcodes with Phosphor icons.

    :rocket:          → <i class="ph ph-rocket" aria-hidden="true"></i>
    :heart:fill:      → <i class="ph-fill ph-heart" aria-hidden="true"></i>

Only text nodes are rewritten. Code, preformatted text, scripts and styles
are excluded, and attribute values are never text nodes.
"""

import re

from ..pipeline import Processor
from ..support.icons import icon_classes
from .utils import get_shared_soup, replace_text_matches, soup_to_html

ICON_PATTERN = re.compile(r":([a-z][a-z0-9-]*):(?:([a-z]+):)?", re.IGNORECASE)


class IconPostprocessor(Processor):
    priority = 20

    def postprocess(self, html, context):
        if ":" not in html:
            return html

        soup = get_shared_soup(html, context)

        def icon_tag(match):
            return soup.new_tag(
                "i",
                attrs={
                    "class": icon_classes(match.group(1), match.group(2) or "regular"),
                    "aria-hidden": "true",
                },
            )

        if not replace_text_matches(soup, ICON_PATTERN, icon_tag):
            return html
        return soup_to_html(context, soup)
