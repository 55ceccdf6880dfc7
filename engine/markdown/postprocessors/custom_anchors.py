# engine/markdown/postprocessors/custom_anchors.py

import re

from ..pipeline import Processor
from .utils import get_shared_soup, soup_to_html

CUSTOM_ID_PATTERN = re.compile(r"\s*\{#(?P<id>[\w-]+)\}\s*$")


class CustomAnchorPostprocessor(Processor):
    """
    Apply a trailing ``{#id}`` in heading text as the heading's id.

    Pandoc's ``header_attributes`` consumes the suffix on markdown headings.
    Headings it does not parse, such as raw HTML ``<h2>`` lines, still show
    it and are fixed up here before permalinks and the table of contents
    read the ids.
    """

    priority = 25

    def postprocess(self, html, context):
        if "{#" not in html:
            return html

        soup = get_shared_soup(html, context)
        changed = False
        for heading in soup.find_all(["h1", "h2", "h3", "h4", "h5", "h6"]):
            strings = heading.find_all(string=True)
            if not strings:
                continue
            last = strings[-1]
            match = CUSTOM_ID_PATTERN.search(str(last))
            if not match:
                continue
            last.replace_with(str(last)[:match.start()])
            heading["id"] = match.group("id")
            changed = True

        if not changed:
            return html
        return soup_to_html(context, soup)
