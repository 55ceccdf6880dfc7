# engine/markdown/postprocessors/heading_anchors.py

from ..pipeline import Processor
from .utils import get_shared_soup, soup_to_html

ANCHOR_CLASS = "heading-anchor"


class HeadingAnchorPostprocessor(Processor):
    """
    Append a permalink anchor to every h2-h6 heading that has an id.

    Pandoc gives headings ids through ``auto_identifiers``. Headings that
    already carry an anchor (rendered inside a tab panel) are left alone.
    """

    priority = 30

    def postprocess(self, html, context):
        if "<h" not in html:
            return html

        soup = get_shared_soup(html, context)
        for heading in soup.find_all(["h2", "h3", "h4", "h5", "h6"]):
            identifier = heading.get("id")
            if not identifier or heading.find("a", class_=ANCHOR_CLASS):
                continue

            anchor = soup.new_tag(
                "a",
                href=f"#{identifier}",
                attrs={"class": ANCHOR_CLASS, "aria-label": "Link to this section"},
            )
            anchor.string = "#"
            heading.append(anchor)

        return soup_to_html(context, soup)
