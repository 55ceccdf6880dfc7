# engine/markdown/postprocessors/alerts.py

import re

from bs4 import BeautifulSoup, NavigableString

from ..pipeline import Processor
from ..support.callouts import GITHUB_ALERT_KINDS, render_callout
from .utils import get_shared_soup, soup_to_html

ALERT_MARKER_PATTERN = re.compile(r"\s*\[!(?P<kind>NOTE|TIP|IMPORTANT|WARNING|CAUTION)\]\s*")


def strip_alert_marker(paragraph):
    """Remove a leading ``[!KIND]`` from ``paragraph``; return the kind or None."""
    first = paragraph.contents[0] if paragraph.contents else None
    if not isinstance(first, NavigableString):
        return None
    match = ALERT_MARKER_PATTERN.match(str(first))
    if not match:
        return None

    remainder = str(first)[match.end():]
    if remainder:
        first.replace_with(remainder)
    else:
        first.extract()
        lead = paragraph.contents[0] if paragraph.contents else None
        if getattr(lead, "name", None) == "br":
            lead.extract()
    return GITHUB_ALERT_KINDS[match.group("kind")]


class GitHubAlertPostprocessor(Processor):
    """
    Turn GitHub alert blockquotes into callouts.

        > [!WARNING]
        > Mind the gap.

    Runs before the code block postprocessor so code inside an alert is
    still rendered as a code block.
    """

    priority = 10

    def postprocess(self, html, context):
        if "[!" not in html or "<blockquote" not in html:
            return html

        soup = get_shared_soup(html, context)
        replaced = False
        for quote in soup.find_all("blockquote"):
            paragraph = quote.find(True, recursive=False)
            if paragraph is None or paragraph.name != "p":
                continue
            kind = strip_alert_marker(paragraph)
            if kind is None:
                continue

            if not paragraph.get_text(strip=True) and paragraph.find(True) is None:
                paragraph.decompose()
            content = "".join(str(child) for child in quote.contents).strip()
            callout = BeautifulSoup(render_callout(kind, content), "html.parser").find("div")
            quote.replace_with(callout)
            replaced = True

        if not replaced:
            return html
        return soup_to_html(context, soup)
