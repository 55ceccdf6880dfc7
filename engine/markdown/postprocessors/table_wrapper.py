# engine/markdown/postprocessors/table_wrapper.py
"""
Postprocessor that wraps tables for horizontal scrolling.

    <table>...</table>  →  <div class="table-wrapper"><table>...</table></div>

Tables that are already wrapped (for example inside a tab panel rendered by
a nested pass) are left alone.
"""

from ..pipeline import Processor
from .utils import get_shared_soup, soup_to_html

WRAPPER_CLASS = "table-wrapper"


def is_wrapped(table):
    parent = table.parent
    return parent is not None and parent.name == "div" and WRAPPER_CLASS in (parent.get("class") or [])


class TableWrapperPostprocessor(Processor):
    priority = 100

    def postprocess(self, html, context):
        if "<table" not in html:
            return html

        soup = get_shared_soup(html, context)
        for table in soup.find_all("table"):
            if is_wrapped(table):
                continue
            table.wrap(soup.new_tag("div", attrs={"class": WRAPPER_CLASS}))

        return soup_to_html(context, soup)
