# engine/markdown/postprocessors/abbreviations.py

import re

from ..pipeline import Processor
from .utils import NON_PROSE_TAGS, get_shared_soup, replace_text_matches, soup_to_html


def term_pattern(terms):
    """Whole-word alternation, longest term first."""
    alternatives = "|".join(re.escape(term) for term in sorted(terms, key=len, reverse=True))
    return re.compile(rf"(?<!\w)(?:{alternatives})(?!\w)")


class AbbreviationPostprocessor(Processor):
    """Wrap the terms collected by ``AbbreviationPreprocessor`` in ``<abbr>``."""

    priority = 20

    def postprocess(self, html, context):
        abbreviations = context.get("abbreviations")
        if not abbreviations:
            return html

        soup = get_shared_soup(html, context)

        def abbr_tag(match):
            tag = soup.new_tag("abbr", attrs={"class": "folio-abbr", "title": abbreviations[match.group(0)]})
            tag.string = match.group(0)
            return tag

        if not replace_text_matches(soup, term_pattern(abbreviations), abbr_tag, NON_PROSE_TAGS | {"abbr"}):
            return html
        return soup_to_html(context, soup)
