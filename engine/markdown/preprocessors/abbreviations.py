"""
Preprocessor that collects abbreviation definitions.

    *[HTML]: Hyper Text Markup Language

Definition lines outside fenced code are removed from the document and
stored in ``context["abbreviations"]``; ``AbbreviationPostprocessor`` then
wraps every use of a term in the rendered text with ``<abbr>``.
"""

import re

from ..pipeline import Processor
from .utils import map_outside_fences

DEFINITION_PATTERN = re.compile(
    r"^[ \t]*\*\[(?P<term>[^\]\n]+)\]:[ \t]*(?P<definition>\S[^\n]*)\n?",
    re.MULTILINE,
)


class AbbreviationPreprocessor(Processor):
    priority = 2

    def preprocess(self, text, context):
        if "*[" not in text:
            return text

        abbreviations = {}

        def collect(match):
            abbreviations[match.group("term").strip()] = match.group("definition").strip()
            return ""

        text = map_outside_fences(text, lambda segment: DEFINITION_PATTERN.sub(collect, segment))
        if abbreviations:
            context["abbreviations"] = {**context.get("abbreviations", {}), **abbreviations}
        return text
