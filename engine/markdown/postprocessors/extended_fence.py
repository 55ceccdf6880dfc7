# engine/markdown/postprocessors/extended_fence.py

from ..pipeline import Processor
from ..support.fences import BACKTICK_PLACEHOLDER, CODE_MARKER_PLACEHOLDER, restore_literal


class ExtendedFencePostprocessor(Processor):
    """Restore the backticks and code markers hidden by ``ExtendedFencePreprocessor``."""

    priority = 25

    def postprocess(self, html, context):
        if BACKTICK_PLACEHOLDER not in html and CODE_MARKER_PLACEHOLDER not in html:
            return html
        return restore_literal(html)
