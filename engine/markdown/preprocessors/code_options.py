"""
Preprocessor that captures fence header options.

Converts:
    ```js [app.js]:line-numbers=10 {2,4-5}    → ```js

and records, per fence, a ``FenceDescriptor`` in
``context["code_block_options"]`` for the code block postprocessor. Pandoc
only ever sees the bare language.
"""

import logging

from ..pipeline import Processor
from ..support.fences import FenceDescriptor, parse_highlights, rewrite_fences
from ..support.regions import RegionTracker

logger = logging.getLogger(__name__)


class CodeOptionsPreprocessor(Processor):
    priority = 5

    def preprocess(self, text, context):
        descriptors = context.setdefault("code_block_options", [])
        regions = RegionTracker.for_markdown(text)

        def replace(fence):
            descriptors.append(
                FenceDescriptor(
                    lang=fence.lang,
                    title=fence.title.strip() if fence.title else None,
                    option=fence.option,
                    highlight_lines=parse_highlights(fence.highlights),
                    body=fence.body,
                )
            )
            return f"{fence.header(fence.lang)}\n{fence.body}{fence.closing(text)}"

        text = rewrite_fences(text, replace, skip=regions.covers)
        logger.debug("Captured options for %d code blocks", len(descriptors))
        return text
