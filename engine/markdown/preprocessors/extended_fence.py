"""
Preprocessor for extended fences, which show fenced markdown literally.

    ````md
    ```js
    const a = 1 // [!code ++]
    ```
    ````

A fence of four or more backticks becomes a regular fence. Its backticks and
``[!code`` markers are swapped for placeholders so the fence processors and
Pandoc see one plain block; ``ExtendedFencePostprocessor`` puts them back
after the code block is rendered.
"""

from ..pipeline import Processor
from ..support.fences import iter_fences, protect_literal


class ExtendedFencePreprocessor(Processor):
    priority = 1

    def preprocess(self, text, context):
        if "````" not in text:
            return text

        parts = []
        last_end = 0
        for fence in iter_fences(text):
            if len(fence.fence) < 4:
                continue
            info = fence.info.strip() if fence.has_language else "text"
            closing = "```\n" if fence.closing(text).endswith("\n") else "```"
            parts.append(text[last_end:fence.start])
            parts.append(f"```{info}\n{protect_literal(fence.body)}{closing}")
            last_end = fence.end

        if not parts:
            return text
        parts.append(text[last_end:])
        return "".join(parts)
