"""
Preprocessors that strip per-line markers from fenced code.

    foo()  // [!code ++]      → foo()    recorded as an added line
    bar()  // [!code --]      → bar()    recorded as a removed line
    baz()  # [!code focus]    → baz()    recorded as focused
    qux()  # [!code error]    → qux()    recorded as an error line
    quux() # [!code warning]  → quux()   recorded as a warning line

Each processor appends one line map per fence to its context list, in fence
order, even when the fence carries no marker of its kind; index ``i`` of every
list therefore describes the same fence. Fences inside tabs and code-group
containers are left to the nested render of their container.
"""

import dataclasses

from ..pipeline import Processor
from ..support.fences import rewrite_fences
from ..support.markers import DIFF, ERROR, FOCUS, WARNING, extract_marker_lines
from ..support.regions import RegionTracker


class LineMarkerPreprocessor(Processor):
    family = None
    context_key = None
    descriptor_field = None

    def collect(self, lines):
        return lines

    def preprocess(self, text, context):
        marker_maps = context.setdefault(self.context_key, [])
        descriptors = context.get("code_block_options")
        regions = RegionTracker.for_markdown(text)

        def replace(fence):
            result = extract_marker_lines(fence.body, self.family)
            index = len(marker_maps)
            marker_maps.append(self.collect(result.lines))
            if descriptors is not None and index < len(descriptors):
                descriptors[index] = dataclasses.replace(
                    descriptors[index],
                    body=result.content,
                    **{self.descriptor_field: marker_maps[index]},
                )
            if not result.lines:
                return None
            return f"{text[fence.start:fence.body_start]}{result.content}{fence.closing(text)}"

        return rewrite_fences(text, replace, skip=regions.covers)


class DiffMarkerPreprocessor(LineMarkerPreprocessor):
    priority = 6
    family = DIFF
    context_key = "code_block_diff_lines"
    descriptor_field = "diff_lines"


class FocusMarkerPreprocessor(LineMarkerPreprocessor):
    priority = 7
    family = FOCUS
    context_key = "code_block_focus_lines"
    descriptor_field = "focus_lines"

    def collect(self, lines):
        return frozenset(lines)


class ErrorMarkerPreprocessor(FocusMarkerPreprocessor):
    family = ERROR
    context_key = "code_block_error_lines"
    descriptor_field = "error_lines"


class WarningMarkerPreprocessor(FocusMarkerPreprocessor):
    family = WARNING
    context_key = "code_block_warning_lines"
    descriptor_field = "warning_lines"
