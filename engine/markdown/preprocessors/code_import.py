"""
Preprocessor that imports code snippets from files.

Converts:
    <<< @/snippets/app.py                   → ```py [app.py] + file content
    <<< @/snippets/app.py#setup             → only the "#region setup" part
    <<< @/snippets/app.py{2,4}              → highlights lines 2 and 4
    <<< @/snippets/app.py{3-8}              → lines 3 to 8 of the file
    <<< @/snippets/app.rb{ruby}             → explicit language

Files are read through the ``snippet_loader`` in the render context. A
missing file or region becomes a code block describing the problem.
"""

import logging
import os
import re

from ..pipeline import Processor
from ..support.fences import iter_fences
from ..support.snippets import SnippetError

logger = logging.getLogger(__name__)

EXTENSION_MAP = {
    "rb": "ruby",
    "js": "javascript",
    "ts": "typescript",
    "py": "python",
    "yml": "yaml",
    "md": "markdown",
    "sh": "bash",
    "zsh": "bash",
    "jsx": "jsx",
    "tsx": "tsx",
}

IMPORT_PATTERN = re.compile(
    r"^<<<[ \t]+@/(?P<path>[^\s{#]+)(?:#(?P<region>[\w-]+))?(?:[ \t]*\{(?P<options>[^}]+)\})?[ \t]*$",
    re.MULTILINE,
)

LINE_RANGE_PATTERN = re.compile(r"\d+-\d+")
HIGHLIGHT_SPEC_PATTERN = re.compile(r"[\d,-]+")


def extract_region(content, name):
    """Return the lines between ``#region name`` and its ``#endregion``."""
    start = re.compile(r"^[ \t]*(?://|#|/\*|<!--)\s*#region\s+%s\b" % re.escape(name))
    end = re.compile(r"^[ \t]*(?://|#|/\*|\*/|<!--)\s*#endregion\b")

    lines = content.splitlines(keepends=True)
    start_index = next((i for i, line in enumerate(lines) if start.match(line)), None)
    if start_index is None:
        return None
    for end_index in range(start_index + 1, len(lines)):
        if end.match(lines[end_index]):
            return "".join(lines[start_index + 1:end_index])
    return None


def parse_import_options(options):
    lang = highlights = None
    for part in (options or "").split():
        if HIGHLIGHT_SPEC_PATTERN.fullmatch(part):
            highlights = part
        else:
            lang = part
    return lang, highlights


def extract_line_range(content, spec):
    first, last = (int(value) for value in spec.split("-"))
    lines = content.splitlines(keepends=True)
    selected = lines[max(first - 1, 0):last]
    return "".join(selected) if selected else content


def detect_language(path):
    extension = os.path.splitext(path)[1].lstrip(".")
    return EXTENSION_MAP.get(extension, extension)


def import_error(path, message):
    logger.warning("Snippet import failed for %s: %s", path, message)
    return f"```text\nError importing {path}: {message}\n```"


class CodeImportPreprocessor(Processor):
    priority = 1

    def preprocess(self, text, context):
        if "<<<" not in text:
            return text

        loader = context.get("snippet_loader")
        fence_spans = [(fence.start, fence.end) for fence in iter_fences(text)]

        def replace(match):
            if any(start <= match.start() < end for start, end in fence_spans):
                return match.group(0)
            return self.build_code_block(match, loader)

        return IMPORT_PATTERN.sub(replace, text)

    def build_code_block(self, match, loader):
        path = match.group("path")
        region = match.group("region")

        try:
            content = loader.load(path) if loader is not None else None
        except SnippetError as exc:
            return import_error(path, str(exc))
        if content is None:
            return import_error(path, "File not found")

        if region:
            content = extract_region(content, region)
            if content is None:
                return import_error(path, f"Region '{region}' not found")

        lang, highlights = parse_import_options(match.group("options"))
        lang = lang or detect_language(path) or "text"

        if highlights and LINE_RANGE_PATTERN.fullmatch(highlights):
            content = extract_line_range(content, highlights)
            highlights = None

        meta = f" [{os.path.basename(path)}]"
        if highlights:
            meta += f" {{{highlights}}}"
        return f"```{lang}{meta}\n{content.rstrip(chr(10))}\n```"
