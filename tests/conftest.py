"""
Shared fixtures.

Pipeline tests run against ``fake_pandoc``, a tiny stand-in for Pandoc that
understands just enough markdown for the processors: fenced code (rendered
the way ``pandoc --no-highlight`` renders it), ``{=html}`` raw blocks,
ATX headings with ids, raw HTML lines and paragraphs.
"""

import html
import re

import pytest

from engine.markdown.config import SiteConfig
from engine.markdown.renderer import MarkdownRenderer
from engine.markdown.support.snippets import MappingSnippetLoader

FENCE_OPEN = re.compile(r"^(`{3,})(.*)$")
HEADING = re.compile(r"^(#{1,6})\s+(.*?)\s*$")


def slugify_heading(text):
    return re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")


def _is_closing(line, fence):
    stripped = line.strip()
    return stripped.startswith(fence) and set(stripped) == {"`"}


def fake_pandoc(text):
    lines = text.split("\n")
    out = []
    paragraph = []

    def flush():
        if paragraph:
            out.append("<p>" + " ".join(paragraph) + "</p>")
            paragraph.clear()

    index = 0
    while index < len(lines):
        line = lines[index]
        opener = FENCE_OPEN.match(line)
        if opener:
            flush()
            fence, info = opener.group(1), opener.group(2).strip()
            body = []
            index += 1
            while index < len(lines) and not _is_closing(lines[index], fence):
                body.append(lines[index])
                index += 1
            index += 1
            if info == "{=html}":
                out.append("\n".join(body))
            else:
                code = html.escape("\n".join(body), quote=False)
                lang = f' class="{info.split()[0]}"' if info else ""
                out.append(f"<pre{lang}><code>{code}</code></pre>")
            continue

        heading = HEADING.match(line)
        if heading:
            flush()
            level = len(heading.group(1))
            title = heading.group(2)
            out.append(f'<h{level} id="{slugify_heading(title)}">{title}</h{level}>')
        elif not line.strip():
            flush()
        elif line.lstrip().startswith("<"):
            flush()
            out.append(line)
        else:
            paragraph.append(line.strip())
        index += 1

    flush()
    return "\n".join(out)


SNIPPETS = {
    "snippets/app.py": (
        "import os\n"
        "\n"
        "# #region setup\n"
        "setup()\n"
        "# #endregion\n"
        "run()\n"
    ),
    "snippets/numbers.txt": "one\ntwo\nthree\nfour\n",
    "snippets/server.rb": "puts 'hi'\n",
}


@pytest.fixture
def site_config(tmp_path):
    return SiteConfig(
        title="Test Docs",
        variables={"version": "2.1", "pkg": {"name": "folio"}},
        docs_root=tmp_path,
    )


@pytest.fixture
def snippet_loader():
    return MappingSnippetLoader(SNIPPETS)


@pytest.fixture
def renderer(site_config, snippet_loader):
    return MarkdownRenderer(
        config=site_config,
        converter=fake_pandoc,
        snippet_loader=snippet_loader,
    )


@pytest.fixture
def context(renderer):
    """A fresh render context wired to the fake renderer."""
    return renderer.new_context()
