"""Syntax highlighting of code block bodies via Pygments."""

from __future__ import annotations

import logging
from functools import lru_cache

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import TextLexer, get_lexer_by_name
from pygments.util import ClassNotFound

logger = logging.getLogger(__name__)

# Fence languages Pygments does not know under the same name
LANGUAGE_ALIASES = {
    "vue": "html",
    "svelte": "html",
    "shell": "bash",
    "sh": "bash",
    "zsh": "bash",
    "console": "shell-session",
    "env": "bash",
}


@lru_cache(maxsize=1)
def _formatter() -> HtmlFormatter:
    return HtmlFormatter(nowrap=True)


@lru_cache(maxsize=128)
def _lexer_name(language: str):
    name = LANGUAGE_ALIASES.get(language, language)
    try:
        get_lexer_by_name(name)
    except ClassNotFound:
        logger.debug("No Pygments lexer for %r, rendering as plain text", language)
        return None
    return name


def highlight_code(code: str, language: str | None) -> str:
    """
    Return ``code`` as highlighted HTML with no surrounding ``<pre>``.

    The output keeps exactly the newlines of the input so it can be split
    back into source lines.
    """
    name = _lexer_name((language or "").lower()) if language else None
    options = {"stripnl": False, "ensurenl": False}
    lexer = get_lexer_by_name(name, **options) if name else TextLexer(**options)
    return highlight(code, lexer, _formatter())
