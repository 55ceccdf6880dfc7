"""Sources for ``<<< @/path`` code snippet imports."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping, Optional

logger = logging.getLogger(__name__)


class SnippetError(Exception):
    """A snippet exists but cannot be read as text."""


class FileSystemSnippetLoader:
    """Reads snippet files relative to the documentation root."""

    def __init__(self, root):
        self.root = Path(root).resolve()

    def load(self, path: str) -> Optional[str]:
        """
        Return the text of ``path``, or ``None`` when there is no such file.

        Raises:
            SnippetError: The file cannot be read or is not UTF-8 text
        """
        candidate = (self.root / path).resolve()
        if not candidate.is_relative_to(self.root):
            logger.warning("Refusing to import snippet outside docs root: %s", path)
            return None
        if not candidate.is_file():
            return None
        try:
            return candidate.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise SnippetError("File is not valid UTF-8 text") from exc
        except OSError as exc:
            raise SnippetError(f"Could not read file ({exc.strerror or exc})") from exc


class MappingSnippetLoader:
    """Serves snippets from an in-memory mapping of path to content."""

    def __init__(self, files: Mapping[str, str]):
        self.files = dict(files)

    def load(self, path: str) -> Optional[str]:
        return self.files.get(path)
