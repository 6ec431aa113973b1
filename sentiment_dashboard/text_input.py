from __future__ import annotations

import logging
import mimetypes
from pathlib import Path
from typing import Optional

from sentiment_dashboard.models import TextDocument

logger = logging.getLogger(__name__)


class InvalidFileTypeError(ValueError):
    """Raised when an uploaded file is not plain text."""


def is_text_file(name: str, mime_type: Optional[str] = None) -> bool:
    """
    Accept `text/*` MIME types or a `.txt` name.

    When mime_type is not given it is guessed from the file name.
    """
    if mime_type is None:
        mime_type, _ = mimetypes.guess_type(name)
    return (mime_type or "").startswith("text/") or name.endswith(".txt")


def load_text_file(path: str | Path, mime_type: Optional[str] = None) -> TextDocument:
    """
    Read a text file into a TextDocument.

    Raises:
        InvalidFileTypeError: file is neither text/* nor .txt (nothing is read)
        OSError: file cannot be read
    """
    path = Path(path)
    if not is_text_file(path.name, mime_type):
        logger.warning("Rejected upload: name=%s mime=%s", path.name, mime_type)
        raise InvalidFileTypeError("Please select a text file (.txt)")

    # undecodable bytes become U+FFFD instead of failing the whole upload
    text = path.read_text(encoding="utf-8", errors="replace")
    logger.info("Loaded text file: name=%s chars=%s", path.name, len(text))
    return TextDocument(text=text, source_name=path.name)
