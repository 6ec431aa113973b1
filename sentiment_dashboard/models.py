from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class TextDocument:
    """Text handed to the scorer, typed in or loaded from a file."""

    text: str
    source_name: Optional[str] = None
