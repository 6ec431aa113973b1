from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Lexicon:
    """
    Word tables and weights the rule-based scorer is parameterized over.

    Matching is done on lower-cased text, so every entry must be lower case.
    """

    positive_words: tuple[str, ...]
    negative_words: tuple[str, ...]
    neutral_words: tuple[str, ...]
    strong_negative_phrases: tuple[str, ...]
    stop_words: tuple[str, ...]

    strong_phrase_weight: float = 3.0
    exclamation_weight: float = 0.5
    # Applied when no neutral word was seen but other signal exists.
    neutral_floor: float = 0.1

    min_keyword_length: int = 3  # tokens must be strictly longer
    max_keywords: int = 5

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], base: "Lexicon | None" = None) -> "Lexicon":
        """
        Override any subset of fields of `base` (defaults to DEFAULT_LEXICON).

        Raises:
            ValueError: on unknown keys, a table that is not a list of strings,
                or a weight/limit that is not a number
        """
        base = base or DEFAULT_LEXICON
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown lexicon keys: {', '.join(unknown)}")

        overrides: dict[str, Any] = {}
        for key, value in data.items():
            if key in _TABLE_FIELDS:
                overrides[key] = _table(key, value)
            elif key in _INT_FIELDS:
                overrides[key] = _number(key, value, int)
            else:
                overrides[key] = _number(key, value, float)
        return replace(base, **overrides)


_TABLE_FIELDS = frozenset(
    {"positive_words", "negative_words", "neutral_words", "strong_negative_phrases", "stop_words"}
)
_INT_FIELDS = frozenset({"min_keyword_length", "max_keywords"})


def _table(key: str, value: Any) -> tuple[str, ...]:
    if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"Lexicon key {key} must be a list of strings")
    return tuple(v.lower() for v in value)


def _number(key: str, value: Any, kind: type) -> Any:
    # bool is an int subclass; "true" is never a weight
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"Lexicon key {key} must be a number")
    if kind is int:
        if value != int(value):
            raise ValueError(f"Lexicon key {key} must be a whole number")
        return int(value)
    return float(value)


DEFAULT_LEXICON = Lexicon(
    positive_words=(
        "good", "great", "excellent", "amazing", "wonderful",
        "fantastic", "love", "like", "happy", "perfect",
        "best", "awesome", "brilliant", "outstanding", "superb",
    ),
    negative_words=(
        "bad", "terrible", "awful", "horrible", "hate",
        "worst", "disappointing", "poor", "sad", "angry",
        "disgusting", "pathetic", "useless", "annoying", "frustrated",
    ),
    neutral_words=(
        "okay", "fine", "average", "normal",
        "standard", "typical", "regular", "moderate",
    ),
    strong_negative_phrases=(
        "no one should",
        "never again",
        "waste of money",
        "completely disappointed",
    ),
    stop_words=(
        "that", "this", "with", "have", "will", "been",
        "they", "there", "their", "would", "could", "should",
    ),
)


def load_lexicon(path: str | Path) -> Lexicon:
    """
    Load lexicon overrides from a JSON object file.

    Raises:
        OSError: if the file cannot be read
        ValueError: on invalid JSON, a non-object document or unknown keys
    """
    path = Path(path)
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Lexicon file must contain a JSON object: {path}")
    lexicon = Lexicon.from_mapping(data)
    logger.info(
        "Loaded lexicon: path=%s positive=%s negative=%s neutral=%s phrases=%s",
        path,
        len(lexicon.positive_words),
        len(lexicon.negative_words),
        len(lexicon.neutral_words),
        len(lexicon.strong_negative_phrases),
    )
    return lexicon
