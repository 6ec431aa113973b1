from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Iterable, Sequence

import numpy as np

from sentiment_dashboard.lexicon import DEFAULT_LEXICON, Lexicon
from sentiment_dashboard.sentiment_types import LABELS, AnalysisResult, SentimentLabel, SentimentResult

logger = logging.getLogger(__name__)

# ASCII word class, same token boundaries as the browser dashboard.
_NON_WORD_RE = re.compile(r"\W+", re.ASCII)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class SentimentModelConfig:
    model_version: str = "rule-based-v1"
    lexicon: Lexicon = DEFAULT_LEXICON
    clock: Callable[[], datetime] = field(default=_utc_now, compare=False)


def count_occurrences(text: str, terms: Iterable[str]) -> int:
    """Total non-overlapping substring matches of every term in text."""
    return sum(text.count(term) for term in terms if term)


def raw_scores(text: str, lexicon: Lexicon = DEFAULT_LEXICON) -> dict[SentimentLabel, float]:
    """
    Unnormalized scores before the neutral default/floor is applied.

    Rules:
    - word counts per table (counts, not presence)
    - each strong phrase present adds strong_phrase_weight to NEGATIVE
    - exclamation marks boost whichever of POSITIVE/NEGATIVE is larger; tie -> no boost
    """
    lowered = text.lower()

    positive = float(count_occurrences(lowered, lexicon.positive_words))
    negative = float(count_occurrences(lowered, lexicon.negative_words))
    neutral = float(count_occurrences(lowered, lexicon.neutral_words))

    for phrase in lexicon.strong_negative_phrases:
        if phrase in lowered:
            negative += lexicon.strong_phrase_weight

    exclamations = lowered.count("!")
    if exclamations > 0:
        if negative > positive:
            negative += exclamations * lexicon.exclamation_weight
        elif positive > negative:
            positive += exclamations * lexicon.exclamation_weight

    return {"POSITIVE": positive, "NEGATIVE": negative, "NEUTRAL": neutral}


def score_text(text: str, lexicon: Lexicon = DEFAULT_LEXICON) -> dict[SentimentLabel, float]:
    """
    Normalized distribution over LABELS (values sum to 1).

    - no signal at all -> NEUTRAL = 1
    - NEUTRAL == 0 with other signal -> NEUTRAL = neutral_floor before normalizing
    """
    raw = raw_scores(text, lexicon)
    if not any(raw.values()):
        raw["NEUTRAL"] = 1.0
    if raw["NEUTRAL"] == 0.0:
        raw["NEUTRAL"] = lexicon.neutral_floor

    values = np.array([raw[label] for label in LABELS], dtype=float)
    probs = values / values.sum()
    return {label: float(p) for label, p in zip(LABELS, probs)}


def rank_scores(scores: dict[SentimentLabel, float]) -> tuple[SentimentResult, ...]:
    """Sort descending; stable sort keeps LABELS order for ties."""
    values = np.array([scores[label] for label in LABELS], dtype=float)
    order = np.argsort(-values, kind="stable")
    return tuple(SentimentResult(label=LABELS[i], score=float(values[i])) for i in order)


def extract_keywords(text: str, lexicon: Lexicon = DEFAULT_LEXICON) -> list[str]:
    """
    Content words for display.

    Rules:
    - split on non-word characters, lower-case
    - keep tokens longer than min_keyword_length, drop stop words
    - first max_keywords, in original order (duplicates kept)
    """
    stop_words = set(lexicon.stop_words)
    words = [w for w in _NON_WORD_RE.split(text.lower()) if len(w) > lexicon.min_keyword_length]
    return [w for w in words if w not in stop_words][: lexicon.max_keywords]


class RuleBasedSentimentModel:
    """
    Word-table sentiment scorer with the same surface as a learned model:
    - analyze(): single text -> AnalysisResult
    - predict(): batch, keeps ordering

    Pure apart from the clock used for timestamps. Blank text is not rejected
    here; it simply takes the zero-signal (NEUTRAL) path.
    """

    def __init__(self, cfg: SentimentModelConfig | None = None):
        self._cfg = cfg or SentimentModelConfig()
        logger.info(
            "Sentiment model ready: version=%s positive=%s negative=%s neutral=%s",
            self._cfg.model_version,
            len(self._cfg.lexicon.positive_words),
            len(self._cfg.lexicon.negative_words),
            len(self._cfg.lexicon.neutral_words),
        )

    @property
    def model_version(self) -> str:
        return self._cfg.model_version

    @property
    def lexicon(self) -> Lexicon:
        return self._cfg.lexicon

    def analyze(self, text: str) -> AnalysisResult:
        ranked = rank_scores(score_text(text, self._cfg.lexicon))
        result = AnalysisResult(
            sentiment=ranked,
            confidence=ranked[0].score,
            keywords=tuple(extract_keywords(text, self._cfg.lexicon)),
            text=text,
            timestamp=self._cfg.clock(),
        )
        logger.debug(
            "Scored text: chars=%s label=%s confidence=%.3f",
            len(text),
            result.primary.label,
            result.confidence,
        )
        return result

    def predict(self, texts: Sequence[str]) -> list[AnalysisResult]:
        return [self.analyze(t) for t in texts]
