from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Literal


SentimentLabel = Literal["POSITIVE", "NEGATIVE", "NEUTRAL"]

# Canonical label order; also the tie-break order when scores are equal.
LABELS: tuple[SentimentLabel, ...] = ("POSITIVE", "NEGATIVE", "NEUTRAL")


def to_percent(score: float) -> int:
    """0..1 score -> whole percent, halves rounded up (not banker's rounding)."""
    return int(math.floor(score * 100 + 0.5))


@dataclass(frozen=True)
class SentimentResult:
    """One label with its normalized probability (0..1)."""

    label: SentimentLabel
    score: float


@dataclass(frozen=True)
class AnalysisResult:
    """
    Standardized output of one scoring pass.

    - sentiment: all three labels, sorted by score descending (sum ~ 1)
    - confidence: score of the top label
    - keywords: up to 5 content words, in order of appearance
    - text: original input, untouched
    - timestamp: capture instant (UTC)
    """

    sentiment: tuple[SentimentResult, ...]
    confidence: float
    keywords: tuple[str, ...]
    text: str
    timestamp: datetime

    @property
    def primary(self) -> SentimentResult:
        return self.sentiment[0]

    def score_for(self, label: SentimentLabel) -> float:
        for item in self.sentiment:
            if item.label == label:
                return item.score
        return 0.0
