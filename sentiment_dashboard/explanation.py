from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal

from sentiment_dashboard.lexicon import DEFAULT_LEXICON, Lexicon
from sentiment_dashboard.sentiment_types import AnalysisResult, SentimentLabel, to_percent

IndicatorType = Literal["positive", "negative", "emotional"]

_ALL_CAPS_RE = re.compile(r"[A-Z]{2,}")


@dataclass(frozen=True)
class Indicator:
    type: IndicatorType
    description: str
    impact: str


@dataclass(frozen=True)
class Explanation:
    primary_label: SentimentLabel
    primary_percent: int
    indicators: tuple[Indicator, ...]

    def summary(self) -> str:
        return (
            f"This text was classified as {self.primary_label.lower()} "
            f"with {self.primary_percent}% confidence."
        )


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}{'s' if count > 1 else ''}"


def find_indicators(text: str, lexicon: Lexicon = DEFAULT_LEXICON) -> list[Indicator]:
    """
    Features that moved the score, by presence (not count).

    All-caps runs are looked up in the original casing.
    """
    lowered = text.lower()
    found_positive = [w for w in lexicon.positive_words if w in lowered]
    found_negative = [w for w in lexicon.negative_words if w in lowered]
    found_strong = [p for p in lexicon.strong_negative_phrases if p in lowered]
    exclamations = text.count("!")
    all_caps = len(_ALL_CAPS_RE.findall(text))

    out: list[Indicator] = []
    if found_positive:
        out.append(
            Indicator(
                type="positive",
                description=f"Contains positive words: {', '.join(found_positive)}",
                impact="Increases positive sentiment",
            )
        )
    if found_negative:
        out.append(
            Indicator(
                type="negative",
                description=f"Contains negative words: {', '.join(found_negative)}",
                impact="Increases negative sentiment",
            )
        )
    if found_strong:
        out.append(
            Indicator(
                type="negative",
                description=f"Contains strong negative phrases: {', '.join(found_strong)}",
                impact="Strongly increases negative sentiment",
            )
        )
    if exclamations > 0:
        out.append(
            Indicator(
                type="emotional",
                description=f"{_plural(exclamations, 'exclamation mark')} detected",
                impact="Indicates emotional intensity",
            )
        )
    if all_caps > 0:
        out.append(
            Indicator(
                type="emotional",
                description=f"{_plural(all_caps, 'all-caps word')} detected",
                impact="Indicates strong emphasis or emotion",
            )
        )
    return out


def explain(result: AnalysisResult, lexicon: Lexicon = DEFAULT_LEXICON) -> Explanation:
    return Explanation(
        primary_label=result.primary.label,
        primary_percent=to_percent(result.primary.score),
        indicators=tuple(find_indicators(result.text, lexicon)),
    )
