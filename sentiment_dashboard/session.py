from __future__ import annotations

import logging
import time
from dataclasses import dataclass, replace
from typing import Optional, Protocol

from sentiment_dashboard.models import TextDocument
from sentiment_dashboard.sentiment_types import AnalysisResult

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 10


class Analyzer(Protocol):
    def analyze(self, text: str) -> AnalysisResult: ...


@dataclass(frozen=True)
class SessionState:
    """
    Everything the dashboard keeps between user actions.

    - results: newest first, bounded by the history limit
    - is_analyzing: pending flag; a second pass is refused while set
    """

    text: str = ""
    source_name: Optional[str] = None
    is_analyzing: bool = False
    current: Optional[AnalysisResult] = None
    results: tuple[AnalysisResult, ...] = ()


def reset() -> SessionState:
    """Start a new analysis: clears text, file name, current result and history."""
    return SessionState()


def set_text(state: SessionState, text: str) -> SessionState:
    return replace(state, text=text)


def load_document(state: SessionState, document: TextDocument) -> SessionState:
    return replace(state, text=document.text, source_name=document.source_name)


def can_analyze(state: SessionState) -> bool:
    return bool(state.text.strip()) and not state.is_analyzing


def start_analysis(state: SessionState) -> SessionState:
    return replace(state, is_analyzing=True)


def finish_analysis(
        state: SessionState,
        result: AnalysisResult,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
) -> SessionState:
    """
    Record a finished pass.

    Raises:
        ValueError: if history_limit < 1
    """
    if history_limit < 1:
        raise ValueError("history_limit must be >= 1")
    results = (result,) + state.results[: history_limit - 1]
    return replace(state, is_analyzing=False, current=result, results=results)


def analyze_text(
        state: SessionState,
        model: Analyzer,
        delay_sec: float = 0.0,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
) -> SessionState:
    """
    Run one scoring pass over state.text.

    Rules:
    - blank text or a pass already pending -> same state, nothing scored
    - delay_sec > 0 simulates latency between start and finish
    - does not mutate the input state
    """
    if not can_analyze(state):
        logger.info(
            "Analysis skipped: blank=%s pending=%s",
            not state.text.strip(),
            state.is_analyzing,
        )
        return state

    pending = start_analysis(state)
    if delay_sec > 0:
        time.sleep(delay_sec)
    result = model.analyze(pending.text)
    logger.info(
        "Analysis finished: label=%s confidence=%.3f keywords=%s",
        result.primary.label,
        result.confidence,
        len(result.keywords),
    )
    return finish_analysis(pending, result, history_limit=history_limit)
