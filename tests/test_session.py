from __future__ import annotations

from datetime import datetime, timezone

import pytest

from sentiment_dashboard import session
from sentiment_dashboard.models import TextDocument
from sentiment_dashboard.sentiment_model import RuleBasedSentimentModel, SentimentModelConfig
from sentiment_dashboard.session import (
    SessionState,
    analyze_text,
    can_analyze,
    finish_analysis,
    load_document,
    reset,
    set_text,
    start_analysis,
)


def _model() -> RuleBasedSentimentModel:
    now = datetime(2026, 1, 28, 13, 28, 48, tzinfo=timezone.utc)
    return RuleBasedSentimentModel(SentimentModelConfig(clock=lambda: now))


def test_blank_text_is_a_noop():
    state = set_text(reset(), "   \n\t")
    assert not can_analyze(state)
    assert analyze_text(state, _model()) is state


def test_pending_analysis_refuses_second_pass():
    state = start_analysis(set_text(reset(), "great"))
    assert state.is_analyzing
    assert analyze_text(state, _model()) is state


def test_analyze_sets_current_and_prepends_history():
    model = _model()
    state = analyze_text(set_text(reset(), "great"), model)
    state = analyze_text(set_text(state, "awful"), model)

    assert not state.is_analyzing
    assert state.current is not None
    assert state.current.text == "awful"
    assert [r.text for r in state.results] == ["awful", "great"]


def test_history_keeps_ten_most_recent():
    model = _model()
    state = reset()
    for i in range(12):
        state = analyze_text(set_text(state, f"text number {i}"), model)

    assert len(state.results) == 10
    assert state.results[0].text == "text number 11"
    assert state.results[-1].text == "text number 2"


def test_custom_history_limit():
    model = _model()
    state = reset()
    for text in ("one", "two", "three"):
        state = analyze_text(set_text(state, text), model, history_limit=2)
    assert [r.text for r in state.results] == ["three", "two"]


def test_finish_analysis_rejects_bad_limit():
    result = _model().analyze("fine")
    with pytest.raises(ValueError):
        finish_analysis(SessionState(), result, history_limit=0)


def test_reducers_do_not_mutate_input():
    before = set_text(reset(), "good")
    after = analyze_text(before, _model())
    assert before.current is None
    assert before.results == ()
    assert after is not before


def test_load_document_and_reset():
    state = load_document(reset(), TextDocument(text="nice", source_name="review.txt"))
    assert state.text == "nice"
    assert state.source_name == "review.txt"

    state = analyze_text(state, _model())
    assert reset() == SessionState()
    assert state.current is not None


def test_simulated_delay_sleeps_between_start_and_finish(monkeypatch):
    slept: list[float] = []
    monkeypatch.setattr(session.time, "sleep", lambda sec: slept.append(sec))

    state = analyze_text(set_text(reset(), "great"), _model(), delay_sec=1.5)
    assert slept == [1.5]
    assert state.current is not None

    analyze_text(set_text(reset(), "great"), _model())
    assert slept == [1.5]
