from __future__ import annotations

from sentiment_dashboard.explanation import explain, find_indicators
from sentiment_dashboard.sentiment_model import RuleBasedSentimentModel


def test_explain_positive_with_emphasis():
    result = RuleBasedSentimentModel().analyze("I LOVE this, great!!")
    explanation = explain(result)

    assert explanation.primary_label == "POSITIVE"
    # great + love = 2, two "!" add 1, neutral floor 0.1
    assert explanation.primary_percent == 97
    assert explanation.summary() == "This text was classified as positive with 97% confidence."

    described = [(i.type, i.description, i.impact) for i in explanation.indicators]
    assert described == [
        ("positive", "Contains positive words: great, love", "Increases positive sentiment"),
        ("emotional", "2 exclamation marks detected", "Indicates emotional intensity"),
        ("emotional", "1 all-caps word detected", "Indicates strong emphasis or emotion"),
    ]


def test_strong_phrases_listed_in_table_order():
    indicators = find_indicators("Waste of money. Never again.")
    assert [i.description for i in indicators] == [
        "Contains strong negative phrases: never again, waste of money",
    ]
    assert indicators[0].impact == "Strongly increases negative sentiment"


def test_single_exclamation_is_singular():
    indicators = find_indicators("Awful!")
    assert [i.description for i in indicators] == [
        "Contains negative words: awful",
        "1 exclamation mark detected",
    ]


def test_no_indicators_for_plain_text():
    assert find_indicators("The meeting starts at noon") == []
