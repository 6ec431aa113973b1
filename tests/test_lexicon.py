from __future__ import annotations

import json

import pytest

from sentiment_dashboard.lexicon import DEFAULT_LEXICON, Lexicon, load_lexicon


def test_default_tables_sizes():
    assert len(DEFAULT_LEXICON.positive_words) == 15
    assert len(DEFAULT_LEXICON.negative_words) == 15
    assert len(DEFAULT_LEXICON.neutral_words) == 8
    assert len(DEFAULT_LEXICON.strong_negative_phrases) == 4
    assert len(DEFAULT_LEXICON.stop_words) == 12
    assert DEFAULT_LEXICON.neutral_floor == 0.1
    assert DEFAULT_LEXICON.strong_phrase_weight == 3.0


def test_from_mapping_overrides_subset():
    lexicon = Lexicon.from_mapping({"neutral_words": ["Meh"], "neutral_floor": 0.2})
    assert lexicon.neutral_words == ("meh",)
    assert lexicon.neutral_floor == 0.2
    assert lexicon.positive_words == DEFAULT_LEXICON.positive_words


def test_from_mapping_rejects_unknown_keys():
    with pytest.raises(ValueError, match="Unknown lexicon keys: emoji_words"):
        Lexicon.from_mapping({"emoji_words": [":)"]})


def test_load_lexicon_from_json(tmp_path):
    path = tmp_path / "lexicon.json"
    path.write_text(json.dumps({"strong_negative_phrases": ["do not buy"]}), encoding="utf-8")

    lexicon = load_lexicon(path)
    assert lexicon.strong_negative_phrases == ("do not buy",)


def test_load_lexicon_requires_object(tmp_path):
    path = tmp_path / "lexicon.json"
    path.write_text("[]", encoding="utf-8")

    with pytest.raises(ValueError):
        load_lexicon(path)


@pytest.mark.parametrize(
    "data",
    [
        {"positive_words": "good"},
        {"strong_negative_phrases": ["never again", 3]},
        {"stop_words": {"that": 1}},
    ],
)
def test_from_mapping_rejects_non_list_tables(data):
    with pytest.raises(ValueError, match="must be a list of strings"):
        Lexicon.from_mapping(data)


@pytest.mark.parametrize(
    "data",
    [
        {"neutral_floor": "0.1"},
        {"strong_phrase_weight": True},
        {"max_keywords": None},
        {"max_keywords": 2.5},
    ],
)
def test_from_mapping_rejects_non_numeric_weights(data):
    with pytest.raises(ValueError, match="must be a"):
        Lexicon.from_mapping(data)


def test_from_mapping_coerces_whole_numbers():
    lexicon = Lexicon.from_mapping({"max_keywords": 3.0, "exclamation_weight": 1})
    assert lexicon.max_keywords == 3
    assert isinstance(lexicon.max_keywords, int)
    assert lexicon.exclamation_weight == 1.0


def test_load_lexicon_rejects_string_table(tmp_path):
    path = tmp_path / "lexicon.json"
    path.write_text(json.dumps({"positive_words": "good"}), encoding="utf-8")

    with pytest.raises(ValueError):
        load_lexicon(path)
