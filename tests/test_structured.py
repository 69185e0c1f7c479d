"""Tests for dataset loading and record normalization."""
import json

import pytest

from kanji_app.errors import DatasetError
from kanji_app.structured import ExampleSentence, KanjiEntry, WordEntry, load_dataset, parse_entry


def write_json(tmp_path, payload, name="kanji_data.json"):
    path = tmp_path / name
    path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
    return path


# ── Loading ───────────────────────────────────────────────────────

def test_load_keeps_file_order(tmp_path) -> None:
    path = write_json(tmp_path, [{"kanji": "日"}, {"kanji": "月"}, {"kanji": "火"}])
    entries = load_dataset(path)
    assert [e.kanji for e in entries] == ["日", "月", "火"]


def test_load_full_record(tmp_path) -> None:
    path = write_json(tmp_path, [{
        "kanji": "日",
        "level": "N5",
        "korean_meaning": "날 일",
        "onyomi": ["ニチ", "ジツ"],
        "kunyomi": ["ひ", "か"],
        "strokes": 4,
        "radical": "日",
        "words": [{"word": "日本", "reading": "にほん", "meaning": "일본"}],
        "example_sentences": [{"sentence": "日が昇る。", "reading": "ひがのぼる。", "translation": "해가 뜬다."}],
    }])
    entry = load_dataset(path)[0]
    assert entry.level == "N5"
    assert entry.onyomi == ["ニチ", "ジツ"]
    assert entry.strokes == 4
    assert entry.words == [WordEntry(word="日本", reading="にほん", meaning="일본")]
    assert entry.example_sentences[0] == ExampleSentence("日が昇る。", "ひがのぼる。", "해가 뜬다.")


def test_missing_file_raises(tmp_path) -> None:
    with pytest.raises(DatasetError, match="not found"):
        load_dataset(tmp_path / "missing.json")


def test_invalid_json_raises(tmp_path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("[{\"kanji\": ", encoding="utf-8")
    with pytest.raises(DatasetError, match="not valid JSON"):
        load_dataset(path)


def test_root_must_be_array(tmp_path) -> None:
    path = write_json(tmp_path, {"kanji": "日"})
    with pytest.raises(DatasetError, match="array"):
        load_dataset(path)


# ── Defaults and coercion ─────────────────────────────────────────

def test_optional_fields_default() -> None:
    entry = parse_entry({"kanji": "日"})
    assert entry == KanjiEntry(kanji="日")
    assert entry.onyomi == []
    assert entry.kunyomi == []
    assert entry.strokes is None
    assert entry.level is None
    assert entry.words == []


def test_non_list_readings_become_empty() -> None:
    entry = parse_entry({"kanji": "日", "onyomi": "ニチ", "kunyomi": None})
    assert entry.onyomi == []
    assert entry.kunyomi == []


def test_non_numeric_strokes_become_none() -> None:
    assert parse_entry({"kanji": "日", "strokes": "4"}).strokes is None
    assert parse_entry({"kanji": "日", "strokes": True}).strokes is None
    assert parse_entry({"kanji": "日", "strokes": 4.0}).strokes == 4


def test_empty_level_becomes_none() -> None:
    assert parse_entry({"kanji": "日", "level": ""}).level is None


def test_legacy_field_names() -> None:
    entry = parse_entry({
        "kanji": "月",
        "meanings": ["moon", "month"],
        "stroke_count": 4,
        "jlpt_level": "N5",
    })
    assert entry.korean_meaning == "moon, month"
    assert entry.strokes == 4
    assert entry.level == "N5"


def test_current_field_names_win_over_legacy() -> None:
    entry = parse_entry({"kanji": "月", "korean_meaning": "달 월", "meanings": ["moon"], "strokes": 4, "stroke_count": 9})
    assert entry.korean_meaning == "달 월"
    assert entry.strokes == 4


# ── Validation ────────────────────────────────────────────────────

def test_missing_kanji_names_the_record(tmp_path) -> None:
    path = write_json(tmp_path, [{"kanji": "日"}, {"korean_meaning": "no glyph"}])
    with pytest.raises(DatasetError, match="record 1"):
        load_dataset(path)


def test_record_must_be_object() -> None:
    with pytest.raises(DatasetError):
        parse_entry(["日"], 3)


def test_word_without_word_field_is_rejected() -> None:
    with pytest.raises(DatasetError, match=r"words\[0\]"):
        parse_entry({"kanji": "日", "words": [{"reading": "にほん"}]})


def test_example_sentences_must_be_a_list() -> None:
    with pytest.raises(DatasetError, match="example_sentences"):
        parse_entry({"kanji": "日", "example_sentences": {"sentence": "日が昇る。"}})


def test_to_dict_is_plain_data() -> None:
    entry = parse_entry({"kanji": "日", "words": [{"word": "日本"}]})
    assert entry.to_dict()["words"] == [{"word": "日本", "reading": None, "meaning": None}]
