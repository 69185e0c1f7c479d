import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .errors import DatasetError


@dataclass
class WordEntry:
    word: str
    reading: Optional[str] = None
    meaning: Optional[str] = None


@dataclass
class ExampleSentence:
    sentence: str
    reading: Optional[str] = None
    translation: Optional[str] = None


@dataclass
class KanjiEntry:
    kanji: str
    level: Optional[str] = None
    korean_meaning: Optional[str] = None
    onyomi: List[str] = field(default_factory=list)
    kunyomi: List[str] = field(default_factory=list)
    strokes: Optional[int] = None
    radical: Optional[str] = None
    words: List[WordEntry] = field(default_factory=list)
    example_sentences: List[ExampleSentence] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _optional_str(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


def _str_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [str(v) for v in value if v is not None]


def _optional_int(value: Any) -> Optional[int]:
    # bool is an int subclass; a stray true/false is not a stroke count
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def _nested(raw: Any, required: str, index: int, label: str) -> List[Dict[str, Any]]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise DatasetError(f"record {index}: '{label}' must be a list")
    items = []
    for position, item in enumerate(raw):
        if not isinstance(item, dict):
            raise DatasetError(f"record {index}: {label}[{position}] must be an object")
        if not isinstance(item.get(required), str) or not item[required]:
            raise DatasetError(f"record {index}: {label}[{position}] is missing '{required}'")
        items.append(item)
    return items


def parse_entry(raw: Any, index: int = 0) -> KanjiEntry:
    """Build a ``KanjiEntry`` from one decoded JSON object.

    Missing optional fields get their defaults. Records from the older
    dataset layout (``meanings`` list, ``stroke_count``, ``jlpt_level``) are
    accepted too; when both spellings are present the current one wins.
    """
    if not isinstance(raw, dict):
        raise DatasetError(f"record {index}: expected an object, got {type(raw).__name__}")

    character = raw.get("kanji")
    if not isinstance(character, str) or not character.strip():
        raise DatasetError(f"record {index}: missing 'kanji'")

    meaning = raw.get("korean_meaning")
    if meaning is None and isinstance(raw.get("meanings"), list):
        meaning = ", ".join(str(m) for m in raw["meanings"] if m)

    strokes = raw.get("strokes")
    if strokes is None:
        strokes = raw.get("stroke_count")

    level = raw.get("level") or raw.get("jlpt_level")

    words = _nested(raw.get("words"), "word", index, "words")
    sentences = _nested(raw.get("example_sentences"), "sentence", index, "example_sentences")

    return KanjiEntry(
        kanji=character.strip(),
        level=_optional_str(level),
        korean_meaning=_optional_str(meaning),
        onyomi=_str_list(raw.get("onyomi")),
        kunyomi=_str_list(raw.get("kunyomi")),
        strokes=_optional_int(strokes),
        radical=_optional_str(raw.get("radical")),
        words=[
            WordEntry(
                word=w["word"],
                reading=_optional_str(w.get("reading")),
                meaning=_optional_str(w.get("meaning")),
            )
            for w in words
        ],
        example_sentences=[
            ExampleSentence(
                sentence=s["sentence"],
                reading=_optional_str(s.get("reading")),
                translation=_optional_str(s.get("translation")),
            )
            for s in sentences
        ],
    )


def load_dataset(path: Union[str, Path]) -> List[KanjiEntry]:
    """Read the kanji dataset (a JSON array of objects), keeping file order."""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            payload = json.load(f)
    except FileNotFoundError:
        raise DatasetError(f"dataset not found: {path}") from None
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DatasetError(f"dataset is not valid JSON: {path} ({e})") from e

    if not isinstance(payload, list):
        raise DatasetError(f"dataset root must be an array, got {type(payload).__name__}")

    return [parse_entry(item, index) for index, item in enumerate(payload)]
