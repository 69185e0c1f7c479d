from typing import Any, Dict, List, Optional

from sqlalchemy import select

from .db import Database, KanjiCharacter


def split_meanings(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [m for m in value.split(", ") if m]


def to_api_dict(row: KanjiCharacter) -> Dict[str, Any]:
    """Shape a stored row for the JSON API."""
    return {
        "id": row.id,
        "kanji": row.kanji,
        "level": row.level,
        "korean_meaning": row.korean_meaning,
        "meanings": split_meanings(row.korean_meaning),
        "onyomi": list(row.onyomi or []),
        "kunyomi": list(row.kunyomi or []),
        "strokes": row.strokes,
        "radical": row.radical,
        "words": list(row.words or []),
        "example_sentences": list(row.example_sentences or []),
    }


def list_kanji(database: Database) -> List[Dict[str, Any]]:
    """All kanji in insertion order."""
    session = database.get_session()
    try:
        rows = session.scalars(select(KanjiCharacter).order_by(KanjiCharacter.id.asc())).all()
        return [to_api_dict(row) for row in rows]
    finally:
        session.close()


def get_kanji(database: Database, character: str) -> Optional[Dict[str, Any]]:
    session = database.get_session()
    try:
        row = session.scalars(select(KanjiCharacter).where(KanjiCharacter.kanji == character)).first()
        return to_api_dict(row) if row is not None else None
    finally:
        session.close()