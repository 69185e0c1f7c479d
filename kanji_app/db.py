from __future__ import annotations
from typing import Any, List, Optional

from sqlalchemy import JSON, Integer, String, Text, create_engine, func, select, text
from sqlalchemy.dialects import postgresql
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column, sessionmaker

TABLE_NAME = "kanji"

# Native arrays / JSONB on PostgreSQL, plain JSON columns on SQLite.
StringList = JSON().with_variant(postgresql.ARRAY(Text()), "postgresql")
Document = JSON().with_variant(postgresql.JSONB(), "postgresql")


class Base(DeclarativeBase):
    pass


class KanjiCharacter(Base):
    __tablename__ = TABLE_NAME
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    kanji: Mapped[str] = mapped_column(String(10), nullable=False, unique=True)
    level: Mapped[Optional[str]] = mapped_column(String(10))  # e.g. "N5"
    korean_meaning: Mapped[Optional[str]] = mapped_column(Text)
    onyomi: Mapped[Optional[List[str]]] = mapped_column(StringList)
    kunyomi: Mapped[Optional[List[str]]] = mapped_column(StringList)
    strokes: Mapped[Optional[int]] = mapped_column(Integer)
    radical: Mapped[Optional[str]] = mapped_column(String(10))
    words: Mapped[Optional[List[Any]]] = mapped_column(Document)  # [{word, reading, meaning}]
    example_sentences: Mapped[Optional[List[Any]]] = mapped_column(Document)  # [{sentence, reading, translation}]

    def __repr__(self) -> str:
        return f"<KanjiCharacter {self.id} {self.kanji}>"


# Every column the seeder may overwrite on conflict.
DATA_COLUMNS = (
    "level",
    "korean_meaning",
    "onyomi",
    "kunyomi",
    "strokes",
    "radical",
    "words",
    "example_sentences",
)


class Database:
    """Owns the engine (and its connection pool) plus the session factory."""

    def __init__(self, url: str, **engine_kwargs: Any) -> None:
        self.url = url
        self.engine: Engine = create_engine(url, **engine_kwargs)
        # Prevent attribute expiration on commit so returned objects remain accessible
        self.SessionLocal = sessionmaker(bind=self.engine, expire_on_commit=False)

    @property
    def dialect(self) -> str:
        return self.engine.dialect.name

    def get_session(self) -> Session:
        return self.SessionLocal()

    def ping(self) -> None:
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    def count(self) -> int:
        session = self.get_session()
        try:
            return session.scalar(select(func.count()).select_from(KanjiCharacter)) or 0
        finally:
            session.close()

    def dispose(self) -> None:
        self.engine.dispose()
