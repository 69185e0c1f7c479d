"""
Seed the ``kanji`` table from the loaded dataset.

Every record becomes one ``INSERT .. ON CONFLICT (kanji)`` statement run in
its own transaction, in dataset order. With the ``skip`` policy an existing
character is left untouched. With ``overwrite`` its non-key columns are
replaced and its ``id`` is kept. The first failing statement stops the pass.
"""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError

from .db import DATA_COLUMNS, Database, KanjiCharacter
from .errors import SeedError
from .structured import KanjiEntry

logger = logging.getLogger(__name__)

_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


@dataclass
class SeedReport:
    total: int = 0
    processed: int = 0
    inserted: int = 0
    skipped_reason: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def normalize(entry: KanjiEntry) -> Dict[str, Any]:
    """Column values for one dataset record."""
    return {
        "kanji": entry.kanji,
        "level": entry.level,
        "korean_meaning": entry.korean_meaning,
        "onyomi": list(entry.onyomi or []),
        "kunyomi": list(entry.kunyomi or []),
        "strokes": entry.strokes,
        "radical": entry.radical,
        "words": [asdict(w) for w in entry.words],
        "example_sentences": [asdict(s) for s in entry.example_sentences],
    }


def build_upsert(dialect: str, values: Dict[str, Any], policy: str = "overwrite") -> Any:
    try:
        insert = _INSERTS[dialect]
    except KeyError:
        raise SeedError(f"upsert is not supported on {dialect!r}") from None

    stmt = insert(KanjiCharacter.__table__).values(**values)
    if policy == "skip":
        return stmt.on_conflict_do_nothing(index_elements=["kanji"])
    if policy == "overwrite":
        return stmt.on_conflict_do_update(
            index_elements=["kanji"],
            set_={column: stmt.excluded[column] for column in DATA_COLUMNS},
        )
    raise SeedError(f"unknown seed policy: {policy!r}")


def upsert_record(database: Database, entry: KanjiEntry, policy: str = "overwrite") -> None:
    stmt = build_upsert(database.dialect, normalize(entry), policy)
    with database.engine.begin() as conn:
        conn.execute(stmt)


def should_seed(database: Database, dataset: Sequence[KanjiEntry], gate: str = "always") -> Optional[str]:
    """Return why seeding should be skipped, or None to go ahead.

    The ``row-count`` gate only compares sizes, so records edited in the
    dataset without any new ones being added are not picked up.
    """
    if not dataset:
        return "no kanji data loaded"
    if gate == "always":
        return None
    if gate == "row-count":
        existing = database.count()
        if existing >= len(dataset):
            return f"table already holds {existing} rows for {len(dataset)} records"
        return None
    raise SeedError(f"unknown seed gate: {gate!r}")


def seed_database(
    database: Database,
    dataset: List[KanjiEntry],
    policy: str = "overwrite",
    gate: str = "always",
) -> SeedReport:
    report = SeedReport(total=len(dataset))

    reason = should_seed(database, dataset, gate)
    if reason:
        report.skipped_reason = reason
        logger.info("Skipping seeding: %s", reason)
        return report

    before = database.count()
    logger.info("Seeding %d kanji (policy=%s)...", len(dataset), policy)
    for entry in dataset:
        try:
            upsert_record(database, entry, policy)
        except SQLAlchemyError as e:
            report.error = f"failed to upsert {entry.kanji}: {e}"
            logger.error("❌ Seeding aborted at %s after %d records: %s", entry.kanji, report.processed, e)
            break
        report.processed += 1

    try:
        report.inserted = database.count() - before
    except SQLAlchemyError as e:
        logger.warning("⚠️ Could not count rows after seeding: %s", e)
    if report.ok:
        logger.info("✅ Seeding completed: %d processed, %d new", report.processed, report.inserted)
    return report
