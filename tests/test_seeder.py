"""Tests for seeding the kanji table and startup initialization."""
import json
from typing import Any

import pytest
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from kanji_app import seeder
from kanji_app.config import Settings
from kanji_app.context import AppContext
from kanji_app.db import Database, KanjiCharacter
from kanji_app.errors import SeedError
from kanji_app.queries import get_kanji, list_kanji
from kanji_app.schema import ensure_schema, is_schema_initialized
from kanji_app.structured import parse_entry


@pytest.fixture
def database(tmp_path):
    """Fresh SQLite database with the kanji table."""
    database = Database(f"sqlite:///{tmp_path / 'test_seed.db'}")
    ensure_schema(database)
    yield database
    database.dispose()


@pytest.fixture
def dataset():
    return [
        parse_entry({"kanji": "日", "korean_meaning": "sun/day", "onyomi": ["ニチ"], "kunyomi": ["ひ"], "strokes": 4, "level": "N5"}),
        parse_entry({"kanji": "月", "korean_meaning": "moon/month", "onyomi": ["ゲツ", "ガツ"], "kunyomi": ["つき"], "strokes": 4, "level": "N5"}),
        parse_entry({"kanji": "語", "korean_meaning": "language", "strokes": 14, "level": "N4",
                     "words": [{"word": "日本語", "reading": "にほんご", "meaning": "Japanese"}]}),
    ]


# ── Seeding ───────────────────────────────────────────────────────

def test_seed_inserts_every_record(database, dataset) -> None:
    report = seeder.seed_database(database, dataset)
    assert report.ok
    assert report.total == 3
    assert report.processed == 3
    assert report.inserted == 3
    assert database.count() == 3


def test_seeded_record_matches_source(database, dataset) -> None:
    seeder.seed_database(database, dataset)
    record = get_kanji(database, "語")
    assert record is not None
    assert record["korean_meaning"] == "language"
    assert record["onyomi"] == []
    assert record["kunyomi"] == []
    assert record["strokes"] == 14
    assert record["level"] == "N4"
    assert record["radical"] is None
    assert record["words"] == [{"word": "日本語", "reading": "にほんご", "meaning": "Japanese"}]
    assert record["example_sentences"] == []


def test_list_follows_insertion_order(database, dataset) -> None:
    seeder.seed_database(database, dataset)
    records = list_kanji(database)
    assert [r["kanji"] for r in records] == ["日", "月", "語"]
    assert [r["id"] for r in records] == sorted(r["id"] for r in records)


def test_skip_policy_is_idempotent(database, dataset) -> None:
    seeder.seed_database(database, dataset, policy="skip")
    changed = [parse_entry({"kanji": "日", "korean_meaning": "changed"})] + dataset[1:]
    report = seeder.seed_database(database, changed, policy="skip")
    assert report.ok
    assert report.processed == 3
    assert report.inserted == 0
    assert database.count() == 3
    assert get_kanji(database, "日")["korean_meaning"] == "sun/day"


def test_overwrite_policy_updates_and_keeps_id(database, dataset) -> None:
    seeder.seed_database(database, dataset, policy="overwrite")
    original_id = get_kanji(database, "月")["id"]

    changed = [parse_entry({"kanji": "月", "korean_meaning": "달 월", "onyomi": ["ゲツ"], "strokes": 4})]
    seeder.seed_database(database, changed, policy="overwrite")

    record = get_kanji(database, "月")
    assert record["id"] == original_id
    assert record["korean_meaning"] == "달 월"
    assert record["onyomi"] == ["ゲツ"]
    assert record["kunyomi"] == []
    assert record["level"] is None
    assert database.count() == 3


def test_empty_dataset_skips(database) -> None:
    report = seeder.seed_database(database, [])
    assert report.skipped_reason == "no kanji data loaded"
    assert report.processed == 0


def test_row_count_gate_skips_when_table_is_full(database, dataset) -> None:
    seeder.seed_database(database, dataset)
    report = seeder.seed_database(database, dataset, gate="row-count")
    assert report.skipped_reason is not None
    assert report.processed == 0


def test_row_count_gate_seeds_when_rows_missing(database, dataset) -> None:
    seeder.seed_database(database, dataset[:1])
    report = seeder.seed_database(database, dataset, gate="row-count")
    assert report.skipped_reason is None
    assert report.inserted == 2


def test_failed_upsert_aborts_the_pass(database, dataset, monkeypatch) -> None:
    real_upsert = seeder.upsert_record

    def flaky_upsert(db: Any, entry: Any, policy: str = "overwrite") -> None:
        if entry.kanji == "月":
            raise OperationalError("INSERT INTO kanji", {}, Exception("connection lost"))
        real_upsert(db, entry, policy)

    monkeypatch.setattr(seeder, "upsert_record", flaky_upsert)
    report = seeder.seed_database(database, dataset)

    assert not report.ok
    assert "月" in report.error
    assert report.processed == 1
    assert [r["kanji"] for r in list_kanji(database)] == ["日"]


def test_unknown_policy_raises() -> None:
    with pytest.raises(SeedError):
        seeder.build_upsert("sqlite", {"kanji": "日"}, policy="merge")


def test_unsupported_dialect_raises() -> None:
    with pytest.raises(SeedError, match="mysql"):
        seeder.build_upsert("mysql", {"kanji": "日"})


def test_normalize_defaults() -> None:
    values = seeder.normalize(parse_entry({"kanji": "火"}))
    assert values == {
        "kanji": "火",
        "level": None,
        "korean_meaning": None,
        "onyomi": [],
        "kunyomi": [],
        "strokes": None,
        "radical": None,
        "words": [],
        "example_sentences": [],
    }


# ── Startup initialization ────────────────────────────────────────

def make_context(tmp_path, records, **overrides) -> AppContext:
    data_path = tmp_path / "kanji_data.json"
    if records is not None:
        data_path.write_text(json.dumps(records, ensure_ascii=False), encoding="utf-8")
    settings = Settings(
        database_url_override=f"sqlite:///{tmp_path / 'startup.db'}",
        data_path=data_path,
        **overrides,
    )
    return AppContext.from_settings(settings)


def test_initialize_creates_and_seeds(tmp_path) -> None:
    with make_context(tmp_path, [{"kanji": "日"}, {"kanji": "月"}]) as context:
        report = context.initialize()
        assert report is not None and report.ok
        assert context.database.count() == 2


def test_missing_dataset_still_creates_table(tmp_path) -> None:
    with make_context(tmp_path, None) as context:
        assert context.dataset == []
        report = context.initialize()
        assert report is not None
        assert report.skipped_reason == "no kanji data loaded"
        assert is_schema_initialized(context.database)
        assert context.database.count() == 0


def test_malformed_dataset_is_not_fatal(tmp_path) -> None:
    with make_context(tmp_path, [{"kanji": "日"}, {"meaning": "no glyph"}]) as context:
        assert context.dataset == []
        assert context.initialize() is not None


def test_unreachable_database_is_logged_not_raised(tmp_path) -> None:
    settings = Settings(
        database_url_override=f"sqlite:///{tmp_path / 'missing-dir' / 'kanji.db'}",
        data_path=tmp_path / "absent.json",
    )
    with AppContext.from_settings(settings) as context:
        assert context.initialize() is None


def test_unknown_migration_revision_is_logged_not_raised(tmp_path) -> None:
    stale = Database(f"sqlite:///{tmp_path / 'startup.db'}")
    with stale.engine.begin() as connection:
        connection.execute(text("CREATE TABLE alembic_version (version_num VARCHAR(32) NOT NULL)"))
        connection.execute(text("INSERT INTO alembic_version (version_num) VALUES ('deadbeef0000')"))
    stale.dispose()

    with make_context(tmp_path, [{"kanji": "日"}], schema_strategy="migrate") as context:
        assert context.initialize() is None


def test_seed_error_is_logged_not_raised(tmp_path, monkeypatch) -> None:
    def unsupported(dialect, values, policy):
        raise SeedError(f"upsert is not supported on {dialect!r}")

    monkeypatch.setattr(seeder, "build_upsert", unsupported)
    with make_context(tmp_path, [{"kanji": "日"}]) as context:
        assert context.initialize() is None
        assert is_schema_initialized(context.database)


def test_reset_strategy_discards_old_rows(tmp_path) -> None:
    with make_context(tmp_path, [{"kanji": "日"}, {"kanji": "月"}]) as context:
        context.initialize()

    with make_context(tmp_path, [{"kanji": "火"}], schema_strategy="reset") as context:
        context.initialize()
        assert [r["kanji"] for r in list_kanji(context.database)] == ["火"]


def test_create_strategy_keeps_existing_rows(tmp_path) -> None:
    with make_context(tmp_path, [{"kanji": "日"}]) as context:
        context.initialize()

    with make_context(tmp_path, [{"kanji": "月"}]) as context:
        context.initialize()
        session = context.database.get_session()
        rows = session.query(KanjiCharacter).order_by(KanjiCharacter.id).all()
        session.close()
        assert [r.kanji for r in rows] == ["日", "月"]
