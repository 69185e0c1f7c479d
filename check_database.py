#!/usr/bin/env python3
"""
Script to examine the contents of the kanji table
to see what was actually seeded.
"""

from kanji_app import queries
from kanji_app.config import Settings, load_env_file
from kanji_app.client import group_by_level
from kanji_app.db import Database
from kanji_app.schema import is_schema_initialized


def check_database_contents(database: Database) -> None:
    """Print a per-level summary and the most recent rows."""
    print("🔍 Examining Kanji Database Contents")
    print("=" * 60)

    if not is_schema_initialized(database):
        print('❌ Table "kanji" does not exist yet. Start the server or run import_kanji.py first.')
        return

    records = queries.list_kanji(database)
    print(f"\n🈷️  KANJI ({len(records)} items):")
    for level, members in group_by_level(records).items():
        print(f"  {level:10s} {len(members):4d}  {''.join(r['kanji'] for r in members[:20])}")

    print(f"\n🕒 MOST RECENTLY ADDED:")
    for record in records[-5:]:
        meaning = record['korean_meaning'] or 'N/A'
        print(f"  {record['id']:4d}. {record['kanji']} | Strokes: {record['strokes'] or 'N/A'} | Meaning: {meaning}")


if __name__ == "__main__":
    load_env_file()
    database = Database(Settings.from_env().database_url)
    try:
        check_database_contents(database)
    except Exception as e:
        print(f"❌ Error examining database: {e}")
    finally:
        database.dispose()
