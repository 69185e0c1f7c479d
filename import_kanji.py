#!/usr/bin/env python3
"""Seed the kanji table from a JSON dataset without starting the server.

Usage: python import_kanji.py [--json path] [--policy overwrite|skip] [--reset]
"""
import argparse
import os
import sys

from kanji_app.config import SEED_POLICIES, Settings, configure_logging, load_env_file
from kanji_app.context import AppContext
from kanji_app.errors import DatasetError
from kanji_app.schema import ensure_schema, reset_schema
from kanji_app.seeder import seed_database
from kanji_app.structured import load_dataset


def main() -> None:
    load_env_file()
    settings = Settings.from_env()

    parser = argparse.ArgumentParser(description="Import kanji JSON into the database")
    parser.add_argument("--json", default=str(settings.data_path))
    parser.add_argument("--policy", choices=SEED_POLICIES, default=settings.seed_policy,
                        help="What to do when a kanji already exists")
    parser.add_argument("--reset", action="store_true", help="Drop and recreate the table first")
    args = parser.parse_args()
    configure_logging(settings.debug)

    if not os.path.exists(args.json):
        print(f"❌ JSON not found: {args.json}"); sys.exit(1)

    try:
        dataset = load_dataset(args.json)
    except DatasetError as e:
        print(f"❌ {e}"); sys.exit(1)

    with AppContext.from_settings(settings, load_data=False) as context:
        if args.reset:
            reset_schema(context.database)
        else:
            ensure_schema(context.database)
        report = seed_database(context.database, dataset, policy=args.policy)

    if not report.ok:
        print(f"❌ {report.error}"); sys.exit(1)
    print(f"\n📊 Kanji: {report.processed}/{report.total} processed, {report.inserted} new")


if __name__ == "__main__":
    main()
