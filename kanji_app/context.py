"""
Application context: settings, database handle and the loaded dataset.

Built once at startup, handed to the Flask app factory and closed on
shutdown.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional

from alembic.util import CommandError
from sqlalchemy.exc import SQLAlchemyError

from .config import Settings
from .db import Database
from .errors import DatasetError, KanjiAppError
from .schema import apply_schema
from .seeder import SeedReport, seed_database
from .structured import KanjiEntry, load_dataset

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    settings: Settings
    database: Database
    dataset: List[KanjiEntry] = field(default_factory=list)

    @classmethod
    def from_settings(cls, settings: Settings, load_data: bool = True, **engine_kwargs: Any) -> "AppContext":
        database = Database(settings.database_url, **engine_kwargs)
        dataset: List[KanjiEntry] = []
        if load_data:
            try:
                dataset = load_dataset(settings.data_path)
                logger.info("✅ Loaded %d kanji from %s", len(dataset), settings.data_path)
            except DatasetError as e:
                # The server still starts; it just has nothing new to seed.
                logger.error("❌ Could not load kanji data: %s", e)
        return cls(settings=settings, database=database, dataset=dataset)

    def initialize(self) -> Optional[SeedReport]:
        """Check the connection, apply the schema strategy, then seed.

        Database, migration and seeding failures are logged and leave the
        server running in a degraded state; ``None`` is returned in that case.
        """
        try:
            self.database.ping()
            logger.info("Database connection verified. Initializing database...")
            apply_schema(self.database, self.settings.schema_strategy)
            return seed_database(
                self.database,
                self.dataset,
                policy=self.settings.seed_policy,
                gate=self.settings.seed_gate,
            )
        except (SQLAlchemyError, KanjiAppError, CommandError):
            logger.exception("❌ Failed to connect to database or initialize")
            return None

    def close(self) -> None:
        self.database.dispose()

    def __enter__(self) -> "AppContext":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()
