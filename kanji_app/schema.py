"""
Schema management for the ``kanji`` table.

``create`` is the default: create the table when it is missing and leave
existing rows alone. ``reset`` drops and recreates it, discarding every row.
``migrate`` runs the Alembic revisions under ``kanji_app/migrations``.
"""
import logging

from alembic import command
from alembic.config import Config
from sqlalchemy import inspect

from .db import TABLE_NAME, Base, Database, KanjiCharacter
from .errors import ConfigError

logger = logging.getLogger(__name__)

MIGRATIONS_LOCATION = "kanji_app:migrations"


def is_schema_initialized(database: Database) -> bool:
    """Check whether the kanji table exists."""
    return TABLE_NAME in inspect(database.engine).get_table_names()


def ensure_schema(database: Database) -> None:
    Base.metadata.create_all(bind=database.engine)
    logger.info('✅ Table "%s" checked/created', TABLE_NAME)


def reset_schema(database: Database) -> None:
    KanjiCharacter.__table__.drop(bind=database.engine, checkfirst=True)
    Base.metadata.create_all(bind=database.engine)
    logger.warning('⚠️ Table "%s" dropped and recreated; previous rows discarded', TABLE_NAME)


def alembic_config(database: Database) -> Config:
    cfg = Config()
    cfg.set_main_option("script_location", MIGRATIONS_LOCATION)
    cfg.set_main_option("sqlalchemy.url", database.url.replace("%", "%%"))
    return cfg


def upgrade_schema(database: Database, revision: str = "head") -> None:
    cfg = alembic_config(database)
    with database.engine.begin() as connection:
        cfg.attributes["connection"] = connection
        command.upgrade(cfg, revision)
    logger.info("✅ Migrations applied up to %s", revision)


def apply_schema(database: Database, strategy: str = "create") -> None:
    if strategy == "create":
        ensure_schema(database)
    elif strategy == "reset":
        reset_schema(database)
    elif strategy == "migrate":
        upgrade_schema(database)
    else:
        raise ConfigError(f"unknown schema strategy: {strategy!r}")
