"""
Kanji App

Seeds a kanji dataset into a relational table and serves it over a small
read-only JSON API, with a terminal browser on the client side.
"""

from . import config
from . import db
from . import structured
from . import seeder
from . import queries

__version__ = "0.1.0"
__all__ = ["config", "db", "structured", "seeder", "queries"]
