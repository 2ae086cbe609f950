"""
Database initialization helpers.

We only wire up the metadata here. Models are imported so their
tables get registered on Base.metadata.
"""

from sqlalchemy.engine import Engine

from unpacked.db.session import engine as default_engine
from unpacked.models.base import Base
from unpacked.models import outfit, user  # noqa: F401


def init_db(engine: Engine | None = None) -> None:
    """
    Create all tables based on SQLAlchemy models.
    """
    Base.metadata.create_all(bind=engine or default_engine)
