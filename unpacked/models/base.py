# File: unpacked/models/base.py

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Tables are registered on ``Base.metadata`` as soon as the model module
    is imported; see ``unpacked.db.init_db``.
    """
    pass
