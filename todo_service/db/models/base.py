"""
SQLAlchemy declarative base: every model inherits from Base
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base shared by all models and the Alembic metadata"""
