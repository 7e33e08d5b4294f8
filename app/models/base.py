"""SQLAlchemy declarative Base shared by users and expenses."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass
