"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.expense import Expense
from app.models.user import User

__all__ = ["Base", "Expense", "User"]
