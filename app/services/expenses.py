"""Expense store: owner-scoped create, list and filter."""

import logging
from datetime import date

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from app.core.exceptions import StoreError, ValidationError
from app.models import Expense
from app.schemas.expense import ExpenseCreate

logger = logging.getLogger(__name__)


def _owned_by(db: Session, owner_id: int) -> Query:
    return db.query(Expense).filter(Expense.user_id == owner_id)


def create_expense(db: Session, owner_id: int, data: ExpenseCreate) -> Expense:
    """
    Insert one expense for owner_id and return the stored row.

    Not idempotent: calling twice with the same data creates two rows.
    """
    if not data.category or not data.category.strip():
        raise ValidationError("Please provide amount, category and date")
    expense = Expense(
        user_id=owner_id,
        amount=data.amount,
        category=data.category,
        description=data.description,
        date=data.date,
    )
    try:
        db.add(expense)
        db.commit()
        db.refresh(expense)
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Failed to create expense", extra={"user_id": owner_id})
        raise StoreError("Server error", cause=e) from e

    logger.info(
        "Expense created",
        extra={"user_id": owner_id, "expense_id": expense.id, "category": expense.category},
    )
    return expense


def list_expenses(db: Session, owner_id: int) -> list[Expense]:
    """All expenses of owner_id, most recent date first."""
    try:
        return _owned_by(db, owner_id).order_by(Expense.date.desc()).all()
    except SQLAlchemyError as e:
        logger.exception("Failed to list expenses", extra={"user_id": owner_id})
        raise StoreError("Server error", cause=e) from e


def filter_expenses(
    db: Session,
    owner_id: int,
    category: str | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
) -> list[Expense]:
    """
    Expenses of owner_id narrowed by exact category and/or an inclusive date range.

    The date range is applied only when both start_date and end_date are given;
    a single bound is ignored. Results are ordered by date, most recent first.
    """
    query = _owned_by(db, owner_id)
    if category:
        query = query.filter(Expense.category == category)
    if start_date is not None and end_date is not None:
        query = query.filter(Expense.date >= start_date, Expense.date <= end_date)
    try:
        return query.order_by(Expense.date.desc()).all()
    except SQLAlchemyError as e:
        logger.exception("Failed to filter expenses", extra={"user_id": owner_id})
        raise StoreError("Server error", cause=e) from e
