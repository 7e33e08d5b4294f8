"""Expense endpoints. Every route is scoped to the authenticated caller."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.auth import get_current_user
from app.core.database import get_db
from app.schemas.auth import CurrentUser
from app.schemas.expense import ExpenseCreate, ExpenseRead
from app.services.expenses import create_expense, filter_expenses, list_expenses

router = APIRouter()


@router.post("", response_model=ExpenseRead, status_code=status.HTTP_201_CREATED)
def post_expense(
    body: ExpenseCreate,
    db: Annotated[Session, Depends(get_db)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ExpenseRead:
    """Record an expense owned by the caller."""
    expense = create_expense(db, user.id, body)
    return ExpenseRead.model_validate(expense)


@router.get("", response_model=list[ExpenseRead])
def get_expenses(
    db: Annotated[Session, Depends(get_db)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> list[ExpenseRead]:
    """List the caller's expenses, most recent first."""
    return [ExpenseRead.model_validate(e) for e in list_expenses(db, user.id)]


@router.get("/filter", response_model=list[ExpenseRead])
def get_filtered_expenses(
    db: Annotated[Session, Depends(get_db)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
    category: Annotated[str | None, Query()] = None,
    start_date: Annotated[date | None, Query(alias="startDate")] = None,
    end_date: Annotated[date | None, Query(alias="endDate")] = None,
) -> list[ExpenseRead]:
    """
    Filter the caller's expenses by exact category and/or date range.

    The date range applies only when both startDate and endDate are given.
    """
    expenses = filter_expenses(
        db,
        user.id,
        category=category,
        start_date=start_date,
        end_date=end_date,
    )
    return [ExpenseRead.model_validate(e) for e in expenses]
