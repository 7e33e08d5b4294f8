"""Request/response schemas for expenses."""

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field


class ExpenseCreate(BaseModel):
    """Body of POST /expenses. description is the only optional field."""

    amount: float = Field(..., description="Amount spent")
    category: str = Field(..., min_length=1, max_length=255, description="Category name")
    description: str | None = Field(default=None, description="Free-text note")
    date: dt.date = Field(..., description="Day the expense happened (YYYY-MM-DD)")


class ExpenseRead(BaseModel):
    """Stored expense as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    amount: float
    category: str
    description: str | None = None
    date: dt.date
    created_at: dt.datetime | None = None
