"""Pydantic request/response schemas."""

from app.schemas.auth import AuthResponse, CurrentUser, LoginRequest, RegisterRequest
from app.schemas.expense import ExpenseCreate, ExpenseRead
from app.schemas.health import HealthResponse
from app.schemas.message import MessageResponse

__all__ = [
    "AuthResponse",
    "CurrentUser",
    "ExpenseCreate",
    "ExpenseRead",
    "HealthResponse",
    "LoginRequest",
    "MessageResponse",
    "RegisterRequest",
]
