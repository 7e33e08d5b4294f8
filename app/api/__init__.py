"""API routes."""

from fastapi import APIRouter

from app.api import expenses, health, users

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(expenses.router, prefix="/expenses", tags=["expenses"])
