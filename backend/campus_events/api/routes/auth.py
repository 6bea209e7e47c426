"""
Authentication endpoints: signup, login and the current identity.
"""

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from campus_events.core.security import get_current_user
from campus_events.db.session import get_db
from campus_events.models.user import User
from campus_events.schemas.user import Token, UserCreate, UserLogin, UserResponse
from campus_events.schemas.validation import validated
from campus_events.services.auth_service import authenticate_user, register_user
from campus_events.services.authorization import Action, ensure_allowed

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(payload: Any = Body(None), db: AsyncSession = Depends(get_db)):
    """Register a new user account."""
    user = await register_user(db, validated(UserCreate, payload))
    return {"message": "User registered successfully", "user": UserResponse.model_validate(user)}


@router.post("/login", response_model=Token)
async def login(payload: Any = Body(None), db: AsyncSession = Depends(get_db)):
    """Authenticate and receive a JWT access token."""
    token = await authenticate_user(db, validated(UserLogin, payload))
    return Token(access_token=token)


@router.get("/me")
async def me(current_user: Optional[User] = Depends(get_current_user)):
    user = ensure_allowed(current_user, Action.VIEW_OWN)
    return {"user": UserResponse.model_validate(user)}
