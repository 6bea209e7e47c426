"""
Authentication service handling user signup and login.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from campus_events.core.errors import AuthFailure, DomainRejection, RejectionReason
from campus_events.core.logging import get_logger
from campus_events.core.security import create_access_token, hash_password, verify_password
from campus_events.models.user import User
from campus_events.schemas.user import UserCreate, UserLogin
from campus_events.stores import users as user_store
from campus_events.stores.base import StoreFailure

logger = get_logger(__name__)


async def register_user(db: AsyncSession, user_data: UserCreate) -> User:
    """
    Register a new user with hashed password.
    Rejects with email-taken (409) if the email already exists.
    """
    email = user_data.email.lower()
    if await user_store.get_user_by_email(db, email) is not None:
        logger.warning("signup_failed", reason="email_exists", email=email)
        raise DomainRejection(RejectionReason.EMAIL_TAKEN)

    user = await user_store.create_user(db, {
        "email": email,
        "full_name": user_data.full_name,
        "role": user_data.role.value,
        "hashed_password": hash_password(user_data.password),
    })
    if isinstance(user, StoreFailure):
        # Lost a race with a concurrent signup for the same email
        raise DomainRejection(RejectionReason.EMAIL_TAKEN)

    logger.info("user_registered", user_id=user.id, email=user.email, role=user.role)
    return user


async def authenticate_user(db: AsyncSession, login_data: UserLogin) -> str:
    """
    Authenticate user and return JWT access token.
    Raises 401 if credentials are invalid.
    """
    email = login_data.email.lower()
    user = await user_store.get_user_by_email(db, email)

    if not user or not verify_password(login_data.password, user.hashed_password):
        logger.warning("login_failed", email=email)
        raise AuthFailure(AuthFailure.UNAUTHENTICATED, "Invalid email or password")

    if not user.is_active:
        raise AuthFailure(AuthFailure.FORBIDDEN_ROLE, "Account is deactivated")

    token = create_access_token(data={"sub": str(user.id), "role": user.role})
    logger.info("user_logged_in", user_id=user.id)
    return token
