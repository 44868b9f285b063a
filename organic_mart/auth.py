"""
Password hashing, bearer tokens and the user/admin FastAPI dependencies.
"""
import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Dict, Optional

import jwt
from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from motor.motor_asyncio import AsyncIOMotorDatabase
from passlib.context import CryptContext

from .config.database import get_database
from .config.settings import get_settings
from .utils.serializers import utcnow

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")
security = HTTPBearer(auto_error=False)


@dataclass
class UserState:
    """Signed-in user profile plus the resolved admin flag."""
    user: Dict[str, Any]
    is_admin: bool = False

    @property
    def uid(self) -> str:
        return self.user["_id"]


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(uid: str, expires_delta: Optional[timedelta] = None) -> str:
    settings = get_settings()
    expire = utcnow() + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))
    return jwt.encode({"sub": uid, "exp": expire}, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> str:
    """Return the uid carried by ``token``."""
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token expired")
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=401, detail="Invalid token")

    uid = payload.get("sub")
    if not uid:
        raise HTTPException(status_code=401, detail="Invalid token payload")
    return uid


async def is_admin_user(db: AsyncIOMotorDatabase, uid: str) -> bool:
    """True only when ``admins/<uid>`` exists with ``is_admin`` set to True."""
    try:
        flag = await db.admins.find_one({"_id": uid})
    except Exception as e:
        logger.error("Error checking admin status for %s: %s", uid, e)
        return False
    return bool(flag) and flag.get("is_admin") is True


async def resolve_user_state(db: AsyncIOMotorDatabase, uid: str) -> Optional[UserState]:
    user = await db.users.find_one({"_id": uid})
    if not user:
        return None
    return UserState(user=user, is_admin=await is_admin_user(db, uid))


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> Optional[UserState]:
    """Signed-in user when a bearer token is sent, None for guests."""
    if credentials is None:
        return None
    uid = decode_access_token(credentials.credentials)
    state = await resolve_user_state(db, uid)
    if state is None:
        raise HTTPException(status_code=401, detail="User not found")
    return state


async def get_current_user(state: Optional[UserState] = Depends(get_optional_user)) -> UserState:
    if state is None:
        raise HTTPException(
            status_code=401,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return state


async def get_current_admin(state: UserState = Depends(get_current_user)) -> UserState:
    if not state.is_admin:
        raise HTTPException(status_code=403, detail="Admin access required")
    return state


def profile_payload(state: UserState) -> Dict[str, Any]:
    """Public profile fields (never the password hash)."""
    user = state.user
    return {
        "id": user["_id"],
        "display_name": user.get("display_name"),
        "email": user["email"],
        "photo_url": user.get("photo_url"),
        "is_admin": state.is_admin,
        "created_at": user.get("created_at"),
    }
