"""
Email/password sign-up and sign-in for customers and admins.
"""
import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from ..auth import (
    UserState,
    create_access_token,
    hash_password,
    profile_payload,
    resolve_user_state,
    verify_password,
)
from ..config.database import get_database
from ..models.user import UserProfileDocument
from ..schemas import AdminLoginRequest, LoginRequest, SignupRequest, TokenResponse
from ..utils.serializers import utcnow

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


def token_response(state: UserState) -> TokenResponse:
    return TokenResponse(access_token=create_access_token(state.uid), user=profile_payload(state))


async def authenticate(db: AsyncIOMotorDatabase, email: str, password: str) -> UserState:
    user = await db.users.find_one({"email": email.lower()})
    if not user or not verify_password(password, user["password_hash"]):
        raise HTTPException(status_code=401, detail="Invalid email or password")
    return await resolve_user_state(db, user["_id"])


@router.post("/signup", status_code=201, response_model=TokenResponse)
async def signup(body: SignupRequest, db: AsyncIOMotorDatabase = Depends(get_database)):
    """Create an account and its profile, then sign in"""
    email = body.email.lower()
    if await db.users.find_one({"email": email}):
        raise HTTPException(status_code=409, detail="An account with this email already exists")

    profile = UserProfileDocument(
        _id=uuid.uuid4().hex,
        display_name=body.display_name,
        email=email,
        password_hash=hash_password(body.password),
        created_at=utcnow(),
    )
    try:
        await db.users.insert_one(profile.to_document())
    except DuplicateKeyError:
        raise HTTPException(status_code=409, detail="An account with this email already exists")

    logger.info("User signed up: %s", profile.id)
    return token_response(await resolve_user_state(db, profile.id))


@router.post("/login", response_model=TokenResponse)
async def login(body: LoginRequest, db: AsyncIOMotorDatabase = Depends(get_database)):
    state = await authenticate(db, body.email, body.password)
    logger.info("User logged in: %s", state.uid)
    return token_response(state)


@router.post("/admin/login", response_model=TokenResponse)
async def admin_login(body: AdminLoginRequest, db: AsyncIOMotorDatabase = Depends(get_database)):
    """Sign in to the back-office; non-admin accounts are refused"""
    state = await authenticate(db, body.email, body.password)
    if not state.is_admin:
        logger.warning("Non-admin user %s attempted admin login", state.uid)
        raise HTTPException(status_code=403, detail="You do not have admin access")
    return token_response(state)
