import logging
from datetime import datetime
from typing import Optional

from fastapi import HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from helloworld.core.auth_utils import hash_password, verify_password, create_access_token
from helloworld.core.database import generate_id
from helloworld.progress.gamification import STARTING_PROGRESS

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"

# Checked against when the email is unknown so both failures cost one bcrypt round
DUMMY_PASSWORD_HASH = hash_password("helloworld-dummy-password")


def public_user(user: dict) -> dict:
    """User fields safe to return to clients"""
    return {
        "user_id": user["user_id"],
        "name": user.get("name"),
        "email": user.get("email"),
        "role": user.get("role"),
        "created_at": user.get("created_at"),
    }


def _auth_response(user: dict) -> dict:
    return {
        "token": create_access_token(user["user_id"], user["role"]),
        "user": public_user(user),
    }


async def register_user(db: AsyncIOMotorDatabase, data: dict, role: str) -> dict:
    """
    Create an account and issue its first token

    Raises:
        400: Email already registered
    """
    email = data["email"]
    if await db.users.find_one({"email": email}):
        raise HTTPException(status_code=400, detail="User already exists")

    user = {
        "user_id": generate_id("USR"),
        "name": data["name"],
        "email": email,
        "password_hash": hash_password(data["password"]),
        "role": role,
        **STARTING_PROGRESS,
        "countries_explored": [],
        "badges": [],
        "created_at": datetime.utcnow(),
    }

    try:
        await db.users.insert_one(user)
    except DuplicateKeyError:
        # Lost a race with a concurrent sign-up for the same email
        raise HTTPException(status_code=400, detail="User already exists")

    logger.info("Registered %s %s", role, user["user_id"])
    return _auth_response(user)


async def authenticate(
    db: AsyncIOMotorDatabase,
    email: str,
    password: str,
    required_role: Optional[str] = None
) -> dict:
    """
    Check credentials and issue a token

    Unknown email, wrong password and wrong account type all fail
    with the same 401 so accounts cannot be enumerated.
    """
    user = await db.users.find_one({"email": email})

    if not user:
        verify_password(password, DUMMY_PASSWORD_HASH)
        raise HTTPException(status_code=401, detail=INVALID_CREDENTIALS)

    if not verify_password(password, user.get("password_hash", "")):
        raise HTTPException(status_code=401, detail=INVALID_CREDENTIALS)

    if required_role and user.get("role") != required_role:
        raise HTTPException(status_code=401, detail=INVALID_CREDENTIALS)

    return _auth_response(user)

