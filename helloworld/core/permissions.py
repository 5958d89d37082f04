from typing import Callable

from fastapi import HTTPException, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from helloworld.core.auth_utils import verify_bearer_token
from helloworld.core.database import get_db

STUDENT = "student"
TEACHER = "teacher"


class UserContext:
    """
    Contains the validated token identity and the stored user profile
    """
    def __init__(self, user_id: str, profile: dict):
        self.user_id = user_id
        self.name = profile.get("name")
        self.email = profile.get("email")
        self.role = profile.get("role", STUDENT)
        self.profile = profile

    @property
    def is_teacher(self) -> bool:
        return self.role == TEACHER


async def get_current_user(
    token: dict = Depends(verify_bearer_token),
    db: AsyncIOMotorDatabase = Depends(get_db)
) -> UserContext:
    """
    Dependency: resolves the bearer token to a stored user

    Raises:
        401: Invalid token or the account no longer exists
    """
    user_id = token.get("sub")
    profile = await db.users.find_one({"user_id": user_id})

    if not profile:
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    # The token role is what the allow-lists check; it must agree with the account
    if profile.get("role") != token.get("role"):
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    return UserContext(user_id, profile)


def require_roles(*roles: str) -> Callable:
    """
    Dependency factory: allows only the given roles

    Raises:
        403: Role not in the allow-list
    """
    async def _checker(user: UserContext = Depends(get_current_user)) -> UserContext:
        if roles and user.role not in roles:
            raise HTTPException(status_code=403, detail="Access denied")
        return user

    return _checker


get_current_teacher = require_roles(TEACHER)
get_current_student = require_roles(STUDENT)
get_any_user = require_roles(STUDENT, TEACHER)


async def verify_class_ownership(
    db: AsyncIOMotorDatabase,
    class_id: str,
    teacher: UserContext
) -> dict:
    """
    Validates teacher owns this class

    Returns:
        dict: Class document

    Raises:
        404: Class not found
        403: Not the owner
    """
    teacher_class = await db.classes.find_one({"class_id": class_id})

    if not teacher_class:
        raise HTTPException(status_code=404, detail="Class not found")

    if teacher_class.get("teacher_id") != teacher.user_id:
        raise HTTPException(status_code=403, detail="Not authorized to access this class")

    return teacher_class


def check_owner(doc: dict, owner_field: str, user: UserContext, resource: str):
    """
    Raises 403 unless the caller owns the document
    """
    if doc.get(owner_field) != user.user_id:
        raise HTTPException(
            status_code=403,
            detail=f"Not authorized to modify this {resource}"
        )
