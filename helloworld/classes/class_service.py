import logging
import secrets
import string
from datetime import datetime
from typing import List

from fastapi import HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from helloworld.config import JOIN_CODE_LENGTH, JOIN_CODE_MAX_ATTEMPTS
from helloworld.core.common_audit import log_audit
from helloworld.core.database import generate_id, serialize_mongo
from helloworld.core.permissions import UserContext, verify_class_ownership

logger = logging.getLogger(__name__)

# URL-safe alphabet, same as nanoid's default
JOIN_CODE_ALPHABET = string.ascii_letters + string.digits + "_-"


def generate_join_code(length: int = JOIN_CODE_LENGTH) -> str:
    return "".join(secrets.choice(JOIN_CODE_ALPHABET) for _ in range(length))

# ==================== CLASS MANAGEMENT ====================

async def create_class(db: AsyncIOMotorDatabase, teacher: UserContext, name: str) -> dict:
    """
    Create a class with a fresh join code.
    The unique index on `code` catches collisions; retry with a new code.
    """
    for attempt in range(JOIN_CODE_MAX_ATTEMPTS):
        teacher_class = {
            "class_id": generate_id("CLS"),
            "name": name,
            "code": generate_join_code(),
            "teacher_id": teacher.user_id,
            "created_at": datetime.utcnow(),
        }
        try:
            await db.classes.insert_one(teacher_class)
        except DuplicateKeyError:
            logger.warning("Join code collision on attempt %d", attempt + 1)
            continue

        logger.info("Teacher %s created class %s", teacher.user_id, teacher_class["class_id"])
        teacher_class = serialize_mongo(teacher_class)
        teacher_class["student_count"] = 0
        return teacher_class

    raise HTTPException(status_code=500, detail="Could not generate a unique class code")


async def get_class_with_stats(db: AsyncIOMotorDatabase, teacher_class: dict) -> dict:
    teacher_class = serialize_mongo(teacher_class)
    teacher_class["student_count"] = await db.class_members.count_documents({
        "class_id": teacher_class["class_id"]
    })
    return teacher_class


async def get_teacher_classes(db: AsyncIOMotorDatabase, teacher_id: str) -> List[dict]:
    """Get all classes owned by teacher, newest first"""
    cursor = db.classes.find({"teacher_id": teacher_id}).sort([("created_at", -1), ("_id", -1)])
    classes = await cursor.to_list(length=None)

    return [await get_class_with_stats(db, cls) for cls in classes]


async def get_student_classes(db: AsyncIOMotorDatabase, student: UserContext) -> List[dict]:
    """Classes the student has joined, most recent join first"""
    cursor = db.class_members.find({"student_id": student.user_id}).sort([("joined_at", -1), ("_id", -1)])
    memberships = await cursor.to_list(length=None)

    results = []
    for membership in memberships:
        teacher_class = await db.classes.find_one({"class_id": membership["class_id"]})
        if not teacher_class:
            # Mapping left behind by an interrupted class delete
            continue
        teacher_class = serialize_mongo(teacher_class)
        teacher_class["joined_at"] = membership.get("joined_at")
        results.append(teacher_class)

    return results

# ==================== ENROLLMENT ====================

async def join_class(db: AsyncIOMotorDatabase, code: str, student: UserContext) -> dict:
    """
    Enroll a student by join code. Joining twice is a no-op.

    Raises:
        404: No class with this code
    """
    teacher_class = await db.classes.find_one({"code": code})

    if not teacher_class:
        raise HTTPException(status_code=404, detail="Invalid class code")

    result = await db.class_members.update_one(
        {"student_id": student.user_id, "class_id": teacher_class["class_id"]},
        {"$setOnInsert": {
            "student_id": student.user_id,
            "class_id": teacher_class["class_id"],
            "joined_at": datetime.utcnow(),
        }},
        upsert=True
    )

    return {
        "class": serialize_mongo(teacher_class),
        "already_joined": result.upserted_id is None,
    }


async def delete_class(db: AsyncIOMotorDatabase, class_id: str, teacher: UserContext) -> int:
    """
    Delete a class and then its enrollment rows.
    Two separate writes: a failure in between leaves orphaned mappings.

    Returns:
        int: Number of enrollment rows removed
    """
    await verify_class_ownership(db, class_id, teacher)

    await db.classes.delete_one({"class_id": class_id})
    result = await db.class_members.delete_many({"class_id": class_id})

    await log_audit(db, teacher, "delete_class", "class", class_id, {
        "removed_members": result.deleted_count
    })
    logger.info("Teacher %s deleted class %s", teacher.user_id, class_id)

    return result.deleted_count
