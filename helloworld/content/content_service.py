from datetime import datetime
from typing import List

from fastapi import HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase

from helloworld.content.content_schemas import ContentType
from helloworld.core.common_audit import log_audit
from helloworld.core.database import generate_id, serialize_mongo, serialize_many
from helloworld.core.permissions import UserContext, check_owner


async def create_content(db: AsyncIOMotorDatabase, teacher: UserContext, data: dict) -> dict:
    now = datetime.utcnow()
    content = {
        "content_id": generate_id("CNT"),
        "teacher_id": teacher.user_id,
        "title": data["title"],
        "type": ContentType(data["type"]).value,
        "content": data["content"],
        "created_at": now,
        "updated_at": now,
    }
    await db.teacher_content.insert_one(content)
    return serialize_mongo(content)


async def list_content(db: AsyncIOMotorDatabase, teacher_id: str = None) -> List[dict]:
    """Newest first; restricted to one teacher when `teacher_id` is given"""
    query = {"teacher_id": teacher_id} if teacher_id else {}
    cursor = db.teacher_content.find(query).sort([("created_at", -1), ("_id", -1)])
    return serialize_many(await cursor.to_list(length=None))


async def _get_owned_content(db: AsyncIOMotorDatabase, content_id: str, teacher: UserContext) -> dict:
    content = await db.teacher_content.find_one({"content_id": content_id})
    if not content:
        raise HTTPException(status_code=404, detail="Content not found")
    check_owner(content, "teacher_id", teacher, "content")
    return content


async def update_content(
    db: AsyncIOMotorDatabase,
    content_id: str,
    teacher: UserContext,
    updates: dict
) -> dict:
    await _get_owned_content(db, content_id, teacher)

    if "type" in updates:
        updates["type"] = ContentType(updates["type"]).value
    updates["updated_at"] = datetime.utcnow()
    await db.teacher_content.update_one({"content_id": content_id}, {"$set": updates})

    return serialize_mongo(await db.teacher_content.find_one({"content_id": content_id}))


async def delete_content(db: AsyncIOMotorDatabase, content_id: str, teacher: UserContext):
    content = await _get_owned_content(db, content_id, teacher)

    await db.teacher_content.delete_one({"content_id": content_id})
    await log_audit(db, teacher, "delete_content", "content", content_id, {"title": content.get("title")})
