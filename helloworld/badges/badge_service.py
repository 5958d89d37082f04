from datetime import datetime
from typing import List

from fastapi import HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase

from helloworld.core.common_audit import log_audit
from helloworld.core.database import generate_id, serialize_mongo, serialize_many
from helloworld.core.permissions import UserContext


async def list_badges(db: AsyncIOMotorDatabase) -> List[dict]:
    cursor = db.badges.find({}).sort([("created_at", 1), ("_id", 1)])
    return serialize_many(await cursor.to_list(length=None))


async def get_badge(db: AsyncIOMotorDatabase, badge_id: str) -> dict:
    badge = await db.badges.find_one({"badge_id": badge_id})
    if not badge:
        raise HTTPException(status_code=404, detail="Badge not found")
    return serialize_mongo(badge)


async def create_badge(db: AsyncIOMotorDatabase, data: dict) -> dict:
    badge = {
        "badge_id": generate_id("BDG"),
        **data,
        "created_at": datetime.utcnow(),
    }
    await db.badges.insert_one(badge)
    return serialize_mongo(badge)


async def update_badge(db: AsyncIOMotorDatabase, badge_id: str, updates: dict) -> dict:
    if updates:
        result = await db.badges.update_one({"badge_id": badge_id}, {"$set": updates})
        if result.matched_count == 0:
            raise HTTPException(status_code=404, detail="Badge not found")
    return await get_badge(db, badge_id)


async def delete_badge(db: AsyncIOMotorDatabase, badge_id: str, teacher: UserContext):
    result = await db.badges.delete_one({"badge_id": badge_id})
    if result.deleted_count == 0:
        raise HTTPException(status_code=404, detail="Badge not found")
    await log_audit(db, teacher, "delete_badge", "badge", badge_id)
