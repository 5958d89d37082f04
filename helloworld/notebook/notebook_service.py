"""
Personal phrase notebook. Notes are private to the student who wrote them;
a note belonging to someone else is indistinguishable from a missing one.
"""

from datetime import datetime
from typing import List, Optional

from fastapi import HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase

from helloworld.core.database import generate_id, serialize_mongo, serialize_many


async def create_note(db: AsyncIOMotorDatabase, student_id: str, data: dict) -> dict:
    now = datetime.utcnow()
    note = {
        "note_id": generate_id("NTE"),
        "student_id": student_id,
        "phrase": data["phrase"],
        "translation": data.get("translation"),
        "note_type": data.get("note_type") or "AI Chat",
        "country": data.get("country"),
        "created_at": now,
        "updated_at": now,
    }
    await db.notebook.insert_one(note)
    return serialize_mongo(note)


async def list_notes(db: AsyncIOMotorDatabase, student_id: str, country: Optional[str] = None) -> List[dict]:
    query = {"student_id": student_id}
    if country:
        query["country"] = country

    cursor = db.notebook.find(query).sort([("created_at", -1), ("_id", -1)])
    return serialize_many(await cursor.to_list(length=None))


async def update_note(db: AsyncIOMotorDatabase, note_id: str, student_id: str, updates: dict) -> dict:
    updates["updated_at"] = datetime.utcnow()
    result = await db.notebook.update_one(
        {"note_id": note_id, "student_id": student_id},
        {"$set": updates}
    )
    if result.matched_count == 0:
        raise HTTPException(status_code=404, detail="Note not found")

    return serialize_mongo(await db.notebook.find_one({"note_id": note_id}))


async def delete_note(db: AsyncIOMotorDatabase, note_id: str, student_id: str):
    result = await db.notebook.delete_one({"note_id": note_id, "student_id": student_id})
    if result.deleted_count == 0:
        raise HTTPException(status_code=404, detail="Note not found")
