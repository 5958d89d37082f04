from datetime import datetime
from typing import List, Optional

from fastapi import HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase

from helloworld.chat.chat_schemas import MessageType
from helloworld.core.common_audit import log_audit
from helloworld.core.database import generate_id, serialize_mongo, serialize_many
from helloworld.core.permissions import UserContext


async def send_message(db: AsyncIOMotorDatabase, sender: UserContext, data: dict) -> dict:
    """
    Direct message between a teacher and a student, stored unread

    Raises:
        404: Receiver not found
        400: Receiver has the same role as the sender
    """
    receiver = await db.users.find_one({"user_id": data["receiver_id"]})
    if not receiver:
        raise HTTPException(status_code=404, detail="Receiver not found")

    if receiver.get("role") == sender.role:
        raise HTTPException(status_code=400, detail="Messages go between a teacher and a student")

    message_type = data.get("type")
    if message_type is None:
        message_type = MessageType.FEEDBACK if sender.is_teacher else MessageType.QUESTION

    chat = {
        "message_id": generate_id("MSG"),
        "sender_id": sender.user_id,
        "receiver_id": receiver["user_id"],
        "message": data["message"],
        "type": MessageType(message_type).value,
        "is_read": False,
        "created_at": datetime.utcnow(),
    }
    await db.chat_messages.insert_one(chat)
    return serialize_mongo(chat)


async def get_thread(
    db: AsyncIOMotorDatabase,
    teacher_id: str,
    student_id: str,
    user: UserContext
) -> List[dict]:
    """Both directions of a teacher/student conversation, oldest first"""
    if user.user_id not in (teacher_id, student_id):
        raise HTTPException(status_code=403, detail="Not a participant of this conversation")

    cursor = db.chat_messages.find({
        "$or": [
            {"sender_id": teacher_id, "receiver_id": student_id},
            {"sender_id": student_id, "receiver_id": teacher_id},
        ]
    }).sort([("created_at", 1), ("_id", 1)])
    return serialize_many(await cursor.to_list(length=None))


async def mark_read(
    db: AsyncIOMotorDatabase,
    user: UserContext,
    sender_id: Optional[str] = None,
    message_ids: Optional[List[str]] = None
) -> int:
    """
    Flip unread messages addressed to the caller. Repeating it is harmless.

    Returns:
        int: Number of messages that changed
    """
    query = {"receiver_id": user.user_id, "is_read": False}
    if sender_id:
        query["sender_id"] = sender_id
    if message_ids:
        query["message_id"] = {"$in": message_ids}

    result = await db.chat_messages.update_many(query, {"$set": {"is_read": True}})
    return result.modified_count


async def unread_counts(db: AsyncIOMotorDatabase, user: UserContext) -> List[dict]:
    """Unread messages addressed to the caller, per sender"""
    rows = await db.chat_messages.aggregate([
        {"$match": {"receiver_id": user.user_id, "is_read": False}},
        {"$group": {"_id": "$sender_id", "unread": {"$sum": 1}}},
        {"$sort": {"_id": 1}},
    ]).to_list(length=None)

    return [{"sender_id": row["_id"], "unread": row["unread"]} for row in rows]


async def delete_message(db: AsyncIOMotorDatabase, message_id: str, teacher: UserContext):
    """
    Hard delete of a message in one of the teacher's own conversations

    Raises:
        404: Message not found
        403: Teacher is not a participant
    """
    chat = await db.chat_messages.find_one({"message_id": message_id})
    if not chat:
        raise HTTPException(status_code=404, detail="Message not found")

    if teacher.user_id not in (chat["sender_id"], chat["receiver_id"]):
        raise HTTPException(status_code=403, detail="Not a participant of this conversation")

    await db.chat_messages.delete_one({"message_id": message_id})
    await log_audit(db, teacher, "delete_message", "message", message_id)
