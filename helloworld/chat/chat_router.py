from fastapi import APIRouter, Depends, HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase

from helloworld.chat import chat_service as service
from helloworld.chat.chat_schemas import ChatSend, MarkRead
from helloworld.core.database import get_db
from helloworld.core.errors import server_error
from helloworld.core.permissions import UserContext, get_any_user, get_current_teacher

router = APIRouter(prefix="/api/chat", tags=["Chat"])


@router.post("", status_code=201)
async def send_message(
    data: ChatSend,
    user: UserContext = Depends(get_any_user),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """
    Teacher -> feedback, student -> question
    """
    try:
        chat = await service.send_message(db, user, data.dict())
        return {"status": "success", "message": "Message sent", "chat": chat}
    except HTTPException:
        raise
    except Exception as e:
        raise server_error("Failed to send message", e)


@router.get("/unread")
async def get_unread_counts(
    user: UserContext = Depends(get_any_user),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    try:
        counts = await service.unread_counts(db, user)
        return {
            "status": "success",
            "senders": counts,
            "unread_count": sum(c["unread"] for c in counts),
        }
    except HTTPException:
        raise
    except Exception as e:
        raise server_error("Error fetching unread messages", e)


@router.get("/{teacher_id}/{student_id}")
async def get_chat_messages(
    teacher_id: str,
    student_id: str,
    user: UserContext = Depends(get_any_user),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    try:
        messages = await service.get_thread(db, teacher_id, student_id, user)
        return {"status": "success", "messages": messages, "count": len(messages)}
    except HTTPException:
        raise
    except Exception as e:
        raise server_error("Error fetching chat messages", e)


@router.put("/read")
async def mark_messages_as_read(
    data: MarkRead,
    user: UserContext = Depends(get_any_user),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """
    Called when the user opens a conversation
    """
    try:
        modified = await service.mark_read(db, user, data.sender_id, data.message_ids)
        return {"status": "success", "message": "Messages marked as read", "modified_count": modified}
    except HTTPException:
        raise
    except Exception as e:
        raise server_error("Failed to mark messages as read", e)


@router.delete("/{message_id}")
async def delete_message(
    message_id: str,
    teacher: UserContext = Depends(get_current_teacher),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    try:
        await service.delete_message(db, message_id, teacher)
        return {"status": "success", "message": "Message deleted"}
    except HTTPException:
        raise
    except Exception as e:
        raise server_error("Error deleting message", e)
