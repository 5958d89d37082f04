from datetime import datetime
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pydantic import BaseModel, Field

from helloworld.core.permissions import UserContext


class AuditLog(BaseModel):
    actor_user_id: str  # USR_XXXXXX
    role: str  # teacher, student
    action: str  # delete_class, delete_quiz, delete_content, delete_message
    target_type: str  # class, quiz, content, message
    target_id: str
    metadata: dict = {}
    timestamp: datetime = Field(default_factory=datetime.utcnow)


async def log_audit(
    db: AsyncIOMotorDatabase,
    actor: UserContext,
    action: str,
    target_type: str,
    target_id: str,
    metadata: Optional[dict] = None
):
    """
    Log destructive actions for auditability

    Args:
        actor: UserContext of the caller
        action: Action performed (e.g., 'delete_class')
        target_type: Resource type (e.g., 'class', 'quiz')
        target_id: ID of the resource
        metadata: Additional context (optional)
    """
    audit_log = AuditLog(
        actor_user_id=actor.user_id,
        role=actor.role,
        action=action,
        target_type=target_type,
        target_id=target_id,
        metadata=metadata or {},
    )

    await db.audit_logs.insert_one(audit_log.dict())


async def get_audit_trail(
    db: AsyncIOMotorDatabase,
    target_type: Optional[str] = None,
    target_id: Optional[str] = None,
    actor_user_id: Optional[str] = None,
    limit: int = 100
) -> list:
    """
    Retrieve audit logs with optional filters, newest first
    """
    query = {}

    if target_type:
        query["target_type"] = target_type

    if target_id:
        query["target_id"] = target_id

    if actor_user_id:
        query["actor_user_id"] = actor_user_id

    cursor = db.audit_logs.find(query).sort([("timestamp", -1), ("_id", -1)]).limit(limit)
    logs = await cursor.to_list(length=limit)

    for log in logs:
        log.pop("_id", None)

    return logs
