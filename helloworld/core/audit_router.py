from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from motor.motor_asyncio import AsyncIOMotorDatabase

from helloworld.core.common_audit import get_audit_trail
from helloworld.core.database import get_db
from helloworld.core.errors import server_error
from helloworld.core.permissions import UserContext, get_current_teacher

router = APIRouter(prefix="/api/audit", tags=["Audit"])


@router.get("/logs")
async def audit_logs(
    target_type: Optional[str] = None,
    limit: int = Query(50, ge=1, le=100),
    teacher: UserContext = Depends(get_current_teacher),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """
    The caller's own destructive actions, newest first
    """
    try:
        logs = await get_audit_trail(db, target_type=target_type, actor_user_id=teacher.user_id, limit=limit)
        return {"status": "success", "logs": logs, "count": len(logs)}
    except HTTPException:
        raise
    except Exception as e:
        raise server_error("Error fetching audit logs", e)
