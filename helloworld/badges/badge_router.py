from fastapi import APIRouter, Depends, HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase

from helloworld.badges import badge_service as service
from helloworld.badges.badge_schemas import BadgeCreate, BadgeUpdate
from helloworld.core.database import get_db
from helloworld.core.errors import server_error
from helloworld.core.permissions import UserContext, get_current_teacher

router = APIRouter(prefix="/api/badges", tags=["Badges"])

# ==================== PUBLIC CATALOG ====================

@router.get("")
async def get_badges(db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        badges = await service.list_badges(db)
        return {"status": "success", "badges": badges, "count": len(badges)}
    except HTTPException:
        raise
    except Exception as e:
        raise server_error("Error fetching badges", e)


@router.get("/{badge_id}")
async def get_badge(badge_id: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        badge = await service.get_badge(db, badge_id)
        return {"status": "success", "badge": badge}
    except HTTPException:
        raise
    except Exception as e:
        raise server_error("Error fetching badge", e)

# ==================== CATALOG MANAGEMENT (TEACHER) ====================

@router.post("", status_code=201)
async def create_badge(
    data: BadgeCreate,
    teacher: UserContext = Depends(get_current_teacher),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    try:
        badge = await service.create_badge(db, data.dict())
        return {"status": "success", "message": "Badge created", "badge": badge}
    except HTTPException:
        raise
    except Exception as e:
        raise server_error("Failed to create badge", e)


@router.put("/{badge_id}")
async def update_badge(
    badge_id: str,
    data: BadgeUpdate,
    teacher: UserContext = Depends(get_current_teacher),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    try:
        badge = await service.update_badge(db, badge_id, data.dict(exclude_none=True))
        return {"status": "success", "message": "Badge updated", "badge": badge}
    except HTTPException:
        raise
    except Exception as e:
        raise server_error("Failed to update badge", e)


@router.delete("/{badge_id}")
async def delete_badge(
    badge_id: str,
    teacher: UserContext = Depends(get_current_teacher),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    try:
        await service.delete_badge(db, badge_id, teacher)
        return {"status": "success", "message": "Badge deleted"}
    except HTTPException:
        raise
    except Exception as e:
        raise server_error("Failed to delete badge", e)
