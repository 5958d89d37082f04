from fastapi import APIRouter, Depends, HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase

from helloworld.content import content_service as service
from helloworld.content.content_schemas import ContentCreate, ContentUpdate
from helloworld.core.database import get_db
from helloworld.core.errors import server_error
from helloworld.core.permissions import UserContext, get_any_user, get_current_teacher

router = APIRouter(prefix="/api/tcontent", tags=["Teacher Content"])


@router.post("", status_code=201)
async def create_content(
    data: ContentCreate,
    teacher: UserContext = Depends(get_current_teacher),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    try:
        content = await service.create_content(db, teacher, data.dict())
        return {"status": "success", "message": "Content created", "content": content}
    except HTTPException:
        raise
    except Exception as e:
        raise server_error("Failed to create content", e)


@router.get("")
async def get_all_content(
    user: UserContext = Depends(get_any_user),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    try:
        items = await service.list_content(db)
        return {"status": "success", "content": items, "count": len(items)}
    except HTTPException:
        raise
    except Exception as e:
        raise server_error("Error fetching content", e)


@router.get("/teacher")
async def get_my_content(
    teacher: UserContext = Depends(get_current_teacher),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    try:
        items = await service.list_content(db, teacher.user_id)
        return {"status": "success", "content": items, "count": len(items)}
    except HTTPException:
        raise
    except Exception as e:
        raise server_error("Error fetching content", e)


@router.put("/{content_id}")
async def update_content(
    content_id: str,
    data: ContentUpdate,
    teacher: UserContext = Depends(get_current_teacher),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    try:
        content = await service.update_content(db, content_id, teacher, data.dict(exclude_none=True))
        return {"status": "success", "message": "Content updated", "content": content}
    except HTTPException:
        raise
    except Exception as e:
        raise server_error("Failed to update content", e)


@router.delete("/{content_id}")
async def delete_content(
    content_id: str,
    teacher: UserContext = Depends(get_current_teacher),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    try:
        await service.delete_content(db, content_id, teacher)
        return {"status": "success", "message": "Content deleted"}
    except HTTPException:
        raise
    except Exception as e:
        raise server_error("Failed to delete content", e)
