from fastapi import APIRouter, Depends, HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase

from helloworld.classes import class_service as service
from helloworld.classes.class_schemas import ClassCreate, JoinClassRequest
from helloworld.core.database import get_db
from helloworld.core.errors import server_error
from helloworld.core.permissions import UserContext, get_current_teacher, get_current_student

router = APIRouter(prefix="/api/class", tags=["Classes"])

# ==================== TEACHER ====================

@router.post("/create", status_code=201)
async def create_class(
    data: ClassCreate,
    teacher: UserContext = Depends(get_current_teacher),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    try:
        new_class = await service.create_class(db, teacher, data.name)
        return {"status": "success", "message": "Class created", "class": new_class}
    except HTTPException:
        raise
    except Exception as e:
        raise server_error("Error creating class", e)


@router.get("/teacher/{teacher_id}")
async def get_teacher_classes(
    teacher_id: str,
    teacher: UserContext = Depends(get_current_teacher),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """
    Classes owned by a teacher (callers may only list their own)
    """
    if teacher_id != teacher.user_id:
        raise HTTPException(status_code=403, detail="Not authorized to view these classes")
    try:
        classes = await service.get_teacher_classes(db, teacher_id)
        return {"status": "success", "classes": classes, "count": len(classes)}
    except HTTPException:
        raise
    except Exception as e:
        raise server_error("Error fetching classes", e)


@router.delete("/{class_id}")
async def delete_class(
    class_id: str,
    teacher: UserContext = Depends(get_current_teacher),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    try:
        removed = await service.delete_class(db, class_id, teacher)
        return {"status": "success", "message": "Class deleted", "removed_members": removed}
    except HTTPException:
        raise
    except Exception as e:
        raise server_error("Error deleting class", e)

# ==================== STUDENT ====================

@router.post("/join")
async def join_class(
    data: JoinClassRequest,
    student: UserContext = Depends(get_current_student),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    try:
        result = await service.join_class(db, data.code, student)
        message = "Already a member of this class" if result["already_joined"] else "Joined class successfully"
        return {"status": "success", "message": message, **result}
    except HTTPException:
        raise
    except Exception as e:
        raise server_error("Error joining class", e)


@router.get("/student")
async def get_my_classes(
    student: UserContext = Depends(get_current_student),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    try:
        classes = await service.get_student_classes(db, student)
        return {"status": "success", "classes": classes, "count": len(classes)}
    except HTTPException:
        raise
    except Exception as e:
        raise server_error("Error fetching classes", e)
