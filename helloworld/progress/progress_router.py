from fastapi import APIRouter, Depends, HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase

from helloworld.core.database import get_db
from helloworld.core.errors import server_error
from helloworld.core.permissions import (
    UserContext, get_current_student, get_current_teacher, verify_class_ownership
)
from helloworld.progress import progress_service as service
from helloworld.progress.progress_schemas import ProgressUpdate, CountryExplored, XPAward

student_router = APIRouter(prefix="/api/student", tags=["Student Progress"])
router = APIRouter(prefix="/api/progress", tags=["Progress"])

# ==================== OWN PROGRESS (STUDENT) ====================

@student_router.get("/progress")
async def get_my_progress(
    student: UserContext = Depends(get_current_student),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    try:
        progress = await service.get_progress(db, student.user_id)
        return {"status": "success", "progress": progress}
    except HTTPException:
        raise
    except Exception as e:
        raise server_error("Server error", e)


@student_router.put("/progress")
async def update_my_progress(
    data: ProgressUpdate,
    student: UserContext = Depends(get_current_student),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """
    Merge-patch the caller's own progress fields
    """
    try:
        progress = await service.update_progress(db, student.user_id, data.dict(exclude_none=True))
        return {"status": "success", "message": "Progress updated", "progress": progress}
    except HTTPException:
        raise
    except Exception as e:
        raise server_error("Server error", e)


@student_router.post("/progress/countries")
async def explore_country(
    data: CountryExplored,
    student: UserContext = Depends(get_current_student),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    try:
        progress = await service.add_explored_country(db, student.user_id, data.country)
        return {"status": "success", "message": "Country explored", "progress": progress}
    except HTTPException:
        raise
    except Exception as e:
        raise server_error("Server error", e)

# ==================== CLASS PROGRESS (TEACHER) ====================

@router.get("/class/{class_id}")
async def get_class_progress(
    class_id: str,
    teacher: UserContext = Depends(get_current_teacher),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """
    Leaderboard and progress of every student in one of the caller's classes
    """
    await verify_class_ownership(db, class_id, teacher)
    try:
        leaderboard = await service.get_class_progress(db, class_id)
        return {"status": "success", "class_id": class_id, "leaderboard": leaderboard}
    except HTTPException:
        raise
    except Exception as e:
        raise server_error("Error loading class progress", e)


@router.post("/award")
async def award_xp(
    data: XPAward,
    teacher: UserContext = Depends(get_current_teacher),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """
    Bonus XP from a teacher to a student in one of their classes
    """
    await service.verify_teacher_has_student(db, teacher.user_id, data.student_id)
    try:
        progress = await service.award_xp(db, data.student_id, data.amount, data.reason)
        return {"status": "success", "message": "XP awarded", "progress": progress}
    except HTTPException:
        raise
    except Exception as e:
        raise server_error("Error awarding XP", e)
