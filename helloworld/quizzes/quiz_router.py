from fastapi import APIRouter, Depends, HTTPException, Query
from motor.motor_asyncio import AsyncIOMotorDatabase

from helloworld.config import LEADERBOARD_DEFAULT_LIMIT, LEADERBOARD_MAX_LIMIT
from helloworld.core.database import get_db
from helloworld.core.errors import server_error
from helloworld.core.permissions import UserContext, get_any_user, get_current_student
from helloworld.progress import progress_service
from helloworld.quizzes.quiz_schemas import QuizSubmit

router = APIRouter(prefix="/api/quiz", tags=["Quiz Attempts"])


@router.post("/submit", status_code=201)
async def submit_quiz(
    data: QuizSubmit,
    student: UserContext = Depends(get_current_student),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """
    Record a quiz result: raw score becomes XP, country becomes explored
    """
    try:
        attempt = await progress_service.record_quiz_submission(
            db, student.user_id, data.country, data.score, data.total
        )
        return {"status": "success", "message": "Quiz submitted", "quiz": attempt}
    except HTTPException:
        raise
    except Exception as e:
        raise server_error("Error submitting quiz", e)


@router.get("/history")
async def get_quiz_history(
    student: UserContext = Depends(get_current_student),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    try:
        history = await progress_service.get_quiz_history(db, student.user_id)
        return {"status": "success", "history": history, "count": len(history)}
    except HTTPException:
        raise
    except Exception as e:
        raise server_error("Error fetching quiz history", e)


@router.get("/leaderboard")
async def get_leaderboard(
    limit: int = Query(LEADERBOARD_DEFAULT_LIMIT, ge=1, le=LEADERBOARD_MAX_LIMIT),
    user: UserContext = Depends(get_any_user),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    try:
        entries = await progress_service.get_leaderboard(db, limit)
        return {"status": "success", "leaderboard": entries, "count": len(entries)}
    except HTTPException:
        raise
    except Exception as e:
        raise server_error("Error loading leaderboard", e)
