from fastapi import APIRouter, Depends, HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase

from helloworld.core.database import get_db
from helloworld.core.errors import server_error
from helloworld.core.permissions import (
    UserContext, get_any_user, get_current_student, get_current_teacher
)
from helloworld.quizzes import quiz_service as service
from helloworld.quizzes.quiz_schemas import TeacherQuizCreate, TeacherQuizAnswers

router = APIRouter(prefix="/api/tquiz", tags=["Teacher Quizzes"])


@router.post("", status_code=201)
async def create_quiz(
    data: TeacherQuizCreate,
    teacher: UserContext = Depends(get_current_teacher),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    try:
        quiz = await service.create_quiz(db, teacher, data.dict())
        return {"status": "success", "message": "Quiz created successfully!", "quiz": quiz}
    except HTTPException:
        raise
    except Exception as e:
        raise server_error("Failed to create quiz", e)


@router.get("")
async def get_teacher_quizzes(
    teacher: UserContext = Depends(get_current_teacher),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    try:
        quizzes = await service.get_teacher_quizzes(db, teacher)
        return {"status": "success", "quizzes": quizzes, "count": len(quizzes)}
    except HTTPException:
        raise
    except Exception as e:
        raise server_error("Error fetching teacher quizzes", e)


@router.get("/class/{class_id}")
async def get_class_quizzes(
    class_id: str,
    user: UserContext = Depends(get_any_user),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    try:
        quizzes = await service.get_class_quizzes(db, class_id, user)
        return {"status": "success", "quizzes": quizzes, "count": len(quizzes)}
    except HTTPException:
        raise
    except Exception as e:
        raise server_error("Error loading class quizzes", e)


@router.get("/{quiz_id}")
async def get_single_quiz(
    quiz_id: str,
    user: UserContext = Depends(get_any_user),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    try:
        quiz = await service.get_single_quiz(db, quiz_id, user)
        return {"status": "success", "quiz": quiz}
    except HTTPException:
        raise
    except Exception as e:
        raise server_error("Error fetching quiz", e)


@router.delete("/{quiz_id}")
async def delete_quiz(
    quiz_id: str,
    teacher: UserContext = Depends(get_current_teacher),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    try:
        await service.delete_quiz(db, quiz_id, teacher)
        return {"status": "success", "message": "Quiz deleted successfully"}
    except HTTPException:
        raise
    except Exception as e:
        raise server_error("Error deleting quiz", e)


@router.post("/{quiz_id}/submit", status_code=201)
async def submit_quiz(
    quiz_id: str,
    data: TeacherQuizAnswers,
    student: UserContext = Depends(get_current_student),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """
    Take a teacher quiz; graded on the server
    """
    try:
        result = await service.submit_quiz_answers(db, quiz_id, student, data.answers)
        return {"status": "success", "message": "Quiz submitted", **result}
    except HTTPException:
        raise
    except Exception as e:
        raise server_error("Error submitting quiz", e)
