import logging
from datetime import datetime
from typing import List, Optional, Tuple

from fastapi import HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase

from helloworld.core.common_audit import log_audit
from helloworld.quizzes.quiz_schemas import DifficultyLevel
from helloworld.core.database import generate_id, serialize_mongo
from helloworld.core.permissions import UserContext, check_owner, verify_class_ownership
from helloworld.progress.progress_service import record_quiz_submission

logger = logging.getLogger(__name__)


def present_quiz(quiz: dict, user: UserContext) -> dict:
    """Students never see the answer key"""
    quiz = serialize_mongo(quiz)
    if not user.is_teacher:
        for question in quiz.get("questions", []):
            question.pop("correct_answer", None)
    return quiz

# ==================== TEACHER QUIZ CRUD ====================

async def create_quiz(db: AsyncIOMotorDatabase, teacher: UserContext, data: dict) -> dict:
    """
    Create a quiz, optionally bound to one of the teacher's classes
    """
    if data.get("class_id"):
        await verify_class_ownership(db, data["class_id"], teacher)

    quiz = {
        "quiz_id": generate_id("TQZ"),
        "teacher_id": teacher.user_id,
        "class_id": data.get("class_id"),
        "quiz_title": data["quiz_title"],
        "country": data["country"],
        "difficulty": DifficultyLevel(data["difficulty"]).value,
        "questions": data["questions"],
        "created_at": datetime.utcnow(),
    }

    await db.teacher_quizzes.insert_one(quiz)
    return serialize_mongo(quiz)


async def get_teacher_quizzes(db: AsyncIOMotorDatabase, teacher: UserContext) -> List[dict]:
    cursor = db.teacher_quizzes.find({"teacher_id": teacher.user_id}).sort([("created_at", -1), ("_id", -1)])
    return [present_quiz(q, teacher) for q in await cursor.to_list(length=None)]


async def get_class_quizzes(db: AsyncIOMotorDatabase, class_id: str, user: UserContext) -> List[dict]:
    cursor = db.teacher_quizzes.find({"class_id": class_id}).sort([("created_at", -1), ("_id", -1)])
    return [present_quiz(q, user) for q in await cursor.to_list(length=None)]


async def get_quiz_document(db: AsyncIOMotorDatabase, quiz_id: str) -> dict:
    quiz = await db.teacher_quizzes.find_one({"quiz_id": quiz_id})
    if not quiz:
        raise HTTPException(status_code=404, detail="Quiz not found")
    return quiz


async def get_single_quiz(db: AsyncIOMotorDatabase, quiz_id: str, user: UserContext) -> dict:
    return present_quiz(await get_quiz_document(db, quiz_id), user)


async def delete_quiz(db: AsyncIOMotorDatabase, quiz_id: str, teacher: UserContext):
    """
    Delete a quiz; only its author may do so

    Raises:
        404: Quiz not found
        403: Not the author
    """
    quiz = await get_quiz_document(db, quiz_id)
    check_owner(quiz, "teacher_id", teacher, "quiz")

    await db.teacher_quizzes.delete_one({"quiz_id": quiz_id})
    await log_audit(db, teacher, "delete_quiz", "quiz", quiz_id, {"quiz_title": quiz.get("quiz_title")})

# ==================== GRADING ====================

def grade_answers(questions: List[dict], answers: List[Optional[str]]) -> Tuple[int, int, List[bool]]:
    """
    One point per exactly matching answer (surrounding whitespace ignored).
    Missing answers count as wrong.
    """
    results = []
    for idx, question in enumerate(questions):
        given = answers[idx] if idx < len(answers) else None
        results.append(given is not None and given.strip() == question["correct_answer"])
    return sum(results), len(questions), results


async def submit_quiz_answers(
    db: AsyncIOMotorDatabase,
    quiz_id: str,
    student: UserContext,
    answers: List[Optional[str]]
) -> dict:
    """
    Grade a teacher quiz server-side and record the attempt

    Raises:
        404: Quiz not found
        403: Quiz belongs to a class the student has not joined
        400: More answers than questions
    """
    quiz = await get_quiz_document(db, quiz_id)

    if quiz.get("class_id"):
        membership = await db.class_members.find_one({
            "class_id": quiz["class_id"],
            "student_id": student.user_id
        })
        if not membership:
            raise HTTPException(status_code=403, detail="You must join this class to take its quizzes")

    if len(answers) > len(quiz["questions"]):
        raise HTTPException(status_code=400, detail="More answers than questions")

    score, total, results = grade_answers(quiz["questions"], answers)
    attempt = await record_quiz_submission(
        db, student.user_id, quiz["country"], score, total, quiz_id=quiz_id
    )

    logger.info("Student %s scored %d/%d on quiz %s", student.user_id, score, total, quiz_id)
    return {"attempt": attempt, "results": results}
