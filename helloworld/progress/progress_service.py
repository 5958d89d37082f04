"""
Progress / gamification engine.

XP, level, streak, explored countries and badges live on the student's
user document and are changed with single-document atomic operators.
Recording an activity is two writes (the activity row, then the user
update) with no transaction between them.
"""

import logging
from datetime import datetime
from typing import List, Optional

from fastapi import HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase

from helloworld.config import LEADERBOARD_DEFAULT_LIMIT, LEADERBOARD_MAX_LIMIT
from helloworld.core.database import generate_id, serialize_mongo
from helloworld.progress.gamification import (
    calculate_level, next_streak, pronunciation_xp, round_half_up,
    unique_in_order, xp_to_next_level
)

logger = logging.getLogger(__name__)

SET_FIELDS = ("countries_explored", "badges")


def progress_snapshot(user: dict) -> dict:
    """Progress fields of a user document, with defaults for missing ones"""
    xp = user.get("xp") or 0
    return {
        "xp": xp,
        "level": user.get("level") or 1,
        "xp_to_next_level": xp_to_next_level(xp),
        "streak_days": user.get("streak_days") or 0,
        "countries_explored": user.get("countries_explored") or [],
        "quizzes_attempted": user.get("quizzes_attempted") or 0,
        "ai_chats_completed": user.get("ai_chats_completed") or 0,
        "badges": user.get("badges") or [],
        "last_active": user.get("last_active"),
    }


async def _get_student(db: AsyncIOMotorDatabase, student_id: str) -> dict:
    user = await db.users.find_one({"user_id": student_id, "role": "student"})
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user

# ==================== STUDENT PROGRESS ====================

async def get_progress(db: AsyncIOMotorDatabase, student_id: str) -> dict:
    return progress_snapshot(await _get_student(db, student_id))


async def update_progress(db: AsyncIOMotorDatabase, student_id: str, updates: dict) -> dict:
    """
    Merge-patch whitelisted progress fields onto the student.
    Set-valued fields are stored without duplicates.
    """
    await _get_student(db, student_id)

    for field in SET_FIELDS:
        if field in updates:
            updates[field] = unique_in_order(updates[field])

    if updates:
        await db.users.update_one({"user_id": student_id}, {"$set": updates})

    return await get_progress(db, student_id)


async def _after_activity(db: AsyncIOMotorDatabase, student_id: str, now: datetime):
    """Refresh streak and (never lower) level after XP-bearing activity"""
    user = await db.users.find_one({"user_id": student_id})
    if not user:
        return

    streak = next_streak(user.get("last_active"), user.get("streak_days") or 0, now)
    await db.users.update_one(
        {"user_id": student_id},
        {
            "$set": {"streak_days": streak, "last_active": now},
            "$max": {"level": calculate_level(user.get("xp") or 0)},
        }
    )


async def award_xp(db: AsyncIOMotorDatabase, student_id: str, amount: int, reason: str) -> dict:
    """Server-side XP grant"""
    if amount < 0:
        raise HTTPException(status_code=400, detail="XP amount must be non-negative")

    result = await db.users.update_one(
        {"user_id": student_id, "role": "student"},
        {"$inc": {"xp": amount}}
    )
    if result.matched_count == 0:
        raise HTTPException(status_code=404, detail="User not found")

    user = await db.users.find_one({"user_id": student_id})
    await db.users.update_one(
        {"user_id": student_id},
        {"$max": {"level": calculate_level(user.get("xp") or 0)}}
    )
    logger.info("Awarded %d XP to %s (%s)", amount, student_id, reason)
    return await get_progress(db, student_id)


async def add_explored_country(db: AsyncIOMotorDatabase, student_id: str, country: str) -> dict:
    result = await db.users.update_one(
        {"user_id": student_id, "role": "student"},
        {"$addToSet": {"countries_explored": country}}
    )
    if result.matched_count == 0:
        raise HTTPException(status_code=404, detail="User not found")
    return await get_progress(db, student_id)

# ==================== ACTIVITY RECORDING ====================

async def record_quiz_submission(
    db: AsyncIOMotorDatabase,
    student_id: str,
    country: str,
    score: int,
    total: int,
    quiz_id: Optional[str] = None
) -> dict:
    """
    Append a quiz attempt, then credit the student: raw score as XP,
    one more attempt, and the quiz country added to the explored set.
    """
    now = datetime.utcnow()
    attempt = {
        "attempt_id": generate_id("ATT"),
        "student_id": student_id,
        "quiz_id": quiz_id,
        "country": country,
        "score": score,
        "total": total,
        "submitted_at": now,
    }
    await db.quiz_attempts.insert_one(attempt)

    await db.users.update_one(
        {"user_id": student_id},
        {
            "$inc": {"quizzes_attempted": 1, "xp": score},
            "$addToSet": {"countries_explored": country},
        }
    )
    await _after_activity(db, student_id, now)

    return serialize_mongo(attempt)


async def record_pronunciation_submission(
    db: AsyncIOMotorDatabase,
    student_id: str,
    phrase: str,
    accuracy: float,
    extra: Optional[dict] = None
) -> dict:
    """Append a pronunciation attempt and credit round_half_up(accuracy / 10) XP"""
    now = datetime.utcnow()
    xp_awarded = pronunciation_xp(accuracy)
    record = {
        "pronunciation_id": generate_id("PRN"),
        "student_id": student_id,
        "phrase": phrase,
        "accuracy": accuracy,
        "xp_awarded": xp_awarded,
        **(extra or {}),
        "created_at": now,
    }
    await db.pronunciations.insert_one(record)

    await db.users.update_one({"user_id": student_id}, {"$inc": {"xp": xp_awarded}})
    await _after_activity(db, student_id, now)

    return serialize_mongo(record)


async def get_quiz_history(db: AsyncIOMotorDatabase, student_id: str) -> List[dict]:
    cursor = db.quiz_attempts.find({"student_id": student_id}).sort([("submitted_at", -1), ("_id", -1)])
    return [serialize_mongo(doc) for doc in await cursor.to_list(length=None)]

# ==================== LEADERBOARDS ====================

async def get_leaderboard(db: AsyncIOMotorDatabase, limit: int = LEADERBOARD_DEFAULT_LIMIT) -> List[dict]:
    """
    Students by XP descending; ties go to the older account, then user_id
    """
    limit = max(1, min(limit, LEADERBOARD_MAX_LIMIT))

    pipeline = [
        {"$match": {"role": "student"}},
        {"$sort": {"xp": -1, "created_at": 1, "user_id": 1}},
        {"$limit": limit},
        {"$project": {"_id": 0, "user_id": 1, "name": 1, "xp": 1, "level": 1}},
    ]
    results = await db.users.aggregate(pipeline).to_list(length=limit)

    for idx, row in enumerate(results):
        row["xp"] = row.get("xp") or 0
        row["level"] = row.get("level") or 1
        row["rank"] = idx + 1

    return results


async def get_class_progress(db: AsyncIOMotorDatabase, class_id: str) -> List[dict]:
    """
    Progress of every student enrolled in the class, XP descending.
    Students without any recorded progress report zero defaults.
    """
    cursor = db.class_members.find({"class_id": class_id}).sort([("joined_at", 1), ("_id", 1)])
    memberships = await cursor.to_list(length=None)
    student_ids = [m["student_id"] for m in memberships]

    if not student_ids:
        return []

    users = await db.users.find({"user_id": {"$in": student_ids}}).to_list(length=None)
    users_by_id = {u["user_id"]: u for u in users}

    attempt_stats = await db.quiz_attempts.aggregate([
        {"$match": {"student_id": {"$in": student_ids}}},
        {"$group": {
            "_id": "$student_id",
            "total_quizzes": {"$sum": 1},
            "avg_score": {"$avg": "$score"},
        }},
    ]).to_list(length=None)
    stats_by_id = {s["_id"]: s for s in attempt_stats}

    results = []
    for student_id in student_ids:
        user = users_by_id.get(student_id, {})
        stats = stats_by_id.get(student_id, {})
        results.append({
            "student_id": student_id,
            "name": user.get("name"),
            "xp": user.get("xp") or 0,
            "level": user.get("level") or 1,
            "total_quizzes": stats.get("total_quizzes", 0),
            "avg_score": round_half_up(stats.get("avg_score") or 0),
            "explored_countries": user.get("countries_explored") or [],
        })

    # Stable: equal XP keeps enrollment order
    results.sort(key=lambda r: r["xp"], reverse=True)
    return results


async def verify_teacher_has_student(db: AsyncIOMotorDatabase, teacher_id: str, student_id: str):
    """
    Raises 403 unless the student is enrolled in one of the teacher's classes
    """
    memberships = await db.class_members.find({"student_id": student_id}).to_list(length=None)
    class_ids = [m["class_id"] for m in memberships]

    if class_ids and await db.classes.find_one({"class_id": {"$in": class_ids}, "teacher_id": teacher_id}):
        return

    raise HTTPException(status_code=403, detail="Student is not in any of your classes")
