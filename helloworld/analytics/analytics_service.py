"""
Teacher dashboard aggregates over all students and quiz attempts.
Every figure defaults to 0 when there is nothing to aggregate.
"""

from typing import List

from motor.motor_asyncio import AsyncIOMotorDatabase

from helloworld.progress.gamification import round_half_up


async def average_xp(db: AsyncIOMotorDatabase) -> int:
    result = await db.users.aggregate([
        {"$match": {"role": "student"}},
        {"$group": {"_id": None, "avg_xp": {"$avg": "$xp"}}},
    ]).to_list(length=1)

    if not result or result[0].get("avg_xp") is None:
        return 0
    return round_half_up(result[0]["avg_xp"])


async def most_explored_countries(db: AsyncIOMotorDatabase) -> List[dict]:
    """Students per explored country, most popular first"""
    result = await db.users.aggregate([
        {"$match": {"role": "student"}},
        {"$unwind": "$countries_explored"},
        {"$group": {"_id": "$countries_explored", "count": {"$sum": 1}}},
        {"$sort": {"count": -1, "_id": 1}},
    ]).to_list(length=None)

    return [{"country": row["_id"], "count": row["count"]} for row in result]


async def quiz_stats(db: AsyncIOMotorDatabase) -> dict:
    """Attempt count and mean raw score (not normalized by total)"""
    total_attempts = await db.quiz_attempts.count_documents({})

    result = await db.quiz_attempts.aggregate([
        {"$group": {"_id": None, "avg_score": {"$avg": "$score"}}},
    ]).to_list(length=1)

    avg_score = result[0].get("avg_score") if result else None
    return {
        "total_quiz_attempts": total_attempts,
        "average_score": round_half_up(avg_score) if avg_score is not None else 0,
    }
