from typing import List

from motor.motor_asyncio import AsyncIOMotorDatabase

from helloworld.core.database import serialize_many
from helloworld.progress.progress_service import record_pronunciation_submission


def score_pronunciation(spoken_phrase: str, phrase: str) -> int:
    """Length-difference heuristic: 10 points off per character of difference"""
    return max(0, 100 - abs(len(spoken_phrase.strip()) - len(phrase.strip())) * 10)


def feedback_for(accuracy: float) -> str:
    if accuracy > 80:
        return "Excellent pronunciation!"
    if accuracy > 50:
        return "Good, but can improve!"
    return "Keep practicing!"


async def submit_pronunciation(db: AsyncIOMotorDatabase, student_id: str, data: dict) -> dict:
    accuracy = data.get("accuracy")
    if accuracy is None:
        accuracy = score_pronunciation(data["spoken_phrase"], data["phrase"])

    extra = {
        "spoken_phrase": data.get("spoken_phrase"),
        "user_audio_url": data.get("user_audio_url"),
        "feedback_text": feedback_for(accuracy),
    }
    return await record_pronunciation_submission(db, student_id, data["phrase"], accuracy, extra)


async def get_pronunciation_history(db: AsyncIOMotorDatabase, student_id: str) -> List[dict]:
    cursor = db.pronunciations.find({"student_id": student_id}).sort([("created_at", -1), ("_id", -1)])
    return serialize_many(await cursor.to_list(length=None))
