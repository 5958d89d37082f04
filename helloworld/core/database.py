import logging
import secrets
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from helloworld.config import MONGO_URL, DATABASE_NAME

logger = logging.getLogger(__name__)

_client: Optional[AsyncIOMotorClient] = None
_db: Optional[AsyncIOMotorDatabase] = None


def get_db_instance() -> AsyncIOMotorDatabase:
    """Get the process-wide database, connecting on first use"""
    global _client, _db
    if _db is None:
        _client = AsyncIOMotorClient(MONGO_URL)
        _db = _client[DATABASE_NAME]
    return _db


def use_database(db: Optional[AsyncIOMotorDatabase]):
    """Point the app at another database (tests, scripts). None resets."""
    global _db
    _db = db

# ==================== DEPENDENCY FUNCTIONS ====================

async def get_db() -> AsyncIOMotorDatabase:
    """Database dependency"""
    return get_db_instance()

# ==================== HELPERS ====================

def generate_id(prefix: str) -> str:
    """Generate unique ID with prefix"""
    return f"{prefix}_{secrets.token_hex(8).upper()}"


def serialize_mongo(doc: dict) -> dict:
    doc.pop("_id", None)
    return doc


def serialize_many(docs: list[dict]) -> list[dict]:
    return [serialize_mongo(doc) for doc in docs]

# ==================== DATABASE INDEXES ====================

async def create_indexes(db: AsyncIOMotorDatabase):
    """Create MongoDB indexes, including the uniqueness guarantees"""
    # Users
    await db.users.create_index("user_id", unique=True)
    await db.users.create_index("email", unique=True)
    await db.users.create_index([("role", 1), ("xp", -1)])

    # Classes
    await db.classes.create_index("class_id", unique=True)
    await db.classes.create_index("code", unique=True)
    await db.classes.create_index("teacher_id")

    # Enrollment: a student belongs to a class at most once
    await db.class_members.create_index([("student_id", 1), ("class_id", 1)], unique=True)
    await db.class_members.create_index("class_id")

    # Quizzes
    await db.teacher_quizzes.create_index("quiz_id", unique=True)
    await db.teacher_quizzes.create_index("class_id")
    await db.quiz_attempts.create_index([("student_id", 1), ("submitted_at", -1)])

    # Chat
    await db.chat_messages.create_index("message_id", unique=True)
    await db.chat_messages.create_index([("sender_id", 1), ("receiver_id", 1), ("created_at", 1)])

    # Per-student and catalog collections
    await db.notebook.create_index([("student_id", 1), ("created_at", -1)])
    await db.pronunciations.create_index([("student_id", 1), ("created_at", -1)])
    await db.teacher_content.create_index("content_id", unique=True)
    await db.badges.create_index("badge_id", unique=True)

    logger.info("Database indexes created")
