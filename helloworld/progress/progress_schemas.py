from typing import List, Optional

from pydantic import BaseModel, Field, validator

# ==================== REQUEST SCHEMAS ====================

class ProgressUpdate(BaseModel):
    """
    Whitelisted progress fields a student may set directly.
    Anything else in the body is rejected.
    """
    xp: Optional[int] = Field(None, ge=0)
    level: Optional[int] = Field(None, ge=1)
    streak_days: Optional[int] = Field(None, ge=0)
    countries_explored: Optional[List[str]] = None
    quizzes_attempted: Optional[int] = Field(None, ge=0)
    ai_chats_completed: Optional[int] = Field(None, ge=0)
    badges: Optional[List[str]] = None

    class Config:
        extra = "forbid"


class CountryExplored(BaseModel):
    country: str = Field(..., min_length=1, max_length=100)

    @validator("country")
    def strip_country(cls, v):
        if not v.strip():
            raise ValueError("country is required")
        return v.strip()


class XPAward(BaseModel):
    student_id: str
    amount: int = Field(..., ge=0, le=10000)
    reason: str = Field(..., min_length=1, max_length=200)
