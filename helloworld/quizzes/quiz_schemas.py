from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, validator

# ==================== ENUMS ====================

class DifficultyLevel(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

# ==================== TEACHER QUIZ MODELS ====================

class QuizQuestion(BaseModel):
    question: str = Field(..., min_length=1)
    options: List[str] = Field(..., min_length=2)
    correct_answer: str

    @validator("options")
    def validate_options(cls, v):
        cleaned = [o.strip() for o in v]
        if any(not o for o in cleaned):
            raise ValueError("Options cannot be empty")
        if len(set(cleaned)) != len(cleaned):
            raise ValueError("Options must be distinct")
        return cleaned

    @validator("correct_answer")
    def validate_correct_answer(cls, v, values):
        v = v.strip()
        options = values.get("options")
        if options is not None and v not in options:
            raise ValueError("correct_answer must be one of the options")
        return v


class TeacherQuizCreate(BaseModel):
    quiz_title: str = Field(..., min_length=1, max_length=200)
    country: str = Field(..., min_length=1, max_length=100)
    difficulty: DifficultyLevel = DifficultyLevel.EASY
    class_id: Optional[str] = None
    questions: List[QuizQuestion] = Field(..., min_length=1)


class TeacherQuizAnswers(BaseModel):
    """
    Student answers, one per question in quiz order
    """
    answers: List[Optional[str]]

# ==================== ATTEMPT MODELS ====================

class QuizSubmit(BaseModel):
    country: str = Field(..., min_length=1, max_length=100)
    score: int = Field(..., ge=0)
    total: int = Field(..., ge=1)

    @validator("country")
    def strip_country(cls, v):
        if not v.strip():
            raise ValueError("country is required")
        return v.strip()

    @validator("total")
    def validate_total(cls, v, values):
        score = values.get("score")
        if score is not None and score > v:
            raise ValueError("score cannot exceed total")
        return v
