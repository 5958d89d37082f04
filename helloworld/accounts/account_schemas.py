import re
from enum import Enum

from pydantic import BaseModel, Field, validator

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

# ==================== ENUMS ====================

class UserRole(str, Enum):
    STUDENT = "student"
    TEACHER = "teacher"

# ==================== REQUEST SCHEMAS ====================

class TeacherRegisterRequest(BaseModel):
    """
    Sign-up with the role fixed server-side
    """
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., max_length=254)
    password: str = Field(..., min_length=6, max_length=128)

    @validator("name")
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError("name is required")
        return v.strip()

    @validator("email")
    def validate_email(cls, v):
        v = v.strip().lower()
        if not EMAIL_PATTERN.match(v):
            raise ValueError("Invalid email address")
        return v


class RegisterRequest(TeacherRegisterRequest):
    """
    Sign-up with a caller-chosen role, restricted to the UserRole enum
    """
    role: UserRole = UserRole.STUDENT


class LoginRequest(BaseModel):
    email: str
    password: str

    @validator("email")
    def normalize_email(cls, v):
        return v.strip().lower()
