from pydantic import BaseModel, Field, validator

# ==================== REQUEST SCHEMAS ====================

class ClassCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)

    @validator("name")
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError("name is required")
        return v.strip()


class JoinClassRequest(BaseModel):
    code: str = Field(..., min_length=1, max_length=32)

    @validator("code")
    def strip_code(cls, v):
        return v.strip()
