from typing import Optional

from pydantic import BaseModel, Field


class NoteCreate(BaseModel):
    phrase: str = Field(..., min_length=1, max_length=500)
    translation: Optional[str] = None
    note_type: str = "AI Chat"
    country: Optional[str] = None


class NoteUpdate(BaseModel):
    phrase: Optional[str] = Field(None, min_length=1, max_length=500)
    translation: Optional[str] = None
    note_type: Optional[str] = None
    country: Optional[str] = None

    class Config:
        extra = "forbid"
