from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class ContentType(str, Enum):
    FACT = "fact"
    CHALLENGE = "challenge"
    RESOURCE = "resource"


class ContentCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    type: ContentType
    content: str = Field(..., min_length=1)


class ContentUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    type: Optional[ContentType] = None
    content: Optional[str] = Field(None, min_length=1)

    class Config:
        extra = "forbid"
