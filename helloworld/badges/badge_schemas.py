from typing import Optional

from pydantic import BaseModel, Field


class BadgeCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: str = ""
    icon: Optional[str] = None
    criteria: Optional[str] = None
    xp_reward: int = Field(50, ge=0)


class BadgeUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    icon: Optional[str] = None
    criteria: Optional[str] = None
    xp_reward: Optional[int] = Field(None, ge=0)

    class Config:
        extra = "forbid"
