from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, root_validator, validator

# ==================== ENUMS ====================

class MessageType(str, Enum):
    FEEDBACK = "feedback"  # teacher -> student
    QUESTION = "question"  # student -> teacher

# ==================== REQUEST SCHEMAS ====================

class ChatSend(BaseModel):
    receiver_id: str
    message: str = Field(..., min_length=1, max_length=5000)
    type: Optional[MessageType] = None

    @validator("message")
    def validate_message(cls, v):
        if not v.strip():
            raise ValueError("message cannot be empty")
        return v


class MarkRead(BaseModel):
    """
    Mark everything from `sender_id` as read, or only `message_ids`
    """
    sender_id: Optional[str] = None
    message_ids: Optional[List[str]] = None

    @root_validator(skip_on_failure=True)
    def require_target(cls, values):
        if not values.get("sender_id") and not values.get("message_ids"):
            raise ValueError("Provide sender_id or message_ids")
        return values
