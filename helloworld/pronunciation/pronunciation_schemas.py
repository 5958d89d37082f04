from typing import Optional

from pydantic import BaseModel, Field, root_validator


class PronunciationSubmit(BaseModel):
    """
    Either a scored attempt (`accuracy`) or the transcribed
    `spoken_phrase`, which is then scored against `phrase`.
    """
    phrase: str = Field(..., min_length=1, max_length=500)
    accuracy: Optional[float] = Field(None, ge=0, le=100)
    spoken_phrase: Optional[str] = Field(None, max_length=500)
    user_audio_url: Optional[str] = None

    @root_validator(skip_on_failure=True)
    def require_score_source(cls, values):
        if values.get("accuracy") is None and values.get("spoken_phrase") is None:
            raise ValueError("Provide accuracy or spoken_phrase")
        return values
