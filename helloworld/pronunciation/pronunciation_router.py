from fastapi import APIRouter, Depends, HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase

from helloworld.core.database import get_db
from helloworld.core.errors import server_error
from helloworld.core.permissions import UserContext, get_current_student
from helloworld.pronunciation import pronunciation_service as service
from helloworld.pronunciation.pronunciation_schemas import PronunciationSubmit

router = APIRouter(prefix="/api/pronunciation", tags=["Pronunciation"])


@router.post("/submit", status_code=201)
async def submit_pronunciation(
    data: PronunciationSubmit,
    student: UserContext = Depends(get_current_student),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    try:
        record = await service.submit_pronunciation(db, student.user_id, data.dict())
        return {
            "status": "success",
            "message": "Pronunciation analyzed",
            "pronunciation": record,
        }
    except HTTPException:
        raise
    except Exception as e:
        raise server_error("Error saving pronunciation", e)


@router.get("/history")
async def get_pronunciation_history(
    student: UserContext = Depends(get_current_student),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    try:
        history = await service.get_pronunciation_history(db, student.user_id)
        return {"status": "success", "history": history, "count": len(history)}
    except HTTPException:
        raise
    except Exception as e:
        raise server_error("Error fetching pronunciation history", e)
