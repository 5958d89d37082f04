from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase

from helloworld.core.database import get_db
from helloworld.core.errors import server_error
from helloworld.core.permissions import UserContext, get_current_student
from helloworld.notebook import notebook_service as service
from helloworld.notebook.notebook_schemas import NoteCreate, NoteUpdate

router = APIRouter(prefix="/api/notebook", tags=["Notebook"])


@router.post("", status_code=201)
async def add_note(
    data: NoteCreate,
    student: UserContext = Depends(get_current_student),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    try:
        note = await service.create_note(db, student.user_id, data.dict())
        return {"status": "success", "message": "Note saved", "note": note}
    except HTTPException:
        raise
    except Exception as e:
        raise server_error("Failed to save note", e)


@router.get("")
async def get_notes(
    country: Optional[str] = None,
    student: UserContext = Depends(get_current_student),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    try:
        notes = await service.list_notes(db, student.user_id, country)
        return {"status": "success", "notes": notes, "count": len(notes)}
    except HTTPException:
        raise
    except Exception as e:
        raise server_error("Error fetching notes", e)


@router.put("/{note_id}")
async def update_note(
    note_id: str,
    data: NoteUpdate,
    student: UserContext = Depends(get_current_student),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    try:
        note = await service.update_note(db, note_id, student.user_id, data.dict(exclude_none=True))
        return {"status": "success", "message": "Note updated", "note": note}
    except HTTPException:
        raise
    except Exception as e:
        raise server_error("Failed to update note", e)


@router.delete("/{note_id}")
async def delete_note(
    note_id: str,
    student: UserContext = Depends(get_current_student),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    try:
        await service.delete_note(db, note_id, student.user_id)
        return {"status": "success", "message": "Note deleted"}
    except HTTPException:
        raise
    except Exception as e:
        raise server_error("Failed to delete note", e)
