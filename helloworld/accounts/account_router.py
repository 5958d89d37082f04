from fastapi import APIRouter, Depends, HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase

from helloworld.accounts import account_service as service
from helloworld.accounts.account_schemas import (
    RegisterRequest, TeacherRegisterRequest, LoginRequest, UserRole
)
from helloworld.core.database import get_db
from helloworld.core.errors import server_error
from helloworld.core.permissions import UserContext, get_any_user

router = APIRouter(prefix="/api/auth", tags=["Authentication"])
teacher_router = APIRouter(prefix="/api/teacher", tags=["Teacher Authentication"])

# ==================== STUDENT / GENERIC AUTH ====================

@router.post("/register", status_code=201)
async def register(data: RegisterRequest, db: AsyncIOMotorDatabase = Depends(get_db)):
    """
    Register a student or teacher (role validated against the enum)
    """
    try:
        result = await service.register_user(db, data.dict(), data.role.value)
        return {"status": "success", "message": "User registered", **result}
    except HTTPException:
        raise
    except Exception as e:
        raise server_error("Server error", e)


@router.post("/login")
async def login(data: LoginRequest, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        result = await service.authenticate(db, data.email, data.password)
        return {"status": "success", "message": "Login successful", **result}
    except HTTPException:
        raise
    except Exception as e:
        raise server_error("Server error", e)


@router.get("/me")
async def get_me(user: UserContext = Depends(get_any_user)):
    return {"status": "success", "user": service.public_user(user.profile)}

# ==================== TEACHER AUTH ====================

@teacher_router.post("/register", status_code=201)
async def register_teacher(
    data: TeacherRegisterRequest,
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """
    Register a teacher account (role forced to teacher)
    """
    try:
        result = await service.register_user(db, data.dict(), UserRole.TEACHER.value)
        return {"status": "success", "message": "Teacher registered", **result}
    except HTTPException:
        raise
    except Exception as e:
        raise server_error("Server error", e)


@teacher_router.post("/login")
async def login_teacher(data: LoginRequest, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        result = await service.authenticate(
            db, data.email, data.password, required_role=UserRole.TEACHER.value
        )
        return {"status": "success", "message": "Login successful", **result}
    except HTTPException:
        raise
    except Exception as e:
        raise server_error("Server error", e)
