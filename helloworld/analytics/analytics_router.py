from fastapi import APIRouter, Depends, HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase

from helloworld.analytics import analytics_service as service
from helloworld.core.database import get_db
from helloworld.core.errors import server_error
from helloworld.core.permissions import UserContext, get_current_teacher

router = APIRouter(prefix="/api/analytics", tags=["Analytics"])


@router.get("/avg-xp")
async def get_average_xp(
    teacher: UserContext = Depends(get_current_teacher),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    try:
        return {"status": "success", "average_xp": await service.average_xp(db)}
    except HTTPException:
        raise
    except Exception as e:
        raise server_error("Failed to calculate average XP", e)


@router.get("/countries")
async def get_most_explored_countries(
    teacher: UserContext = Depends(get_current_teacher),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    try:
        countries = await service.most_explored_countries(db)
        return {"status": "success", "countries": countries, "count": len(countries)}
    except HTTPException:
        raise
    except Exception as e:
        raise server_error("Failed to fetch explored countries", e)


@router.get("/quiz-stats")
async def get_quiz_stats(
    teacher: UserContext = Depends(get_current_teacher),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    try:
        return {"status": "success", **(await service.quiz_stats(db))}
    except HTTPException:
        raise
    except Exception as e:
        raise server_error("Failed to calculate quiz stats", e)
