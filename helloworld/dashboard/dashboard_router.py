from fastapi import APIRouter, Depends

from helloworld.core.permissions import UserContext, get_current_student, get_current_teacher

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/teacher")
async def teacher_dashboard(teacher: UserContext = Depends(get_current_teacher)):
    return {
        "status": "success",
        "message": "Welcome to the Teacher Dashboard",
        "user": {"id": teacher.user_id, "role": teacher.role},
    }


@router.get("/student")
async def student_dashboard(student: UserContext = Depends(get_current_student)):
    return {
        "status": "success",
        "message": "Welcome to the Student Dashboard",
        "user": {"id": student.user_id, "role": student.role},
    }
