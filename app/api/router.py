from fastapi import APIRouter

from app.api.auth import router as auth_router
from app.api.health import router as health_router
from app.api.instructor import router as instructor_router
from app.api.students import router as students_router

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(auth_router)
api_router.include_router(instructor_router)
api_router.include_router(students_router)
