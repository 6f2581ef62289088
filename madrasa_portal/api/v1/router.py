from fastapi import APIRouter
from madrasa_portal.api.v1.endpoints import results
from madrasa_portal.api.v1.endpoints import students

api_router = APIRouter()

api_router.include_router(
    results.router,
    prefix="/results",
    tags=["results"]
)

api_router.include_router(
    students.router,
    prefix="/students",
    tags=["students"]
)
