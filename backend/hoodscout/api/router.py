from fastapi import APIRouter
from hoodscout.config.settings import settings
from .v1.endpoints import recommendations


# Main API router
api_router = APIRouter()

# Include all endpoints from v1
api_router.include_router(
    recommendations.router,
    prefix=f"{settings.API_V1_STR}/recommendations",
    tags=["recommendations"]
)
