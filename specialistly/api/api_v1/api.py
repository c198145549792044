from fastapi import APIRouter
from specialistly.api.api_v1.endpoints import appointments, specialists, health

router = APIRouter()

# Include all routers
router.include_router(health.router, prefix="/health", tags=["Health"])
router.include_router(appointments.router, prefix="/appointments", tags=["Appointments"])
router.include_router(specialists.router, prefix="/specialists", tags=["Specialists"])
