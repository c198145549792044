import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from specialistly.core.config import settings
from specialistly.api.api_v1.api import router as api_router
from specialistly.api.tenant_pages import router as tenant_router
from specialistly.db.mongodb import connect_to_mongo, close_mongo_connection
from specialistly.middleware.tenant import TenantRewriteMiddleware

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)

app = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    description="Specialistly Backend API"
)

# Set up CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Subdomain -> /specialist/{tenant}
app.add_middleware(TenantRewriteMiddleware)

# Include routers
app.include_router(api_router, prefix="/api/v1")
app.include_router(tenant_router, prefix=settings.TENANT_ROUTE_PREFIX, tags=["Specialist Pages"])

# MongoDB connection events
@app.on_event("startup")
async def startup_db_client():
    await connect_to_mongo()

@app.on_event("shutdown")
async def shutdown_db_client():
    await close_mongo_connection()

@app.get("/")
async def root():
    return {"message": "Welcome to Specialistly API"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
