from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from taskgate.api import health, validation
from taskgate.core.config import get_settings
from taskgate.core.log import configure_logging

settings = get_settings()
configure_logging()

app = FastAPI(
    title=settings.app_name,
    description="Structural validation of AI-generated worksheet tasks",
    version="0.1.0",
)

# The worksheet frontend calls the validator directly
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_url],
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type"],
)

# Include routers
app.include_router(health.router)
app.include_router(validation.router)


@app.get("/")
async def root():
    return {
        "name": settings.app_name,
        "docs": "/docs",
        "health": "/health",
    }
