from fastapi import APIRouter

from taskgate.core.config import get_settings

router = APIRouter(tags=["health"])


@router.get("/health")
async def health():
    return {"status": "ok", "service": get_settings().app_name}
