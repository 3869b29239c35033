from datetime import datetime

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health", summary="Health check")
async def health_check(request: Request):
    """
    Health-check: приложение живо и база отвечает.
    """
    await request.app.state.db.ping()
    return {
        "status": "ok",
        "database": "ok",
        "timestamp": datetime.now(),
    }
