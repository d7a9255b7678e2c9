from fastapi import APIRouter

from app.ai.factory import ai_configured

router = APIRouter()

@router.get("/health", summary="Health Check", description="Check the health status of the application.")
async def health_check():
    return {"status": "healthy", "ai_configured": ai_configured()}
