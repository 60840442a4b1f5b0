from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health")
async def health(request: Request):
    settings = request.app.state.settings
    return {
        "status": "ok",
        "llmConfigured": settings.llm_configured,
        "waitlistConfigured": settings.database_configured,
    }
