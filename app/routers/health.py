from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter()

LIVENESS_MESSAGE = "ElevenLabs → GHL Webhook Server is running"


@router.get("/", response_class=PlainTextResponse)
async def health() -> str:
    return LIVENESS_MESSAGE
