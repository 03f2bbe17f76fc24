from fastapi import APIRouter, HTTPException
from app.api.v1.schemas.reco import AIKeyTestIn, AIKeyTestOut
from app.core.config import get_settings, is_ai_configured
from app.domain.errors import MalformedResponseError
from app.domain.services.ai_ranker_svc import GeminiRanker, describe_ai_error

import logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ai", tags=["ai"])


@router.get("/status")
async def ai_status():
    """Whether a Gemini key is configured (no network call)."""
    settings = get_settings()
    return {"configured": is_ai_configured(settings), "model": settings.GEMINI_MODEL}


@router.post("/test", response_model=AIKeyTestOut)
async def test_api_key(body: AIKeyTestIn):
    """
    Validate a Gemini API key with a one-line prompt.
    The key is only used for this call; it is never stored.
    """
    if not body.api_key.strip():
        raise HTTPException(status_code=400, detail="API key is required")

    ranker = GeminiRanker.from_settings(get_settings(), api_key=body.api_key.strip())
    try:
        text = await ranker.check()
    except MalformedResponseError:
        raise HTTPException(status_code=400, detail="Empty response from Gemini API")
    except Exception as e:
        logger.error(f"Gemini API key test failed: {type(e).__name__}: {e}")
        raise HTTPException(status_code=400, detail=describe_ai_error(e))
    finally:
        await ranker.client.close()

    return AIKeyTestOut(success=True, message="API key is valid and working", response=text)
