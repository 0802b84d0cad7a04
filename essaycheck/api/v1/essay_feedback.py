import asyncio
import logging
import time

from fastapi import APIRouter, Depends, Request

from essaycheck.core.dependencies import get_analysis_client
from essaycheck.models.request import EssayAnalysisRequest
from essaycheck.models.response import EssayAnalysisResponse
from essaycheck.services.analysis_client import AnalysisClient

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/essay-feedback", response_model=EssayAnalysisResponse, response_model_by_alias=True)
async def essay_feedback(
    req: EssayAnalysisRequest,
    request: Request,
    client: AnalysisClient = Depends(get_analysis_client),
) -> EssayAnalysisResponse:
    request_id = f"req_{int(time.time() * 1000)}"
    logger.info(f"[{request_id}] → POST {request.url.path} essay_len={len(req.essay)}")

    start = time.perf_counter()
    # analyze는 동기 HTTP 호출 → 스레드에서 실행
    summary = await asyncio.to_thread(client.analyze, req.essay)
    dur_ms = (time.perf_counter() - start) * 1000.0

    logger.info(f"[{request_id}] ← POST {request.url.path} {dur_ms:.1f}ms")
    return EssayAnalysisResponse(feedback=summary, timings={"analyze": dur_ms})
