import time
import logging
from dotenv import load_dotenv
load_dotenv()  # ★ 라우터/모듈 임포트 전에!

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from essaycheck.api.v1.essay_feedback import router as feedback_router
from essaycheck.core.config import settings
from essaycheck.core.dependencies import get_analysis_client
from essaycheck.services.analysis_client import AnalysisClient
from essaycheck.core.exceptions import (
    ConfigurationError,
    ResponseError,
    TransportError,
    configuration_exception_handler,
    response_exception_handler,
    transport_exception_handler,
)

# Setup logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(
        title="Essay Feedback API",
        version="1.0.0",
        description="Structured essay feedback extracted from an external text-generation service",
    )

    app.add_exception_handler(ConfigurationError, configuration_exception_handler)
    app.add_exception_handler(TransportError, transport_exception_handler)
    app.add_exception_handler(ResponseError, response_exception_handler)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        request_id = f"global_{int(time.time() * 1000)}"
        logger.error(f"[{request_id}] Unhandled exception on {request.method} {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "type": "InternalError",
                "request_id": request_id,
            }
        )

    # CORS (open by default; tighten as needed)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routers
    app.include_router(feedback_router, prefix="/v1", tags=["feedback"])

    @app.get("/health")
    async def health(client: AnalysisClient = Depends(get_analysis_client)):
        """Report whether the analysis endpoint is configured (no network call)"""
        configured = client.gateway.is_configured
        return JSONResponse(
            status_code=200 if configured else 503,
            content={
                "status": "healthy" if configured else "degraded",
                "version": "1.0.0",
                "timestamp": time.time(),
                "services": {"analysis_endpoint": "configured" if configured else "missing"},
            }
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
