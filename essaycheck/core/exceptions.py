# essaycheck/core/exceptions.py
from fastapi import Request, status
from fastapi.responses import JSONResponse
from typing import Any, Dict, Optional
import logging

logger = logging.getLogger(__name__)

class AnalysisException(Exception):
    """Base exception for analysis errors"""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

class ConfigurationError(AnalysisException):
    """Missing or invalid analysis endpoint"""
    pass

class TransportError(AnalysisException):
    """Network-level failure (DNS, timeout, connection reset)"""
    pass

class ResponseError(AnalysisException):
    """Endpoint reachable but returned an error or a malformed envelope"""
    def __init__(self, message: str, status_code: Optional[int] = None, details: Optional[Dict[str, Any]] = None):
        self.status_code = status_code
        super().__init__(message, details)

# Exception handlers
async def configuration_exception_handler(request: Request, exc: ConfigurationError) -> JSONResponse:
    logger.error(f"Configuration error: {exc.message}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": exc.message,
            "type": "ConfigurationError",
        }
    )

async def transport_exception_handler(request: Request, exc: TransportError) -> JSONResponse:
    logger.error(f"Transport error: {exc.message}")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "error": "External service temporarily unavailable",
            "type": "TransportError",
            "retry_after": 30
        }
    )

async def response_exception_handler(request: Request, exc: ResponseError) -> JSONResponse:
    logger.warning(f"Upstream response error: {exc.message}")
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={
            "error": exc.message,
            "type": "ResponseError",
            "upstream_status": exc.status_code,
            "details": exc.details
        }
    )
