# essaycheck/core/dependencies.py
import logging
from functools import lru_cache

from essaycheck.client.bootstrap import build_gateway
from essaycheck.services.analysis_client import AnalysisClient

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_analysis_client() -> AnalysisClient:
    """공유 AnalysisClient (요청 간 상태 없음)"""
    logger.info("Initializing analysis client")
    return AnalysisClient(gateway=build_gateway())
