from __future__ import annotations

import logging
from typing import Optional

from essaycheck.client.bootstrap import build_gateway
from essaycheck.core.exceptions import ConfigurationError
from essaycheck.models.feedback import FeedbackSummary, Structured
from essaycheck.services.prompt_builder import build_prompt
from essaycheck.services.response_normalizer import extract
from essaycheck.utils.tracer import Gateway, record_extraction, traced_analysis

logger = logging.getLogger(__name__)


class AnalysisClient:
    """Top-level orchestration for essay feedback.

    Flow:
      build_prompt → gateway.send (one POST) → normalize

    Raises ConfigurationError, TransportError or ResponseError; a reply that
    arrives is always turned into a FeedbackSummary.
    """

    def __init__(self, gateway: Optional[Gateway] = None):
        self.gateway = gateway or build_gateway()

    def analyze(self, essay: str) -> FeedbackSummary:
        if not self.gateway.is_configured:
            raise ConfigurationError(
                "ANALYSIS_API_URL is not set to an http(s) URL. Point it at the analysis endpoint.",
                details={"endpoint": self.gateway.endpoint},
            )

        prompt = build_prompt(essay)
        logger.info(f"Requesting essay feedback (essay_len={len(essay)}, prompt_len={len(prompt)})")

        with traced_analysis(essay_len=len(essay), prompt_len=len(prompt)) as span:
            raw = self.gateway.send(message=prompt, history=[])

            outcome = extract(raw)
            strategy = outcome.strategy if isinstance(outcome, Structured) else None
            record_extraction(span, outcome.kind, strategy)

        logger.info(f"Feedback extracted: kind={outcome.kind} strategy={strategy} response_len={len(raw)}")
        return outcome.summary
