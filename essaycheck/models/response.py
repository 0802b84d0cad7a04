from typing import Dict

from pydantic import BaseModel

from essaycheck.models.feedback import FeedbackSummary


class EssayAnalysisResponse(BaseModel):
    success: bool = True
    feedback: FeedbackSummary
    timings: Dict[str, float]
