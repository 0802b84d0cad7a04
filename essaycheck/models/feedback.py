# essaycheck/models/feedback.py
from typing import Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

SectionName = Literal["Introduction", "Body", "Conclusion", "GrammarEditing"]

# Order in which per-section suggestions are concatenated
SECTION_ORDER: Tuple[SectionName, ...] = ("Introduction", "Body", "Conclusion", "GrammarEditing")


class GrammarIssue(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Optional[str] = None
    message: Optional[str] = None
    sentence: Optional[str] = None
    suggestion: Optional[str] = None


class GrammarReport(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, serialize_by_alias=True)

    overall_score: Optional[int] = Field(default=None, ge=0, le=100, alias="overallScore")
    issues: Tuple[GrammarIssue, ...] = ()


class FeedbackSummary(BaseModel):
    """Structured feedback rendered by the caller.

    Every key is always present; missing data is an empty tuple or None.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True, serialize_by_alias=True)

    strengths: Tuple[str, ...] = ()
    weaknesses: Tuple[str, ...] = ()
    suggestions: Tuple[str, ...] = ()
    grammar: Optional[GrammarReport] = None
    language: Optional[str] = None


# 추출 결과 (어떤 tier가 결과를 만들었는지 추적)
class Structured(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["structured"] = "structured"
    strategy: Literal["marker", "whole_response"]
    summary: FeedbackSummary


class Heuristic(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["heuristic"] = "heuristic"
    summary: FeedbackSummary


class Failed(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["failed"] = "failed"
    reason: str


ExtractionOutcome = Union[Structured, Heuristic, Failed]
