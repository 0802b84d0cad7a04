from __future__ import annotations

import json
import logging
import re
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from essaycheck.models.feedback import (
    SECTION_ORDER,
    ExtractionOutcome,
    Failed,
    FeedbackSummary,
    GrammarIssue,
    GrammarReport,
    Heuristic,
    Structured,
)

logger = logging.getLogger(__name__)

MARKER_RE = re.compile(r"JSON_SUMMARY\s*[:=]\s*", re.IGNORECASE)
LEADING_FENCE_RE = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
TRAILING_FENCE_RE = re.compile(r"```\s*$")

POSITIVE_LABEL_RE = re.compile(r"^(?:\+\s*|positive(?:\s+feedback)?\s*:\s*)", re.IGNORECASE)
NEGATIVE_LABEL_RE = re.compile(r"^(?:-\s*|negative(?:\s+feedback)?\s*:\s*)", re.IGNORECASE)

ISSUE_FIELDS = ("type", "message", "sentence", "suggestion")


def _strip_fences(text: str) -> str:
    text = LEADING_FENCE_RE.sub("", text.strip())
    return TRAILING_FENCE_RE.sub("", text).strip()


# ---- field coercion: permissive dict -> strict models ----

def _string_list(value: Any) -> Optional[List[str]]:
    """Return the string items of ``value`` or None when it is not a list."""
    if not isinstance(value, list):
        return None
    return [item for item in value if isinstance(item, str)]


def _first_list(parsed: Dict[str, Any], *keys: str) -> List[str]:
    for key in keys:
        items = _string_list(parsed.get(key))
        if items is not None:
            return items
    return []


def _section_suggestions(sections: Any) -> Optional[List[str]]:
    if not isinstance(sections, dict):
        return None
    found = False
    out: List[str] = []
    for name in SECTION_ORDER:
        section = sections.get(name)
        if not isinstance(section, dict):
            continue
        items = _string_list(section.get("suggestions"))
        if items is not None:
            found = True
            out.extend(items)
    return out if found else None


def _score(value: Any) -> Optional[int]:
    # bool is an int subclass; never a score
    if isinstance(value, bool):
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, int) and 0 <= value <= 100:
        return value
    return None


def _grammar(value: Any) -> Optional[GrammarReport]:
    if not isinstance(value, dict):
        return None
    issues: List[GrammarIssue] = []
    raw_issues = value.get("issues")
    if isinstance(raw_issues, list):
        for item in raw_issues:
            if not isinstance(item, dict):
                continue
            fields = {k: item[k] for k in ISSUE_FIELDS if isinstance(item.get(k), str)}
            issues.append(GrammarIssue(**fields))
    return GrammarReport(overall_score=_score(value.get("overallScore")), issues=tuple(issues))


def reconcile(parsed: Dict[str, Any]) -> FeedbackSummary:
    """Coerce a loosely-typed summary object into a FeedbackSummary.

    - strengths:   ``strengths`` → ``positiveFeedback`` → []
    - weaknesses:  ``weaknesses`` → ``negativeFeedback`` → []
    - suggestions: ``suggestions`` → per-section suggestions in section order → []
    - grammar / language: kept when well-formed, otherwise None

    A present list wins over its fallback even when empty.
    """
    suggestions = _string_list(parsed.get("suggestions"))
    if suggestions is None:
        suggestions = _section_suggestions(parsed.get("sections")) or []
    language = parsed.get("language")
    return FeedbackSummary(
        strengths=tuple(_first_list(parsed, "strengths", "positiveFeedback")),
        weaknesses=tuple(_first_list(parsed, "weaknesses", "negativeFeedback")),
        suggestions=tuple(suggestions),
        grammar=_grammar(parsed.get("grammar")),
        language=language if isinstance(language, str) else None,
    )


def _parse_object(candidate: str) -> Tuple[Optional[Dict[str, Any]], str]:
    try:
        parsed = json.loads(candidate)
    except (ValueError, RecursionError) as exc:
        return None, f"invalid JSON: {exc}"
    if not isinstance(parsed, dict):
        return None, f"JSON value is {type(parsed).__name__}, not an object"
    return parsed, ""


# ---- tiers ----

def extract_marker_summary(raw: str) -> ExtractionOutcome:
    """Tier 1: JSON object following a ``JSON_SUMMARY=`` / ``JSON_SUMMARY:`` marker."""
    match = MARKER_RE.search(raw)
    if match is None:
        return Failed(reason="no JSON_SUMMARY marker")
    candidate = _strip_fences(raw[match.end():])
    first, last = candidate.find("{"), candidate.rfind("}")
    if first != -1 and last != -1 and last > first:
        candidate = candidate[first:last + 1]
    parsed, reason = _parse_object(candidate)
    if parsed is None:
        return Failed(reason=f"marker summary: {reason}")
    return Structured(strategy="marker", summary=reconcile(parsed))


def extract_whole_response(raw: str) -> ExtractionOutcome:
    """Tier 2: the whole (optionally fenced) response is one JSON object."""
    parsed, reason = _parse_object(_strip_fences(raw))
    if parsed is None:
        return Failed(reason=f"whole response: {reason}")
    return Structured(strategy="whole_response", summary=reconcile(parsed))


def classify_lines(raw: str) -> ExtractionOutcome:
    """Tier 3: sort prose lines into strengths and weaknesses by keyword."""
    strengths: List[str] = []
    weaknesses: List[str] = []
    for line in (l.strip() for l in raw.splitlines()):
        if not line:
            continue
        lowered = line.lower()
        if lowered.startswith("positive") or lowered.startswith("+") or "strength" in lowered:
            entry = POSITIVE_LABEL_RE.sub("", line, count=1)
            target = strengths
        elif (
            lowered.startswith("negative")
            or lowered.startswith("-")
            or "improv" in lowered
            or "weak" in lowered
        ):
            entry = NEGATIVE_LABEL_RE.sub("", line, count=1)
            target = weaknesses
        else:
            continue
        if entry:
            target.append(entry)

    if not strengths and not weaknesses:
        strengths.append(raw)
    return Heuristic(summary=FeedbackSummary(strengths=tuple(strengths), weaknesses=tuple(weaknesses)))


STRUCTURED_TIERS: Sequence[Callable[[str], ExtractionOutcome]] = (
    extract_marker_summary,
    extract_whole_response,
)


def extract(raw: str) -> ExtractionOutcome:
    """Run the tiers in order and return the first successful outcome.

    The line heuristic never fails, so the result is never ``Failed``.
    """
    for tier in STRUCTURED_TIERS:
        outcome = tier(raw)
        if not isinstance(outcome, Failed):
            logger.debug(f"Summary extracted by {tier.__name__}")
            return outcome
        logger.debug(f"{tier.__name__} failed: {outcome.reason}")
    logger.info("No structured summary found; falling back to line heuristics")
    return classify_lines(raw)


def normalize(raw: str) -> FeedbackSummary:
    """Best-effort FeedbackSummary from a raw generation response. Never raises."""
    return extract(raw).summary
