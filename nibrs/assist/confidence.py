"""
Confidence — Scores for review UIs.

calculate_accuracy_score rates a mapped record; calculate_validation_confidence
rates how complete a set of fields is; confidence_band turns a single
classification confidence into an accept / review / reject decision.
"""

from enum import Enum
from typing import Sequence

from pydantic import BaseModel

from nibrs.ir.schema import NibrsSegments

AUTO_ACCEPT_THRESHOLD = 0.85
REVIEW_THRESHOLD = 0.5

LOW_OFFENSE_CONFIDENCE = 0.6
MEDIUM_OFFENSE_CONFIDENCE = 0.8


class ConfidenceLevel(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    COMPLETE = "COMPLETE"


class ConfidenceBand(str, Enum):
    """What to do with a classification at a given confidence."""
    AUTO_ACCEPT = "auto_accept"
    REVIEW = "review"
    REJECT = "reject"


class ConfidenceAssessment(BaseModel):
    score: float
    level: ConfidenceLevel
    message: str
    color: str


def calculate_accuracy_score(
    segments: NibrsSegments,
    errors: Sequence[str] = (),
    warnings: Sequence[str] = (),
) -> int:
    """
    Score a record 0-100.

    Starts at 100 and deducts 10 per error, 5 per warning, 20 for no
    offenses, 15 for no victims, 10 for no properties, and 15 / 5 for each
    offense classified below 0.6 / 0.8 confidence.
    """
    score = 100
    score -= 10 * len(errors)
    score -= 5 * len(warnings)

    if not segments.offenses:
        score -= 20
    if not segments.victims:
        score -= 15
    if not segments.properties:
        score -= 10

    for offense in segments.offenses:
        if offense.confidence < LOW_OFFENSE_CONFIDENCE:
            score -= 15
        elif offense.confidence < MEDIUM_OFFENSE_CONFIDENCE:
            score -= 5

    return max(0, min(100, score))


def calculate_validation_confidence(
    present_fields: Sequence[str],
    missing_fields: Sequence[str],
    critical_fields: Sequence[str] = (),
) -> ConfidenceAssessment:
    """
    Rate how complete a report is.

    The score averages the overall completion ratio with the share of
    critical fields present (1.0 when there are no critical fields).
    """
    total = len(present_fields) + len(missing_fields)
    if total == 0:
        return ConfidenceAssessment(
            score=0.0, level=ConfidenceLevel.LOW, message="No fields to validate", color="red"
        )

    completion = len(present_fields) / total
    present = set(present_fields)
    if critical_fields:
        critical = sum(1 for f in critical_fields if f in present) / len(critical_fields)
    else:
        critical = 1.0
    score = (completion + critical) / 2

    if score >= 0.9 and not missing_fields:
        level, message, color = ConfidenceLevel.COMPLETE, "Report contains all required information", "green"
    elif score >= 0.7:
        level, message, color = ConfidenceLevel.HIGH, "Most critical information provided", "blue"
    elif score >= 0.4:
        level, message, color = ConfidenceLevel.MEDIUM, "Some important details missing", "orange"
    else:
        level, message, color = ConfidenceLevel.LOW, "Critical information missing", "red"

    return ConfidenceAssessment(score=score, level=level, message=message, color=color)


def confidence_band(confidence: float) -> ConfidenceBand:
    if confidence >= AUTO_ACCEPT_THRESHOLD:
        return ConfidenceBand.AUTO_ACCEPT
    if confidence >= REVIEW_THRESHOLD:
        return ConfidenceBand.REVIEW
    return ConfidenceBand.REJECT
