# fit_core/results.py
from __future__ import annotations
import math
from typing import List, Tuple
from .types import ResultScore, ResultsView, DimensionRow, JobMatch, LearningStage, Tier
from .config import TIER_YES_MIN, TIER_MAYBE_MIN, MATCH_STRONG_MIN, MATCH_FAIR_MIN

TIER_MESSAGES = {
    "Yes": "You show excellent potential for a career as a Market Research Analyst!",
    "Maybe": "You have good potential but may benefit from additional preparation.",
    "Consider Alternatives": "Consider exploring related roles or building foundational skills first.",
}

# (dimension, display name, ResultScore attribute)
WISCAR_ROWS: Tuple[Tuple[str, str, str], ...] = (
    ("W", "Will", "w_score"),
    ("I", "Interest", "i_score"),
    ("S", "Skill", "s_score"),
    ("C", "Cognitive", "c_score"),
    ("A", "Ability", "a_score"),
    ("R", "Real-world", "r_score"),
)

LEARNING_PATH: Tuple[LearningStage, ...] = (
    LearningStage(1, "Foundation", ("Intro to Market Research", "Basic Statistics", "Excel/Spreadsheets")),
    LearningStage(2, "Practice", ("Survey Design", "Data Analysis Tools", "Consumer Psychology")),
    LearningStage(3, "Experience", ("Real Projects", "Internships", "Certification")),
)


def tier(avg: float) -> Tier:
    a = float(avg)
    if a >= TIER_YES_MIN: return "Yes"
    if a >= TIER_MAYBE_MIN: return "Maybe"
    return "Consider Alternatives"


def badge(match: float) -> str:
    m = float(match)
    if m >= MATCH_STRONG_MIN: return "strong"
    if m >= MATCH_FAIR_MIN: return "fair"
    return "weak"


def headline_average(s: ResultScore) -> float:
    return (s.psychometric_fit + s.technical_readiness + s.overall_confidence) / 3


def job_matches(s: ResultScore) -> List[JobMatch]:
    roles = [
        ("Market Research Analyst", s.technical_readiness,
         "Data collection and interpretation for business insights"),
        ("Consumer Insights Specialist", s.psychometric_fit,
         "Focus on consumer behavior trends and patterns"),
        ("Data Analyst (Marketing)", (s.technical_readiness + s.c_score) / 2,
         "Analyze marketing data and campaign effectiveness"),
        ("Business Intelligence Analyst", (s.technical_readiness + s.r_score) / 2,
         "Integrate market research into business strategy"),
    ]
    return [JobMatch(title=t, match=m, description=d, badge=badge(m)) for t, m, d in roles]  # type: ignore[arg-type]


def render(combined: ResultScore) -> ResultsView:
    avg = headline_average(combined)
    t = tier(avg)
    return ResultsView(
        tier=t,
        message=TIER_MESSAGES[t],
        average=avg,
        confidence_percent=int(math.floor(combined.overall_confidence + 0.5)),
        scores={
            "psychometricFit": combined.psychometric_fit,
            "technicalReadiness": combined.technical_readiness,
            "overallConfidence": combined.overall_confidence,
        },
        dimension_breakdown=[DimensionRow(d, n, float(getattr(combined, attr))) for d, n, attr in WISCAR_ROWS],
        job_matches=job_matches(combined),
        learning_path=list(LEARNING_PATH),
    )
