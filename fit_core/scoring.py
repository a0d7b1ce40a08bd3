from __future__ import annotations
from typing import Callable, Dict, Mapping, Sequence, Tuple, Union
from .types import Question, PsychometricScore, TechnicalScore, WiscarScore
from .validators import likert_value
from .question_bank import PSYCHOMETRIC_CATEGORIES, TECHNICAL_TYPES, WISCAR_DIMENSIONS
from .config import LIKERT_MAX, EMPTY_SECTION_SCORE

SectionScore = Union[PsychometricScore, TechnicalScore, WiscarScore]


def _clamp100(x: float) -> float:
    if x < 0.0: return 0.0
    if x > 100.0: return 100.0
    return float(x)


def _pct(num: float, den: float) -> float:
    return _clamp100(num / den * 100.0) if den > 0 else 0.0


def score_likert(
    questions: Sequence[Question], answers: Mapping[str, str], order: Sequence[str] = ()
) -> Tuple[Dict[str, float], float]:
    """
    Groups answered Likert items by category and scales each group to 0..100:
      sum(answers) / (n_answered * 5) * 100
    Groups with nothing answered are left out rather than reported as 0.
    Overall is the unweighted mean of the groups that were reported,
    or EMPTY_SECTION_SCORE when none were.
    """
    totals: Dict[str, int] = {}
    counts: Dict[str, int] = {}
    for q in questions:
        v = likert_value(answers.get(q.id))
        if v is None:
            continue
        totals[q.category] = totals.get(q.category, 0) + v
        counts[q.category] = counts.get(q.category, 0) + 1
    keys = [k for k in order if k in counts] + [k for k in counts if k not in order]
    per_group = {k: _pct(totals[k], counts[k] * LIKERT_MAX) for k in keys}
    if not per_group:
        return {}, EMPTY_SECTION_SCORE
    return per_group, sum(per_group.values()) / len(per_group)


def score_psychometric(questions: Sequence[Question], answers: Mapping[str, str]) -> PsychometricScore:
    groups, overall = score_likert(questions, answers, PSYCHOMETRIC_CATEGORIES)
    return PsychometricScore(psychometric_fit=overall, categories=groups)


def score_wiscar(questions: Sequence[Question], answers: Mapping[str, str]) -> WiscarScore:
    groups, overall = score_likert(questions, answers, WISCAR_DIMENSIONS)
    return WiscarScore(overall_confidence=overall, dimensions=groups)


def score_technical(questions: Sequence[Question], answers: Mapping[str, str]) -> TechnicalScore:
    """Every question counts toward its total; unanswered is incorrect."""
    correct = 0
    by_type = {t: {"correct": 0, "total": 0} for t in TECHNICAL_TYPES}
    for q in questions:
        bucket = by_type.setdefault(q.category, {"correct": 0, "total": 0})
        bucket["total"] += 1
        key = q.correct_value()
        chosen = answers.get(q.id)
        if chosen is not None and key is not None and str(chosen) == key:
            correct += 1
            bucket["correct"] += 1

    def _type_pct(t: str) -> float:
        b = by_type[t]
        return _pct(b["correct"], max(b["total"], 1))

    return TechnicalScore(
        technical_readiness=_pct(correct, max(len(questions), 1)),
        aptitude_score=_type_pct("aptitude"),
        prerequisite_score=_type_pct("prerequisite"),
        domain_score=_type_pct("domain"),
    )


SCORERS: Dict[str, Callable[[Sequence[Question], Mapping[str, str]], SectionScore]] = {
    "psychometric": score_psychometric,
    "technical": score_technical,
    "wiscar": score_wiscar,
}


def score_section(section: str, questions: Sequence[Question], answers: Mapping[str, str]) -> SectionScore:
    try:
        scorer = SCORERS[section]
    except KeyError:
        raise KeyError(f"no scorer for section {section!r}") from None
    return scorer(questions, answers)
