from __future__ import annotations

import pytest

from fit_core.engine import AssessmentSession, Stage
from fit_core.question_bank import (
    PSYCHOMETRIC_CATEGORIES,
    TECHNICAL_TYPES,
    WISCAR_DIMENSIONS,
    bank_from_dict,
    load_bank,
)
from fit_core.types import QuestionBank


def build_synthetic_bank(
    *,
    likert_per_category: int = 2,
    technical_per_type: int = 2,
    technical_types: list[str] | None = None,
) -> QuestionBank:
    """Create a deterministic bank; technical answer key is always option "a"."""

    raw: dict[str, list[dict]] = {"psychometric": [], "technical": [], "wiscar": []}
    for cat in PSYCHOMETRIC_CATEGORIES:
        for idx in range(likert_per_category):
            raw["psychometric"].append(
                {"id": f"p_{cat}_{idx}", "category": cat, "text": f"{cat} statement #{idx}"}
            )
    for kind in technical_types if technical_types is not None else TECHNICAL_TYPES:
        for idx in range(technical_per_type):
            raw["technical"].append(
                {
                    "id": f"t_{kind}_{idx}",
                    "type": kind,
                    "text": f"{kind} question #{idx}",
                    "options": [
                        {"value": "a", "label": "right", "correct": True},
                        {"value": "b", "label": "wrong"},
                        {"value": "c", "label": "also wrong"},
                    ],
                }
            )
    for dim in WISCAR_DIMENSIONS:
        for idx in range(likert_per_category):
            raw["wiscar"].append(
                {"id": f"w_{dim}_{idx}", "dimension": dim, "text": f"{dim} statement #{idx}"}
            )
    return bank_from_dict(raw)


def complete_section(sess: AssessmentSession, pick) -> None:
    """Answer every question of the current section with pick(question) and advance."""

    stage = sess.stage
    while sess.stage is stage:
        q = sess.current_question()
        sess.select_answer(pick(q))
        assert sess.next()


def run_to_results(sess: AssessmentSession, likert: str = "5", technical_correct: bool = True) -> None:
    sess.start()
    sess.next()
    complete_section(sess, lambda q: likert)
    complete_section(
        sess,
        lambda q: q.correct_value() if technical_correct else next(
            o.value for o in q.options if not o.is_correct
        ),
    )
    complete_section(sess, lambda q: likert)
    assert sess.stage is Stage.RESULTS


@pytest.fixture
def synthetic_bank() -> QuestionBank:
    return build_synthetic_bank()


@pytest.fixture
def bank() -> QuestionBank:
    return load_bank()
