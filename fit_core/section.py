"""One section's question walk as immutable state.

Every transition returns a new ``SectionState``; the answer mapping is
copied on write so earlier states stay valid snapshots.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Dict, Optional, Tuple

from .types import Question
from .scoring import SectionScore, score_section
from .validators import ValidationError, validate_answer


log = logging.getLogger(__name__)


@dataclass(frozen=True)
class SectionState:
    section: str
    questions: Tuple[Question, ...]
    index: int = 0
    answers: Dict[str, str] = field(default_factory=dict)
    completed: bool = False

    @property
    def current_question(self) -> Question:
        return self.questions[self.index]

    @property
    def has_answer(self) -> bool:
        return bool(self.answers.get(self.current_question.id))

    @property
    def is_last(self) -> bool:
        return self.index >= len(self.questions) - 1

    def current_answer(self) -> Optional[str]:
        return self.answers.get(self.current_question.id)

    def progress(self) -> Tuple[int, int]:
        return self.index + 1, len(self.questions)


def start_section(section: str, questions: Tuple[Question, ...]) -> SectionState:
    if not questions:
        raise ValidationError(f"section {section} has no questions")
    return SectionState(section=section, questions=tuple(questions))


def select_answer(state: SectionState, value: object, strict: bool = True) -> SectionState:
    """Record ``value`` for the current question; a re-answer overwrites."""
    if state.completed:
        raise ValidationError(f"section {state.section} is already complete")
    q = state.current_question
    if strict:
        v = validate_answer(q, value)
    else:
        v = "" if value is None else str(value).strip()
        if not v:
            return state
    answers = dict(state.answers)
    answers[q.id] = v
    return replace(state, answers=answers)


def go_to_previous(state: SectionState) -> SectionState:
    if state.completed or state.index == 0:
        return state
    return replace(state, index=state.index - 1)


def go_to_next(state: SectionState) -> Tuple[SectionState, Optional[SectionScore]]:
    """
    Refused (same state, no score) while the current question is unanswered.
    On the last question the section completes and its score record is returned.
    """
    if state.completed or not state.has_answer:
        return state, None
    if state.is_last:
        score = score_section(state.section, state.questions, state.answers)
        log.info("section %s complete: %s", state.section, score.as_dict())
        return replace(state, completed=True), score
    return replace(state, index=state.index + 1), None
