# fit_core/engine.py
from __future__ import annotations
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional, Tuple
import logging

from .types import PsychometricScore, TechnicalScore, WiscarScore, ResultScore, Question, QuestionBank, ResultsView
from .question_bank import load_bank
from .section import SectionState, start_section, select_answer, go_to_previous, go_to_next
from .results import render
from .config import load_config, STRICT_ANSWERS, TOTAL_STEPS, DEBUG_TRACE, TRACE_FIELDS


log = logging.getLogger(__name__)


class Stage(str, Enum):
    HERO = "hero"
    INTRODUCTION = "introduction"
    PSYCHOMETRIC = "psychometric"
    TECHNICAL = "technical"
    WISCAR = "wiscar"
    RESULTS = "results"


SECTION_STAGES = (Stage.PSYCHOMETRIC, Stage.TECHNICAL, Stage.WISCAR)
_NEXT_STAGE: Dict[Stage, Stage] = {
    Stage.HERO: Stage.INTRODUCTION,
    Stage.INTRODUCTION: Stage.PSYCHOMETRIC,
    Stage.PSYCHOMETRIC: Stage.TECHNICAL,
    Stage.TECHNICAL: Stage.WISCAR,
    Stage.WISCAR: Stage.RESULTS,
}
_STEP: Dict[Stage, int] = {
    Stage.PSYCHOMETRIC: 1,
    Stage.TECHNICAL: 2,
    Stage.WISCAR: 3,
    Stage.RESULTS: 4,
}
INTENTS = ("start", "next", "previous", "answer", "restart")


@dataclass(frozen=True)
class SessionState:
    stage: Stage = Stage.HERO
    section: Optional[SectionState] = None
    psychometric: Optional[PsychometricScore] = None
    technical: Optional[TechnicalScore] = None
    wiscar: Optional[WiscarScore] = None
    events: Tuple[Dict[str, object], ...] = ()

    def combined(self) -> ResultScore:
        return ResultScore.merge(self.psychometric, self.technical, self.wiscar)

    def has_scores(self) -> bool:
        return any(r is not None for r in (self.psychometric, self.technical, self.wiscar))


def _emit_trace(**values: object) -> None:
    if not DEBUG_TRACE:
        return
    ordered = []
    for key in TRACE_FIELDS:
        if key in values:
            ordered.append(f"{key}={values[key]}")
    if ordered:
        log.info("trace %s", " ".join(ordered))


def _event(intent: str, before: SessionState, after: SessionState, value: object = None) -> Dict[str, object]:
    sec = before.section
    evt: Dict[str, object] = {
        "t": datetime.now(timezone.utc).isoformat(),
        "intent": intent,
        "stage_before": before.stage.value,
        "stage_after": after.stage.value,
        "question_id": sec.current_question.id if sec is not None and not sec.completed else "",
        "value": "" if value is None else str(value),
        "index": sec.index if sec is not None else -1,
    }
    _emit_trace(**evt)
    return evt


def _enter(stage: Stage, bank: QuestionBank) -> Optional[SectionState]:
    if stage in SECTION_STAGES:
        return start_section(stage.value, bank.section(stage.value))
    return None


def apply(
    state: SessionState,
    intent: str,
    value: object = None,
    *,
    bank: QuestionBank,
    strict: bool = True,
) -> SessionState:
    """
    Pure stage machine: hero -> introduction -> psychometric -> technical
    -> wiscar -> results, and results -> hero on restart.
    Intents that do not apply to the current stage return ``state`` itself.
    Raises ValidationError only for an answer outside the question's options.
    """
    stage = state.stage
    new = state

    if intent == "start" and stage is Stage.HERO:
        new = replace(state, stage=Stage.INTRODUCTION)
    elif intent == "next" and stage is Stage.INTRODUCTION:
        nxt = _NEXT_STAGE[stage]
        new = replace(state, stage=nxt, section=_enter(nxt, bank))
    elif intent == "restart" and stage is Stage.RESULTS:
        new = SessionState()
        log.info("session restarted; scores cleared")
        return new
    elif stage in SECTION_STAGES and state.section is not None:
        sec = state.section
        if intent == "answer":
            picked = select_answer(sec, value, strict=strict)
            if picked is not sec:
                new = replace(state, section=picked)
        elif intent == "previous":
            moved = go_to_previous(sec)
            if moved is not sec:
                new = replace(state, section=moved)
        elif intent == "next":
            moved, score = go_to_next(sec)
            if score is not None:
                nxt = _NEXT_STAGE[stage]
                new = replace(state, stage=nxt, section=_enter(nxt, bank), **{stage.value: score})
                log.info("stage %s -> %s", stage.value, nxt.value)
            elif moved is not sec:
                new = replace(state, section=moved)

    if new is state:
        log.debug("intent %s refused at stage %s", intent, stage.value)
        return state
    return replace(new, events=state.events + (_event(intent, state, new, value),))


class AssessmentSession:
    """Owns one run's SessionState and swaps it on every transition."""

    def __init__(self, bank: Optional[QuestionBank] = None, strict: Optional[bool] = None):
        if bank is None:
            cfg = load_config()
            bank = load_bank(cfg.get("BANK_PATH"))
            if strict is None:
                strict = bool(cfg.get("STRICT_ANSWERS", STRICT_ANSWERS))
        self.bank = bank
        self.strict = STRICT_ANSWERS if strict is None else bool(strict)
        self.state = SessionState()

    def _apply(self, intent: str, value: object = None) -> bool:
        before = self.state
        self.state = apply(before, intent, value, bank=self.bank, strict=self.strict)
        return self.state is not before

    # ---- intents ----
    def start(self) -> bool:
        return self._apply("start")

    def next(self) -> bool:
        return self._apply("next")

    def previous(self) -> bool:
        return self._apply("previous")

    def select_answer(self, value: object) -> None:
        self._apply("answer", value)

    def restart(self) -> bool:
        return self._apply("restart")

    # ---- views ----
    @property
    def stage(self) -> Stage:
        return self.state.stage

    def current_question(self) -> Optional[Question]:
        sec = self.state.section
        if sec is None or sec.completed:
            return None
        return sec.current_question

    def current_answer(self) -> Optional[str]:
        sec = self.state.section
        return sec.current_answer() if sec is not None else None

    def can_advance(self) -> bool:
        sec = self.state.section
        if self.stage in SECTION_STAGES:
            return sec is not None and sec.has_answer
        return self.stage in (Stage.HERO, Stage.INTRODUCTION)

    def progress(self) -> Optional[Tuple[int, int]]:
        sec = self.state.section
        return sec.progress() if sec is not None else None

    def step(self) -> Tuple[int, int]:
        return _STEP.get(self.stage, 0), TOTAL_STEPS

    def combined(self) -> ResultScore:
        return self.state.combined()

    def results(self) -> Optional[ResultsView]:
        if self.stage is not Stage.RESULTS:
            return None
        return render(self.combined())

    def events(self) -> List[Dict[str, object]]:
        return list(self.state.events)
