from __future__ import annotations

import pytest

from fit_core.engine import AssessmentSession, SessionState, Stage, apply
from fit_core.types import ResultScore
from fit_core.validators import ValidationError

from tests.conftest import complete_section, run_to_results


def test_stages_advance_strictly_in_order(bank):
    sess = AssessmentSession(bank=bank, strict=True)
    seen = [sess.stage]
    assert sess.start(); seen.append(sess.stage)
    assert sess.next(); seen.append(sess.stage)
    complete_section(sess, lambda q: "3"); seen.append(sess.stage)
    complete_section(sess, lambda q: q.correct_value()); seen.append(sess.stage)
    complete_section(sess, lambda q: "3"); seen.append(sess.stage)
    assert seen == [
        Stage.HERO,
        Stage.INTRODUCTION,
        Stage.PSYCHOMETRIC,
        Stage.TECHNICAL,
        Stage.WISCAR,
        Stage.RESULTS,
    ]


def test_intents_outside_their_stage_are_refused(bank):
    state = SessionState()
    for intent in ("next", "previous", "restart", "answer"):
        assert apply(state, intent, "1", bank=bank) is state
    intro = apply(state, "start", bank=bank)
    assert intro.stage is Stage.INTRODUCTION
    assert apply(intro, "start", bank=bank) is intro
    assert apply(intro, "restart", bank=bank) is intro
    assert apply(intro, "unknown", bank=bank) is intro


def test_section_next_without_answer_keeps_state(bank):
    sess = AssessmentSession(bank=bank)
    sess.start(); sess.next()
    before = sess.state
    assert sess.next() is False
    assert sess.state is before
    assert sess.progress() == (1, 10)


def test_no_jump_from_psychometric_to_results(bank):
    sess = AssessmentSession(bank=bank)
    sess.start(); sess.next()
    complete_section(sess, lambda q: "5")
    assert sess.stage is Stage.TECHNICAL
    assert sess.results() is None
    assert sess.state.technical is None and sess.state.wiscar is None


def test_all_max_answers_end_to_end(bank):
    sess = AssessmentSession(bank=bank)
    run_to_results(sess, likert="5", technical_correct=True)
    combined = sess.combined()
    assert combined.psychometric_fit == pytest.approx(100.0)
    assert combined.technical_readiness == pytest.approx(100.0)
    assert combined.overall_confidence == pytest.approx(100.0)
    view = sess.results()
    assert view.tier == "Yes"
    assert view.confidence_percent == 100


def test_low_answers_end_to_end(bank):
    sess = AssessmentSession(bank=bank)
    run_to_results(sess, likert="1", technical_correct=False)
    combined = sess.combined()
    assert combined.psychometric_fit == pytest.approx(20.0)
    assert combined.technical_readiness == 0.0
    assert combined.overall_confidence == pytest.approx(20.0)
    assert sess.results().tier == "Consider Alternatives"


def test_restart_clears_scores(bank):
    sess = AssessmentSession(bank=bank)
    run_to_results(sess)
    assert sess.state.has_scores()
    assert sess.restart()
    assert sess.stage is Stage.HERO
    assert not sess.state.has_scores()
    assert sess.combined() == ResultScore()
    assert sess.events() == []


def test_section_records_merge_without_overwriting(bank):
    sess = AssessmentSession(bank=bank)
    sess.start(); sess.next()
    complete_section(sess, lambda q: "4")
    psych = sess.state.psychometric
    complete_section(sess, lambda q: q.correct_value())
    assert sess.state.psychometric is psych
    combined = sess.combined()
    assert combined.psychometric_fit == pytest.approx(80.0)
    assert combined.technical_readiness == pytest.approx(100.0)
    # WISCAR not done yet: its fields read as zero
    assert combined.overall_confidence == 0.0
    assert combined.c_score == 0.0


def test_invalid_answer_raises_and_keeps_state(bank):
    sess = AssessmentSession(bank=bank, strict=True)
    sess.start(); sess.next()
    before = sess.state
    with pytest.raises(ValidationError):
        sess.select_answer("7")
    assert sess.state is before


def test_step_header_per_stage(bank):
    sess = AssessmentSession(bank=bank)
    assert sess.step() == (0, 4)
    sess.start(); sess.next()
    assert sess.step() == (1, 4)
    complete_section(sess, lambda q: "3")
    assert sess.step() == (2, 4)


def test_events_record_accepted_transitions(bank):
    sess = AssessmentSession(bank=bank)
    sess.start(); sess.next()
    sess.next()  # refused, not recorded
    sess.select_answer("4")
    events = sess.events()
    assert [e["intent"] for e in events] == ["start", "next", "answer"]
    assert events[-1]["question_id"] == "p1"
    assert events[-1]["value"] == "4"
    assert events[1]["stage_before"] == "introduction"
    assert events[1]["stage_after"] == "psychometric"


def test_answer_set_is_scoped_to_one_section(synthetic_bank):
    sess = AssessmentSession(bank=synthetic_bank)
    sess.start(); sess.next()
    complete_section(sess, lambda q: "5")
    assert sess.stage is Stage.TECHNICAL
    assert sess.state.section.answers == {}
    assert sess.progress() == (1, len(synthetic_bank.technical))


def test_lenient_session_refuses_blank_answer(bank):
    sess = AssessmentSession(bank=bank, strict=False)
    sess.start(); sess.next()
    sess.select_answer("  ")
    assert sess.current_answer() is None
    assert not sess.can_advance()
    assert sess.next() is False
    assert [e["intent"] for e in sess.events()] == ["start", "next"]
