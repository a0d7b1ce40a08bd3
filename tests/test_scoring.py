from __future__ import annotations

import itertools

import pytest

from fit_core.scoring import score_likert, score_psychometric, score_technical, score_wiscar


def test_likert_scores_stay_within_bounds(bank):
    questions = bank.psychometric
    for low, high in itertools.product("12345", repeat=2):
        answers = {q.id: (low if i % 2 else high) for i, q in enumerate(questions)}
        groups, overall = score_likert(questions, answers)
        assert all(0.0 <= v <= 100.0 for v in groups.values())
        assert 0.0 <= overall <= 100.0


def test_likert_group_formula_and_unweighted_mean(bank):
    # interest: p1, p2, p8 ; motivation: p9, p10
    answers = {"p1": "5", "p2": "4", "p8": "3", "p9": "1", "p10": "2"}
    res = score_psychometric(bank.psychometric, answers)
    assert res.categories["interest"] == pytest.approx(12 / 15 * 100)
    assert res.categories["motivation"] == pytest.approx(3 / 10 * 100)
    assert res.psychometric_fit == pytest.approx((80.0 + 30.0) / 2)


def test_unanswered_categories_are_omitted_not_zero(bank):
    res = score_psychometric(bank.psychometric, {"p6": "4"})
    assert res.categories == pytest.approx({"cognitive": 80.0})
    assert res.psychometric_fit == pytest.approx(80.0)
    assert "personality" not in res.as_dict()


def test_unanswered_questions_do_not_dilute_their_category(bank):
    # only one of the four personality items answered
    res = score_psychometric(bank.psychometric, {"p3": "5"})
    assert res.categories["personality"] == pytest.approx(100.0)


def test_empty_likert_section_falls_back_to_zero(bank):
    psych = score_psychometric(bank.psychometric, {})
    wiscar = score_wiscar(bank.wiscar, {})
    assert psych.psychometric_fit == 0.0 and psych.categories == {}
    assert wiscar.overall_confidence == 0.0 and wiscar.dimensions == {}


def test_unparseable_likert_values_count_as_unanswered(bank):
    res = score_wiscar(bank.wiscar, {"w1": "banana", "w2": "9", "i1": "3"})
    assert res.dimensions == pytest.approx({"I": 60.0})


def test_wiscar_emits_named_dimension_fields(bank):
    res = score_wiscar(bank.wiscar, {q.id: "4" for q in bank.wiscar})
    d = res.as_dict()
    for key in ("wScore", "iScore", "sScore", "cScore", "aScore", "rScore"):
        assert d[key] == pytest.approx(80.0)
    assert d["overallConfidence"] == pytest.approx(80.0)


def test_technical_empty_answer_set_is_zero(bank):
    res = score_technical(bank.technical, {})
    assert res.technical_readiness == 0.0
    assert res.aptitude_score == res.prerequisite_score == res.domain_score == 0.0


def test_technical_all_correct_is_full_marks(bank):
    res = score_technical(bank.technical, {q.id: q.correct_value() for q in bank.technical})
    assert res.technical_readiness == pytest.approx(100.0)
    assert res.aptitude_score == pytest.approx(100.0)
    assert res.prerequisite_score == pytest.approx(100.0)
    assert res.domain_score == pytest.approx(100.0)


def test_switching_one_answer_to_correct_adds_one_question_share(bank):
    questions = bank.technical
    wrong = {q.id: next(o.value for o in q.options if not o.is_correct) for q in questions}
    before = score_technical(questions, wrong).technical_readiness
    target = questions[3]
    fixed = dict(wrong, **{target.id: target.correct_value()})
    after = score_technical(questions, fixed).technical_readiness
    assert after - before == pytest.approx(100 / len(questions))


def test_per_type_scores_use_full_type_totals(bank):
    # t2, t4, t7 are aptitude; only t2 answered correctly
    res = score_technical(bank.technical, {"t2": "c"})
    assert res.aptitude_score == pytest.approx(100 / 3)
    assert res.technical_readiness == pytest.approx(100 / 8)


def test_type_without_questions_reports_zero():
    from tests.conftest import build_synthetic_bank

    bank = build_synthetic_bank(technical_types=["aptitude"])
    res = score_technical(bank.technical, {q.id: "a" for q in bank.technical})
    assert res.aptitude_score == pytest.approx(100.0)
    assert res.prerequisite_score == 0.0
    assert res.domain_score == 0.0
    assert res.technical_readiness == pytest.approx(100.0)


def test_technical_scores_stay_within_bounds(synthetic_bank):
    questions = synthetic_bank.technical
    for picks in itertools.product("abc", repeat=3):
        answers = {q.id: picks[i % 3] for i, q in enumerate(questions)}
        res = score_technical(questions, answers)
        for v in (res.technical_readiness, res.aptitude_score, res.prerequisite_score, res.domain_score):
            assert 0.0 <= v <= 100.0
