"""
Interview assessment tests.

Guards against:
1. Users reading or deleting someone else's quiz history
2. Client-reported scores instead of server-side scoring
3. A failed tip call losing the quiz result
"""
from datetime import datetime, timedelta

import pytest

from career_insights.context import RequestContext
from career_insights.exceptions import AssessmentNotFound, ProfileNotFound, Unauthorized
from career_insights.models import Assessment, User
from career_insights.services.assessment_service import (
    AssessmentService,
    QuizAnswer,
    build_improvement_prompt,
    score_answers,
)

NOW = datetime(2026, 10, 18, 9, 0, 0)
OWNER = RequestContext(user_id="user_owner")
OTHER = RequestContext(user_id="user_other")


def _add_user(db, context, industry="tech-software"):
    user = User(external_user_id=context.user_id, industry=industry, skills=[])
    db.add(user)
    db.commit()
    return user


def _answers(correct: int, wrong: int):
    right = [QuizAnswer(question=f"Q{i}", answer="A", user_answer="A") for i in range(correct)]
    missed = [QuizAnswer(question=f"W{i}", answer="A", user_answer="B") for i in range(wrong)]
    return right + missed


def _service(db, generator=None, now=NOW):
    return AssessmentService(db, generator, clock=lambda: now)


# ────────────────────────────────────────────
# SCORING
# ────────────────────────────────────────────

class TestScoring:

    def test_score_is_percent_correct(self):
        assert score_answers(_answers(3, 1)) == 75.0

    def test_empty_quiz_scores_zero(self):
        assert score_answers([]) == 0.0

    def test_prompt_lists_wrong_answers(self):
        prompt = build_improvement_prompt("finance", _answers(0, 1))
        assert '"W0"' in prompt
        assert "finance interview questions" in prompt


# ────────────────────────────────────────────
# SAVE
# ────────────────────────────────────────────

class TestSave:

    def test_all_correct_needs_no_tip(self, db, make_generator):
        _add_user(db, OWNER)
        generator = make_generator()

        assessment = _service(db, generator).save_quiz_result(OWNER, _answers(4, 0))

        assert assessment.quiz_score == 100.0
        assert assessment.improvement_tip is None
        assert generator.client.calls == []
        assert all(q["is_correct"] for q in assessment.questions)

    def test_wrong_answers_get_a_tip(self, db, make_generator):
        _add_user(db, OWNER)
        generator = make_generator("  Practice window functions.  ")

        assessment = _service(db, generator).save_quiz_result(OWNER, _answers(1, 1))

        assert assessment.quiz_score == 50.0
        assert assessment.improvement_tip == "Practice window functions."
        assert assessment.created_at == NOW

    def test_tip_failure_still_saves(self, db, make_generator):
        _add_user(db, OWNER)
        generator = make_generator(ConnectionError("refused"))

        assessment = _service(db, generator).save_quiz_result(OWNER, _answers(0, 2))

        assert assessment.improvement_tip is None
        assert db.query(Assessment).count() == 1

    def test_requires_identity(self, db):
        with pytest.raises(Unauthorized):
            _service(db).save_quiz_result(RequestContext(), _answers(1, 0))
        with pytest.raises(ProfileNotFound):
            _service(db).save_quiz_result(OWNER, _answers(1, 0))


# ────────────────────────────────────────────
# LIST / STATS / DELETE
# ────────────────────────────────────────────

class TestHistory:

    def test_list_is_own_and_oldest_first(self, db):
        _add_user(db, OWNER)
        _add_user(db, OTHER)
        _service(db, now=NOW).save_quiz_result(OWNER, _answers(1, 1))
        _service(db, now=NOW - timedelta(days=1)).save_quiz_result(OWNER, _answers(2, 0))
        _service(db).save_quiz_result(OTHER, _answers(0, 1))

        scores = [a.quiz_score for a in _service(db).list_assessments(OWNER)]

        assert scores == [100.0, 50.0]

    def test_stats(self, db):
        _add_user(db, OWNER)
        assert _service(db).get_stats(OWNER)["total"] == 0

        _service(db, now=NOW - timedelta(days=1)).save_quiz_result(OWNER, _answers(2, 0))
        _service(db, now=NOW).save_quiz_result(OWNER, _answers(1, 1))

        assert _service(db).get_stats(OWNER) == {
            "total": 2,
            "average_score": 75.0,
            "latest_score": 50.0,
            "questions_practiced": 4,
        }

    def test_delete_own(self, db):
        _add_user(db, OWNER)
        assessment = _service(db).save_quiz_result(OWNER, _answers(1, 0))

        _service(db).delete_assessment(OWNER, assessment.id)

        assert db.query(Assessment).count() == 0

    def test_cannot_delete_someone_elses(self, db):
        _add_user(db, OWNER)
        _add_user(db, OTHER)
        assessment = _service(db).save_quiz_result(OWNER, _answers(1, 0))

        with pytest.raises(AssessmentNotFound):
            _service(db).delete_assessment(OTHER, assessment.id)
        assert db.query(Assessment).count() == 1

    def test_delete_unknown_id(self, db):
        _add_user(db, OWNER)
        with pytest.raises(AssessmentNotFound):
            _service(db).delete_assessment(OWNER, 999)

    def test_delete_requires_identity(self, db):
        with pytest.raises(Unauthorized):
            _service(db).delete_assessment(RequestContext(), 1)
