"""
Unit Tests for the Career Quiz Flow

Tests question ordering, answer accumulation, completion and the
analysis/persistence fan-out of the last answer.
"""

import asyncio

import pytest

from career_advisor.prompts import ANALYSIS_FALLBACK
from career_advisor.quiz_flow import (
    InvalidAnswerError,
    QuizCompletedError,
    QuizFlow,
    QuizResponse,
    QuizStage,
)
from career_advisor.quiz_questions import QUIZ_QUESTIONS, QuizCategory
from career_advisor.repository import QUIZ_RESULTS_TABLE

from conftest import BlockingLLMClient, FakeLLMClient, FlakyRepository


class TestQuizQuestions:
    """The static question set."""

    def test_sixteen_questions_in_order(self):
        assert [q.id for q in QUIZ_QUESTIONS] == list(range(1, 17))

    def test_every_category_has_two_questions(self):
        for category in QuizCategory:
            assert len([q for q in QUIZ_QUESTIONS if q.category == category]) == 2

    def test_options_are_between_two_and_four(self):
        for question in QUIZ_QUESTIONS:
            assert 2 <= len(question.options) <= 4


class TestQuizFlow:
    """Test suite for QuizFlow."""

    @pytest.fixture
    def quiz(self, ai, repository, holder, tasks):
        return QuizFlow(ai, repository, holder, tasks)

    def test_starts_at_first_question(self, quiz):
        assert quiz.stage == QuizStage.IN_PROGRESS
        assert quiz.current_index == 0
        assert quiz.current_question.id == 1
        assert quiz.progress == pytest.approx(1 / 16)
        assert quiz.responses == ()

    @pytest.mark.asyncio
    async def test_answer_advances_one_question(self, quiz, llm):
        result = await quiz.answer("Data analysis and statistics")

        assert result is None
        assert quiz.current_index == 1
        assert quiz.responses == (
            QuizResponse(
                question="Which technical skills do you enjoy using or learning?",
                answer="Data analysis and statistics",
            ),
        )
        assert llm.requests == []

    @pytest.mark.asyncio
    async def test_invalid_answer_changes_nothing(self, quiz):
        with pytest.raises(InvalidAnswerError):
            await quiz.answer("Juggling")

        assert quiz.current_index == 0
        assert quiz.responses == ()

    @pytest.mark.asyncio
    async def test_full_traversal_completes_on_last_answer(self, quiz, holder, ada, llm, tasks):
        holder.set_user(ada)
        seen_indexes = []

        for question in QUIZ_QUESTIONS:
            assert quiz.stage == QuizStage.IN_PROGRESS
            seen_indexes.append(quiz.current_index)
            await quiz.answer(question.options[-1])
            assert len(quiz.responses) == len(seen_indexes)

        await tasks.drain()

        assert seen_indexes == list(range(16))
        assert quiz.stage == QuizStage.READY
        assert quiz.current_question is None
        assert quiz.analysis == "## Career Recommendations\n- Data Scientist"

        # Exactly one analysis call carrying all 16 pairs in order
        assert len(llm.requests) == 1
        body = llm.requests[0]["messages"][1]["content"]
        blocks = body.split("\n\n")
        assert len(blocks) == 16
        for block, question in zip(blocks, QUIZ_QUESTIONS):
            assert block == f"Question: {question.text}\nAnswer: {question.options[-1]}"

    @pytest.mark.asyncio
    async def test_completion_persists_results(self, quiz, holder, repository, ada, tasks):
        holder.set_user(ada)

        for question in QUIZ_QUESTIONS:
            await quiz.answer(question.options[0])
        await tasks.drain()

        rows = repository._tables[QUIZ_RESULTS_TABLE]
        assert len(rows) == 1
        assert rows[0]["user_id"] == ada.id
        assert rows[0]["answers"][0] == {
            "question": QUIZ_QUESTIONS[0].text,
            "answer": QUIZ_QUESTIONS[0].options[0],
        }
        assert len(rows[0]["answers"]) == 16

    @pytest.mark.asyncio
    async def test_answering_after_completion_raises(self, quiz):
        for question in QUIZ_QUESTIONS:
            await quiz.answer(question.options[0])

        with pytest.raises(QuizCompletedError):
            await quiz.answer(QUIZ_QUESTIONS[0].options[0])
        assert len(quiz.responses) == 16

    @pytest.mark.asyncio
    async def test_persistence_failure_keeps_analysis(self, ai, holder, ada, tasks):
        repository = FlakyRepository(failing={"save_quiz_result"})
        quiz = QuizFlow(ai, repository, holder, tasks)
        holder.set_user(ada)

        for question in QUIZ_QUESTIONS:
            await quiz.answer(question.options[1])
        await tasks.drain()

        assert quiz.stage == QuizStage.READY
        assert quiz.analysis == "## Career Recommendations\n- Data Scientist"
        assert [f.label for f in tasks.failures] == [f"save-quiz-result:{ada.id}"]

    @pytest.mark.asyncio
    async def test_analysis_failure_shows_fallback(self, settings, repository, holder, tasks):
        from career_advisor.career_ai import CareerAI

        ai = CareerAI(settings, llm_client=FakeLLMClient(error=ConnectionError("timeout")))
        quiz = QuizFlow(ai, repository, holder, tasks)

        for question in QUIZ_QUESTIONS:
            await quiz.answer(question.options[2])

        assert quiz.stage == QuizStage.READY
        assert quiz.analysis == ANALYSIS_FALLBACK

    @pytest.mark.asyncio
    async def test_no_user_skips_persistence(self, quiz, repository, tasks):
        for question in QUIZ_QUESTIONS:
            await quiz.answer(question.options[0])
        await tasks.drain()

        assert repository._tables[QUIZ_RESULTS_TABLE] == []
        assert quiz.stage == QuizStage.READY

    def test_to_dict_reports_current_question(self, quiz):
        state = quiz.to_dict()

        assert state["stage"] == "in_progress"
        assert state["total_questions"] == 16
        assert state["question"]["category"] == "skills"
        assert state["analysis"] is None

    @pytest.mark.asyncio
    async def test_results_saved_while_analysis_pending(self, settings, repository, holder, ada, tasks):
        from career_advisor.career_ai import CareerAI

        llm = BlockingLLMClient(content="## Career Recommendations\n- Architect")
        quiz = QuizFlow(CareerAI(settings, llm_client=llm), repository, holder, tasks)
        holder.set_user(ada)
        for question in QUIZ_QUESTIONS[:-1]:
            await quiz.answer(question.options[0])

        finishing = asyncio.create_task(quiz.answer(QUIZ_QUESTIONS[-1].options[0]))
        await asyncio.sleep(0)

        assert quiz.stage == QuizStage.PENDING
        assert quiz.current_question is None
        assert quiz.analysis is None
        assert quiz.to_dict()["stage"] == "pending"

        # The save runs while the completion is still held back
        await asyncio.sleep(0)
        rows = repository._tables[QUIZ_RESULTS_TABLE]
        assert len(rows) == 1
        assert len(rows[0]["answers"]) == 16
        assert quiz.stage == QuizStage.PENDING

        llm.release.set()
        assert await finishing == "## Career Recommendations\n- Architect"
        assert quiz.stage == QuizStage.READY
        await tasks.drain()
