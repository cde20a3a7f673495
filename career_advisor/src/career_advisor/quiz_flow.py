"""
Career Quiz Flow

One pass through the fixed question set:

1. IN_PROGRESS - one question at a time, answers accumulate in order
2. PENDING     - last question answered, analysis requested
3. READY       - analysis available (terminal)

Answering is synchronous bookkeeping until the last question. The last answer
starts the analysis call and the persistence of the results; the two do not
depend on each other and a persistence failure never changes the analysis.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from career_advisor.auth_store import SessionStateHolder
from career_advisor.background import TaskTracker
from career_advisor.career_ai import CareerAI
from career_advisor.quiz_questions import QUIZ_QUESTIONS, QuizQuestion
from career_advisor.repository import CareerRepository

logger = logging.getLogger(__name__)


class QuizStage(Enum):
    IN_PROGRESS = "in_progress"
    PENDING = "pending"
    READY = "ready"


@dataclass(frozen=True)
class QuizResponse:
    question: str
    answer: str


class QuizError(Exception):
    pass


class InvalidAnswerError(QuizError):
    """The answer is not one of the current question's options."""


class QuizCompletedError(QuizError):
    """The quiz has no more questions to answer."""


class QuizFlow:
    """State of one quiz attempt."""

    def __init__(
        self,
        ai: CareerAI,
        repository: CareerRepository,
        session: SessionStateHolder,
        tasks: TaskTracker,
        questions: Sequence[QuizQuestion] = QUIZ_QUESTIONS,
    ):
        if not questions:
            raise ValueError("A quiz needs at least one question")
        self.ai = ai
        self.repository = repository
        self.session = session
        self.tasks = tasks
        self.questions: Tuple[QuizQuestion, ...] = tuple(questions)

        self.stage = QuizStage.IN_PROGRESS
        self.current_index = 0
        self.analysis: Optional[str] = None
        self._responses: List[QuizResponse] = []

    @property
    def total_questions(self) -> int:
        return len(self.questions)

    @property
    def completed(self) -> bool:
        return self.stage != QuizStage.IN_PROGRESS

    @property
    def current_question(self) -> Optional[QuizQuestion]:
        if self.completed:
            return None
        return self.questions[self.current_index]

    @property
    def progress(self) -> float:
        """Share of the progress bar filled for the question on screen."""
        if self.completed:
            return 1.0
        return (self.current_index + 1) / self.total_questions

    @property
    def responses(self) -> Tuple[QuizResponse, ...]:
        return tuple(self._responses)

    async def answer(self, option: str) -> Optional[str]:
        """
        Record the answer to the current question.

        Returns the analysis once the last question has been answered,
        otherwise None.

        Raises:
            QuizCompletedError: if every question is already answered
            InvalidAnswerError: if ``option`` is not offered by the question
        """
        question = self.current_question
        if question is None:
            raise QuizCompletedError("The quiz is already complete")
        if option not in question.options:
            raise InvalidAnswerError(f"{option!r} is not an option of question {question.id}")

        self._responses.append(QuizResponse(question=question.text, answer=option))

        if self.current_index < self.total_questions - 1:
            self.current_index += 1
            return None

        return await self._complete()

    async def _complete(self) -> str:
        self.stage = QuizStage.PENDING
        responses = self.responses
        logger.info(f"📝 [QuizFlow] Quiz complete with {len(responses)} answers, requesting analysis")

        user = self.session.user
        if user:
            self.tasks.spawn(
                self.repository.save_quiz_result(user.id, responses),
                f"save-quiz-result:{user.id}",
            )
        else:
            logger.warning("⚠️ [QuizFlow] No signed-in user, quiz results not saved")

        self.analysis = await self.ai.analyze_quiz_responses(responses)
        self.stage = QuizStage.READY
        return self.analysis

    def to_dict(self) -> dict:
        question = self.current_question
        return {
            "stage": self.stage.value,
            "current_index": self.current_index,
            "total_questions": self.total_questions,
            "progress": round(self.progress, 4),
            "question": question.to_dict() if question else None,
            "answered": len(self._responses),
            "analysis": self.analysis,
        }
