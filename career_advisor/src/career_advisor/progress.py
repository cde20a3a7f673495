"""
Dashboard Progress

Read model over the persisted quiz results of one user.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

from career_advisor.quiz_questions import QuizCategory, questions_in
from career_advisor.repository import CareerRepository

logger = logging.getLogger(__name__)

# Skill answers that point at a concrete career path
SKILL_CAREER_PATHS = {
    "Programming and software development": "Software Development",
    "Complex algorithmic challenges": "Software Development",
    "Data analysis and statistics": "Data Science",
    "Data-driven analysis": "Data Science",
    "Design and visual arts": "UX Design",
    "Visual and interface design": "UX Design",
    "Writing and content creation": "Content Strategy",
    "People and process optimization": "Operations Management",
}

SKILL_QUESTIONS = {q.text for q in questions_in(QuizCategory.SKILLS)}


@dataclass
class ProgressSummary:
    quizzes_taken: int = 0
    skills_identified: int = 0
    recommended_paths: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "quizzes_taken": self.quizzes_taken,
            "skills_identified": self.skills_identified,
            "recommended_paths": list(self.recommended_paths),
        }


def summarize_progress(results: Iterable[Dict[str, Any]]) -> ProgressSummary:
    """
    Build the dashboard counters from quiz result rows.

    Args:
        results: rows of the quiz_results table, each with an ``answers``
            list of {"question", "answer"} pairs

    Returns:
        ProgressSummary with the number of quizzes, distinct skill answers
        and the career paths those skills map to (first seen first)
    """
    quizzes = 0
    skills: List[str] = []
    paths: List[str] = []

    for row in results:
        quizzes += 1
        for pair in row.get("answers") or []:
            if pair.get("question") not in SKILL_QUESTIONS:
                continue
            answer = pair.get("answer")
            if answer and answer not in skills:
                skills.append(answer)
            path = SKILL_CAREER_PATHS.get(answer)
            if path and path not in paths:
                paths.append(path)

    return ProgressSummary(
        quizzes_taken=quizzes,
        skills_identified=len(skills),
        recommended_paths=paths,
    )


async def load_progress(repository: CareerRepository, user_id: str) -> ProgressSummary:
    results = await repository.list_quiz_results(user_id)
    summary = summarize_progress(results)
    logger.info(f"📊 [Progress] {summary.quizzes_taken} quizzes, {summary.skills_identified} skills for {user_id[:20]}")
    return summary
