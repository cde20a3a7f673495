"""
Career Quiz Questions

The fixed, ordered question set of the career assessment. Two questions per
category, four options each.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple


class QuizCategory(Enum):
    SKILLS = "skills"
    INTERESTS = "interests"
    PERSONALITY = "personality"
    ENVIRONMENT = "environment"
    VALUES = "values"
    GOALS = "goals"
    LEARNING = "learning"
    CHALLENGES = "challenges"


@dataclass(frozen=True)
class QuizQuestion:
    id: int
    text: str
    options: Tuple[str, ...]
    category: QuizCategory

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "text": self.text,
            "options": list(self.options),
            "category": self.category.value,
        }


QUIZ_QUESTIONS: List[QuizQuestion] = [
    # Technical skills
    QuizQuestion(
        id=1,
        text="Which technical skills do you enjoy using or learning?",
        category=QuizCategory.SKILLS,
        options=(
            "Programming and software development",
            "Data analysis and statistics",
            "Design and visual arts",
            "Writing and content creation",
        ),
    ),
    QuizQuestion(
        id=2,
        text="What type of technical problems do you prefer solving?",
        category=QuizCategory.SKILLS,
        options=(
            "Complex algorithmic challenges",
            "Visual and interface design",
            "Data-driven analysis",
            "People and process optimization",
        ),
    ),
    # Work environment
    QuizQuestion(
        id=3,
        text="What's your ideal work environment?",
        category=QuizCategory.ENVIRONMENT,
        options=(
            "Fast-paced startup culture",
            "Structured corporate setting",
            "Creative studio environment",
            "Remote/flexible workspace",
        ),
    ),
    QuizQuestion(
        id=4,
        text="How do you prefer to collaborate with others?",
        category=QuizCategory.ENVIRONMENT,
        options=(
            "Small, agile teams",
            "Large, structured teams",
            "Independent work with occasional collaboration",
            "Cross-functional project teams",
        ),
    ),
    # Interests
    QuizQuestion(
        id=5,
        text="What type of projects excite you the most?",
        category=QuizCategory.INTERESTS,
        options=(
            "Building new technologies",
            "Solving business problems",
            "Creating user experiences",
            "Analyzing trends and patterns",
        ),
    ),
    QuizQuestion(
        id=6,
        text="Which industry interests you the most?",
        category=QuizCategory.INTERESTS,
        options=(
            "Technology and software",
            "Finance and business",
            "Healthcare and science",
            "Media and entertainment",
        ),
    ),
    # Personality
    QuizQuestion(
        id=7,
        text="How do you approach problem-solving?",
        category=QuizCategory.PERSONALITY,
        options=(
            "Systematic and analytical",
            "Creative and intuitive",
            "Collaborative and discussion-based",
            "Research and data-driven",
        ),
    ),
    QuizQuestion(
        id=8,
        text="How do you handle deadlines and pressure?",
        category=QuizCategory.PERSONALITY,
        options=(
            "Thrive under pressure",
            "Prefer structured planning",
            "Adaptable and flexible",
            "Need clear expectations",
        ),
    ),
    # Values
    QuizQuestion(
        id=9,
        text="What matters most to you in a career?",
        category=QuizCategory.VALUES,
        options=(
            "Innovation and creativity",
            "Stability and security",
            "Impact and purpose",
            "Growth and learning",
        ),
    ),
    QuizQuestion(
        id=10,
        text="What type of recognition motivates you?",
        category=QuizCategory.VALUES,
        options=(
            "Technical achievements",
            "Leadership opportunities",
            "Creative excellence",
            "Team success",
        ),
    ),
    # Goals
    QuizQuestion(
        id=11,
        text="Where do you see yourself in 5 years?",
        category=QuizCategory.GOALS,
        options=(
            "Technical expert/specialist",
            "Team leader/manager",
            "Independent consultant",
            "Entrepreneur/founder",
        ),
    ),
    QuizQuestion(
        id=12,
        text="What's your preferred career progression?",
        category=QuizCategory.GOALS,
        options=(
            "Deep technical expertise",
            "Business and strategy",
            "Creative direction",
            "Research and innovation",
        ),
    ),
    # Learning style
    QuizQuestion(
        id=13,
        text="How do you prefer to learn new skills?",
        category=QuizCategory.LEARNING,
        options=(
            "Self-paced online courses",
            "Structured classroom training",
            "Hands-on experimentation",
            "Mentorship and guidance",
        ),
    ),
    QuizQuestion(
        id=14,
        text="What's your preferred way of staying updated in your field?",
        category=QuizCategory.LEARNING,
        options=(
            "Reading technical documentation",
            "Following industry blogs and news",
            "Attending conferences and workshops",
            "Participating in online communities",
        ),
    ),
    # Challenges
    QuizQuestion(
        id=15,
        text="What type of challenges motivate you?",
        category=QuizCategory.CHALLENGES,
        options=(
            "Technical problem-solving",
            "Creative innovation",
            "Strategic planning",
            "Team leadership",
        ),
    ),
    QuizQuestion(
        id=16,
        text="How do you prefer to handle workplace conflicts?",
        category=QuizCategory.CHALLENGES,
        options=(
            "Direct communication",
            "Mediated discussion",
            "Systematic problem-solving",
            "Collaborative resolution",
        ),
    ),
]


def questions_in(category: QuizCategory) -> List[QuizQuestion]:
    return [q for q in QUIZ_QUESTIONS if q.category == category]
