"""
Prompt Templates

System prompts, user prompt builders and the fixed fallback replies used by
the completion client.
"""

from typing import Iterable

SYSTEM_PROMPT = """You are a career advisor AI assistant. Your responses should be well-formatted and easy to read.
Please structure your responses with:
- Clear headings using markdown (e.g., ## Key Points)
- Bullet points for lists
- Line breaks between sections
- Bold text for important points
- Organized sections with clear hierarchy

Keep your tone professional, supportive, and encouraging while maintaining clear formatting."""

CAREER_ANALYSIS_PROMPT = """As a career advisor, analyze the following quiz responses and provide career recommendations.
Format your response with the following structure:

## Career Recommendations
[List top career matches with explanations]

## Key Strengths
[Bullet points of identified strengths]

## Development Areas
[Areas for growth and learning]

## Next Steps
[Actionable recommendations]

Consider the user's skills, interests, personality traits, and preferred work environment.
Make the response visually organized and easy to read."""

GREETING_MESSAGE = """## Welcome to Career AI Assistant! 👋

I'm here to help you with:
- Career guidance and planning
- Skill development recommendations
- Industry insights and trends
- Job market analysis
- Professional growth strategies

How can I assist you today?"""

# Returned when the service is unreachable or misconfigured
CONNECTION_FALLBACK = (
    "I apologize, but I'm having trouble connecting to my AI service at the moment. "
    "Please try again later."
)
ANALYSIS_FALLBACK = (
    "I apologize, but I'm having trouble analyzing your responses at the moment. "
    "Please try again later."
)

# Returned when the service answers with an empty completion
EMPTY_CHAT_REPLY = "I apologize, but I'm having trouble generating a response at the moment."
EMPTY_CAREER_INFO = "I apologize, but I'm having trouble retrieving career information at the moment."
EMPTY_ANALYSIS = "I apologize, but I'm having trouble analyzing your responses at the moment."


def career_info_prompt(career: str) -> str:
    """Structured lookup request for a single career."""
    return f"""Provide comprehensive information about a career as a {career}. Format your response with the following structure:

## Role Overview
[Brief description of the role]

## Key Responsibilities
- [Bullet points of main duties]

## Required Skills & Qualifications
- [List of essential skills]
- [Educational requirements]

## Salary Range & Benefits
- Average salary range
- Common benefits

## Career Growth
- Potential career paths
- Advancement opportunities

## Industry Outlook
- Current trends
- Future prospects

Please ensure the response is well-formatted and easy to read."""


def format_quiz_responses(responses: Iterable) -> str:
    """Render (question, answer) pairs as the analysis request body."""
    return "\n\n".join(
        f"Question: {response.question}\nAnswer: {response.answer}"
        for response in responses
    )
