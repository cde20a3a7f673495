"""Career AI Advisor: quiz, chat advisor and career search."""

__version__ = "1.0.0"
