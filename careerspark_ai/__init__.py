"""CareerSpark AI: resume analysis and job matching from LLM output."""

__version__ = "0.1.0"
