"""Request-scoped localization engine."""

__version__ = "0.1.0"
