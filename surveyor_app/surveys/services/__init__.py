"""
Survey services.

This package contains business logic for:
- Creating, updating and reordering questions (questions)
- Recording and aggregating respondent answers (responses)
"""

from .questions import (
    create_question,
    delete_question,
    list_questions,
    next_order,
    reorder_questions,
    update_question,
)
from .responses import (
    ensure_accepting_responses,
    list_responses,
    question_count,
    record_response,
    response_count,
)

__all__ = [
    "create_question",
    "delete_question",
    "ensure_accepting_responses",
    "list_questions",
    "list_responses",
    "next_order",
    "question_count",
    "record_response",
    "reorder_questions",
    "response_count",
    "update_question",
]
