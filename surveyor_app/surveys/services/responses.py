"""Recording and aggregating survey responses.

A response is not stored as such: it is every Answer sharing a survey and a
respondent id.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from django.db import transaction

from ..codec import encode_answer
from ..exceptions import (
    InvalidQuestionReference,
    SurveyNotAvailable,
    ValidationFailure,
)
from ..models import Answer, Survey

logger = logging.getLogger(__name__)


def ensure_accepting_responses(survey: Survey) -> None:
    if not survey.is_accepting_responses():
        raise SurveyNotAvailable()


def record_response(
    survey: Survey, respondent_id: str, answers: Iterable[tuple[Any, Any]]
) -> str:
    """Store one submission and return its respondent id.

    ``answers`` holds ``(question_id, value)`` pairs. Either every answer is
    written or none is.
    """
    ensure_accepting_responses(survey)

    pairs = list(answers)
    if not pairs:
        raise ValidationFailure("No answers provided.", field="answers")

    questions = {q.id: q for q in survey.questions.all()}
    foreign = [qid for qid, _ in pairs if qid not in questions]
    if foreign:
        logger.info(
            "Rejecting submission for survey %s: questions %s are not in the survey",
            survey.pk,
            foreign,
        )
        raise InvalidQuestionReference(foreign)

    rows = []
    for qid, value in pairs:
        question = questions[qid]
        rows.append(
            Answer(
                question=question,
                survey_id=question.survey_id,
                respondent_id=respondent_id,
                **encode_answer(question, value),
            )
        )

    with transaction.atomic():
        Answer.objects.bulk_create(rows)

    logger.info(
        "Recorded %d answers for survey %s from respondent %s",
        len(rows),
        survey.pk,
        respondent_id,
    )
    return respondent_id


def list_responses(survey: Survey) -> dict[str, list[Answer]]:
    """Group the survey's answers by respondent id, in storage order."""
    grouped: dict[str, list[Answer]] = {}
    answers = (
        Answer.objects.filter(survey=survey).select_related("question").order_by("id")
    )
    for answer in answers:
        grouped.setdefault(answer.respondent_id, []).append(answer)
    return grouped


def question_count(survey: Survey) -> int:
    return survey.question_count


def response_count(survey: Survey) -> int:
    return survey.response_count
