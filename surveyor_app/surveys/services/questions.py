"""Question store and reorder engine.

Ownership is checked by the callers (see ``surveys.permissions``); these
functions only enforce the data invariants of a survey's questions.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from django.db import transaction
from django.db.models import Max

from ..exceptions import EmptyReorderRequest, InvalidOrder, MissingOptions
from ..models import Question, Survey
from ..question_types import QuestionTypeSpec, get_type_spec

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = (
    "title",
    "description",
    "type",
    "options",
    "validation_rules",
    "is_required",
    "order",
)


def _safe_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    try:
        return int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None


def _check_options(spec: QuestionTypeSpec, options) -> None:
    if options is not None and not isinstance(options, (list, tuple)):
        raise MissingOptions("Options must be a list.")
    if spec.requires_options and not options:
        raise MissingOptions(f"Questions of type '{spec.tag.value}' require options.")


def _check_order(order) -> int:
    if isinstance(order, bool) or not isinstance(order, int):
        raise InvalidOrder("Order must be an integer.")
    if order < 0:
        raise InvalidOrder()
    return order


def next_order(survey: Survey) -> int:
    """One past the highest order in the survey, or 1 for an empty survey."""
    current = survey.questions.aggregate(highest=Max("order"))["highest"]
    return 1 if current is None else current + 1


def create_question(
    survey: Survey,
    *,
    title: str,
    type: str,
    description: str | None = None,
    options: list | None = None,
    validation_rules: dict | None = None,
    is_required: bool = False,
    order: int | None = None,
) -> Question:
    spec = get_type_spec(type)
    _check_options(spec, options)
    if order is None:
        order = next_order(survey)
    else:
        order = _check_order(order)
    question = Question.objects.create(
        survey=survey,
        title=title,
        description=description,
        type=spec.tag.value,
        options=list(options) if options is not None else None,
        validation_rules=validation_rules,
        is_required=bool(is_required),
        order=order,
    )
    logger.info(
        "Created %s question %s in survey %s at order %s",
        question.type,
        question.pk,
        survey.pk,
        order,
    )
    return question


def list_questions(survey: Survey) -> list[Question]:
    return list(survey.questions.order_by("order", "id"))


def update_question(question: Question, **changes) -> Question:
    unknown = set(changes) - set(UPDATABLE_FIELDS)
    if unknown:
        raise TypeError(f"Cannot update question fields: {sorted(unknown)}")

    spec = get_type_spec(changes.get("type", question.type))
    options = changes.get("options", question.options)
    if "type" in changes or "options" in changes:
        _check_options(spec, options)
    if "order" in changes:
        changes["order"] = _check_order(changes["order"])
    if "type" in changes:
        changes["type"] = spec.tag.value
    if changes.get("options") is not None:
        changes["options"] = list(changes["options"])

    for field, value in changes.items():
        setattr(question, field, value)
    question.save()
    return question


def delete_question(question: Question) -> None:
    logger.info("Deleting question %s from survey %s", question.pk, question.survey_id)
    question.delete()


def reorder_questions(survey: Survey, question_ids: Iterable) -> int:
    """Give each listed question the order of its 1-based position.

    Ids that do not belong to ``survey`` are skipped but still occupy their
    position. Questions left out of the list keep their current order.
    Returns the number of questions updated.
    """
    ids = list(question_ids or [])
    if not ids:
        raise EmptyReorderRequest()

    updated = 0
    with transaction.atomic():
        for index, raw_id in enumerate(ids):
            qid = _safe_int(raw_id)
            count = 0
            if qid is not None:
                count = Question.objects.filter(id=qid, survey=survey).update(
                    order=index + 1
                )
            if not count:
                logger.info(
                    "Skipping question %r while reordering survey %s: not in survey",
                    raw_id,
                    survey.pk,
                )
            updated += count
    logger.info("Reordered %d questions in survey %s", updated, survey.pk)
    return updated
