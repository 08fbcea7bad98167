from __future__ import annotations

from dataclasses import dataclass

from django.db import models

from .exceptions import UnknownQuestionType


class QuestionType(models.TextChoices):
    MULTIPLE_CHOICE_SINGLE = "multiple_choice_single", "Multiple Choice (Single)"
    MULTIPLE_CHOICE_MULTIPLE = "multiple_choice_multiple", "Multiple Choice (Multiple)"
    TEXT_SHORT = "text_short", "Short Text"
    TEXT_LONG = "text_long", "Long Text"
    RATING_SCALE = "rating_scale", "Rating Scale"
    YES_NO = "yes_no", "Yes/No"
    DROPDOWN = "dropdown", "Dropdown"
    CHECKBOX = "checkbox", "Checkbox"
    DATE = "date", "Date"
    TIME = "time", "Time"
    DATETIME = "datetime", "Date & Time"
    FILE_UPLOAD = "file_upload", "File Upload"


class AnswerSlot(models.TextChoices):
    """Which kind of Answer value a question type writes."""

    TEXT = "text", "Text"
    SELECTED_OPTIONS = "selected_options", "Selected options"
    RATING = "rating", "Rating"
    BOOLEAN = "boolean", "Boolean"
    DATE = "date", "Date"
    TIME = "time", "Time of day"
    DATETIME = "datetime", "Date and time"
    FILE = "file", "File"


@dataclass(frozen=True)
class QuestionTypeSpec:
    tag: QuestionType
    label: str
    requires_options: bool
    slot: AnswerSlot

    def as_dict(self) -> dict:
        return {
            "type": self.tag.value,
            "label": self.label,
            "requires_options": self.requires_options,
            "slot": self.slot.value,
        }


OPTION_TYPES = frozenset(
    {
        QuestionType.MULTIPLE_CHOICE_SINGLE,
        QuestionType.MULTIPLE_CHOICE_MULTIPLE,
        QuestionType.DROPDOWN,
        QuestionType.CHECKBOX,
    }
)

_SLOTS = {
    QuestionType.MULTIPLE_CHOICE_SINGLE: AnswerSlot.SELECTED_OPTIONS,
    QuestionType.MULTIPLE_CHOICE_MULTIPLE: AnswerSlot.SELECTED_OPTIONS,
    QuestionType.TEXT_SHORT: AnswerSlot.TEXT,
    QuestionType.TEXT_LONG: AnswerSlot.TEXT,
    QuestionType.RATING_SCALE: AnswerSlot.RATING,
    QuestionType.YES_NO: AnswerSlot.BOOLEAN,
    QuestionType.DROPDOWN: AnswerSlot.SELECTED_OPTIONS,
    QuestionType.CHECKBOX: AnswerSlot.SELECTED_OPTIONS,
    QuestionType.DATE: AnswerSlot.DATE,
    QuestionType.TIME: AnswerSlot.TIME,
    QuestionType.DATETIME: AnswerSlot.DATETIME,
    QuestionType.FILE_UPLOAD: AnswerSlot.FILE,
}

REGISTRY: dict[QuestionType, QuestionTypeSpec] = {
    qtype: QuestionTypeSpec(
        tag=qtype,
        label=qtype.label,
        requires_options=qtype in OPTION_TYPES,
        slot=_SLOTS[qtype],
    )
    for qtype in QuestionType
}


def get_type_spec(tag) -> QuestionTypeSpec:
    """Look up a question type by tag, rejecting anything outside the catalog."""
    try:
        return REGISTRY[QuestionType(tag)]
    except (TypeError, ValueError):
        raise UnknownQuestionType(tag) from None


def question_type_catalog() -> list[QuestionTypeSpec]:
    return list(REGISTRY.values())
