from __future__ import annotations

from django.contrib.auth import get_user_model
from django.db import models
from django.db.models import Count

from .codec import decode_answer
from .exceptions import UnknownQuestionType
from .question_types import QuestionType, get_type_spec

User = get_user_model()


class Survey(models.Model):
    class Status(models.TextChoices):
        DRAFT = "draft", "Draft"
        PUBLISHED = "published", "Published"
        CLOSED = "closed", "Closed"

    owner = models.ForeignKey(User, on_delete=models.CASCADE, related_name="surveys")
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    status = models.CharField(
        max_length=20, choices=Status.choices, default=Status.DRAFT
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self) -> str:  # pragma: no cover
        return self.title

    def is_accepting_responses(self) -> bool:
        return self.status == self.Status.PUBLISHED

    @property
    def question_count(self) -> int:
        return self.questions.count()

    @property
    def response_count(self) -> int:
        # Distinct respondents, not answer rows
        total = self.answers.aggregate(
            total=Count("respondent_id", distinct=True)
        )["total"]
        return total or 0


class Question(models.Model):
    survey = models.ForeignKey(
        Survey, on_delete=models.CASCADE, related_name="questions"
    )
    title = models.CharField(max_length=255)
    description = models.TextField(null=True, blank=True)
    type = models.CharField(max_length=50, choices=QuestionType.choices)
    options = models.JSONField(null=True, blank=True)
    validation_rules = models.JSONField(null=True, blank=True)
    is_required = models.BooleanField(default=False)
    order = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["order", "id"]
        indexes = [
            models.Index(fields=["survey", "order"], name="question_survey_order_idx"),
            models.Index(fields=["type"], name="question_type_idx"),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return self.title

    @property
    def type_display(self) -> str:
        try:
            return get_type_spec(self.type).label
        except UnknownQuestionType:
            return self.type

    def requires_options(self) -> bool:
        return get_type_spec(self.type).requires_options


class Answer(models.Model):
    question = models.ForeignKey(
        Question, on_delete=models.CASCADE, related_name="answers"
    )
    # Copied from question.survey at write time for per-survey queries
    survey = models.ForeignKey(
        Survey, on_delete=models.CASCADE, related_name="answers"
    )
    respondent_id = models.CharField(max_length=255)
    text_answer = models.TextField(null=True, blank=True)
    selected_options = models.JSONField(null=True, blank=True)
    rating_value = models.IntegerField(null=True, blank=True)
    boolean_answer = models.BooleanField(null=True, blank=True)
    date_answer = models.DateField(null=True, blank=True)
    time_answer = models.TimeField(null=True, blank=True)
    datetime_answer = models.DateTimeField(null=True, blank=True)
    file_path = models.CharField(max_length=255, null=True, blank=True)
    file_name = models.CharField(max_length=255, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["id"]
        indexes = [
            models.Index(
                fields=["survey", "respondent_id"], name="answer_survey_respondent_idx"
            ),
            models.Index(
                fields=["question", "respondent_id"],
                name="answer_question_respondent_idx",
            ),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.respondent_id}: {self.question_id}"

    @property
    def formatted_answer(self):
        return decode_answer(self)
