"""Errors raised by the survey services.

The API layer maps these onto HTTP responses; the services themselves never
deal in status codes.
"""

from __future__ import annotations


class SurveyServiceError(Exception):
    default_message = "Survey operation failed."

    def __init__(self, message: str | None = None, *, field: str | None = None):
        self.message = message or self.default_message
        self.field = field
        super().__init__(self.message)

    def as_errors(self) -> dict[str, list[str]]:
        return {self.field or "non_field_errors": [self.message]}


class ValidationFailure(SurveyServiceError):
    default_message = "Validation failed."


class UnknownQuestionType(ValidationFailure):
    default_message = "The selected question type is invalid."

    def __init__(self, tag, message: str | None = None, *, field: str | None = "type"):
        self.tag = tag
        super().__init__(message or f"Unknown question type: {tag!r}.", field=field)


class MissingOptions(ValidationFailure):
    default_message = "This question type requires at least one option."

    def __init__(self, message: str | None = None, *, field: str | None = "options"):
        super().__init__(message, field=field)


class InvalidOrder(ValidationFailure):
    default_message = "Order must be at least 0."

    def __init__(self, message: str | None = None, *, field: str | None = "order"):
        super().__init__(message, field=field)


class InvalidAnswerValue(ValidationFailure):
    default_message = "The submitted value is not valid for this question."


class EmptyReorderRequest(ValidationFailure):
    default_message = "No question IDs provided"

    def __init__(self, message: str | None = None, *, field: str | None = "question_ids"):
        super().__init__(message, field=field)


class SurveyNotAvailable(SurveyServiceError):
    default_message = "Survey is not available for responses"


class InvalidQuestionReference(SurveyServiceError):
    default_message = "Invalid question IDs provided"

    def __init__(self, question_ids=(), message: str | None = None):
        self.question_ids = list(question_ids)
        super().__init__(message, field="answers")
