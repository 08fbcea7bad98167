"""Map survey service errors onto HTTP responses.

Registered as ``REST_FRAMEWORK["EXCEPTION_HANDLER"]``.
"""

from __future__ import annotations

import logging

from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

from surveyor_app.surveys.exceptions import (
    EmptyReorderRequest,
    InvalidQuestionReference,
    SurveyNotAvailable,
    SurveyServiceError,
    ValidationFailure,
)

logger = logging.getLogger(__name__)

# Checked in order; subclasses before their bases
STATUS_BY_ERROR = [
    (EmptyReorderRequest, status.HTTP_400_BAD_REQUEST),
    (ValidationFailure, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (InvalidQuestionReference, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (SurveyNotAvailable, status.HTTP_403_FORBIDDEN),
]


def status_for(exc: SurveyServiceError) -> int:
    for error_class, code in STATUS_BY_ERROR:
        if isinstance(exc, error_class):
            return code
    return status.HTTP_400_BAD_REQUEST


def survey_exception_handler(exc, context):
    if isinstance(exc, SurveyServiceError):
        payload = {"message": exc.message, "errors": exc.as_errors()}
        if isinstance(exc, InvalidQuestionReference):
            payload["question_ids"] = exc.question_ids
        code = status_for(exc)
        logger.info(
            "%s rejected with %s: %s",
            context.get("view").__class__.__name__,
            code,
            exc.message,
        )
        return Response(payload, status=code)

    response = exception_handler(exc, context)
    if response is not None and isinstance(exc, ValidationError):
        response.data = {"message": "Validation failed", "errors": response.data}
        response.status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    return response
