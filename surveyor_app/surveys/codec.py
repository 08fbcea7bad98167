"""Answer encoding and decoding.

Every question type stores its answer in one column of ``Answer`` (file
uploads use the ``file_name``/``file_path`` pair). ``encode_answer`` turns a
raw submitted value into the keyword arguments for that column and
``decode_answer`` turns a stored row back into the value shown to survey
owners.

Encoding rules per type:

- text_short, text_long: the string, verbatim (other scalars as str)
- multiple_choice_single, dropdown: ``[value]``
- multiple_choice_multiple, checkbox: a list as-is, anything else ``[value]``
- rating_scale: an integer (``"4"`` becomes ``4``)
- yes_no: ``True`` only for the exact string ``"yes"``
- date, time, datetime: parsed into the matching Python value
- file_upload: the file name plus ``ANSWER_UPLOAD_PREFIX + name``
"""

from __future__ import annotations

from datetime import date, datetime, time
import logging
from typing import Any, Callable

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime, parse_time

from .exceptions import InvalidAnswerValue
from .question_types import QuestionType, get_type_spec

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"
DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def _invalid(raw: Any, expected: str) -> InvalidAnswerValue:
    return InvalidAnswerValue(f"Expected {expected}, got {raw!r}.", field="value")


# -------------------- Encoders --------------------


def _encode_text(raw: Any) -> dict[str, Any]:
    if isinstance(raw, (list, tuple, dict)):
        raise _invalid(raw, "a text value")
    return {"text_answer": raw if isinstance(raw, str) else str(raw)}


def _encode_single_choice(raw: Any) -> dict[str, Any]:
    if isinstance(raw, (list, tuple, dict)):
        raise _invalid(raw, "a single option")
    return {"selected_options": [raw]}


def _encode_multiple_choice(raw: Any) -> dict[str, Any]:
    if isinstance(raw, (list, tuple)):
        return {"selected_options": list(raw)}
    if isinstance(raw, dict):
        raise _invalid(raw, "an option or a list of options")
    return {"selected_options": [raw]}


def _encode_rating(raw: Any) -> dict[str, Any]:
    # bool is an int subclass; "true" is not a rating
    if isinstance(raw, bool):
        raise _invalid(raw, "an integer rating")
    if isinstance(raw, int):
        return {"rating_value": raw}
    if isinstance(raw, float) and raw.is_integer():
        return {"rating_value": int(raw)}
    if isinstance(raw, str):
        text = raw.strip()
        try:
            return {"rating_value": int(text)}
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            number = None
        if number is not None and number.is_integer():
            return {"rating_value": int(number)}
    raise _invalid(raw, "an integer rating")


def _encode_yes_no(raw: Any) -> dict[str, Any]:
    return {"boolean_answer": raw == "yes"}


def _encode_date(raw: Any) -> dict[str, Any]:
    if isinstance(raw, datetime):
        return {"date_answer": raw.date()}
    if isinstance(raw, date):
        return {"date_answer": raw}
    try:
        value = parse_date(raw)
    except (TypeError, ValueError):
        value = None
    if value is None:
        raise _invalid(raw, "a date (YYYY-MM-DD)")
    return {"date_answer": value}


def _encode_time(raw: Any) -> dict[str, Any]:
    if isinstance(raw, time):
        return {"time_answer": raw}
    try:
        value = parse_time(raw)
    except (TypeError, ValueError):
        value = None
    if value is None:
        raise _invalid(raw, "a time of day (HH:MM)")
    return {"time_answer": value}


def _encode_datetime(raw: Any) -> dict[str, Any]:
    if isinstance(raw, datetime):
        value = raw
    else:
        try:
            value = parse_datetime(raw)
        except (TypeError, ValueError):
            value = None
    if value is None:
        raise _invalid(raw, "a date and time (YYYY-MM-DD HH:MM:SS)")
    if timezone.is_naive(value):
        value = timezone.make_aware(value)
    return {"datetime_answer": value}


def _encode_file(raw: Any) -> dict[str, Any]:
    if not isinstance(raw, str) or not raw:
        raise _invalid(raw, "a file name")
    prefix = getattr(settings, "ANSWER_UPLOAD_PREFIX", "uploads/")
    return {"file_name": raw, "file_path": f"{prefix}{raw}"}


# -------------------- Decoders --------------------


def _decode_text(answer) -> Any:
    return answer.text_answer


def _decode_options(answer) -> Any:
    return answer.selected_options


def _decode_rating(answer) -> Any:
    return answer.rating_value


def _decode_yes_no(answer) -> Any:
    return "Yes" if answer.boolean_answer else "No"


def _decode_date(answer) -> Any:
    if answer.date_answer is None:
        return None
    return answer.date_answer.strftime(DATE_FORMAT)


def _decode_time(answer) -> Any:
    if answer.time_answer is None:
        return None
    return answer.time_answer.strftime(TIME_FORMAT)


def _decode_datetime(answer) -> Any:
    if answer.datetime_answer is None:
        return None
    return timezone.localtime(answer.datetime_answer).strftime(DATETIME_FORMAT)


def _decode_file(answer) -> Any:
    return answer.file_name


Encoder = Callable[[Any], dict[str, Any]]
Decoder = Callable[[Any], Any]

CODECS: dict[QuestionType, tuple[Encoder, Decoder]] = {
    QuestionType.TEXT_SHORT: (_encode_text, _decode_text),
    QuestionType.TEXT_LONG: (_encode_text, _decode_text),
    QuestionType.MULTIPLE_CHOICE_SINGLE: (_encode_single_choice, _decode_options),
    QuestionType.DROPDOWN: (_encode_single_choice, _decode_options),
    QuestionType.MULTIPLE_CHOICE_MULTIPLE: (_encode_multiple_choice, _decode_options),
    QuestionType.CHECKBOX: (_encode_multiple_choice, _decode_options),
    QuestionType.RATING_SCALE: (_encode_rating, _decode_rating),
    QuestionType.YES_NO: (_encode_yes_no, _decode_yes_no),
    QuestionType.DATE: (_encode_date, _decode_date),
    QuestionType.TIME: (_encode_time, _decode_time),
    QuestionType.DATETIME: (_encode_datetime, _decode_datetime),
    QuestionType.FILE_UPLOAD: (_encode_file, _decode_file),
}

_uncovered = set(QuestionType) - set(CODECS)
if _uncovered:
    raise ImproperlyConfigured(
        f"No answer codec for question types: {sorted(_uncovered)}"
    )


def encode_answer(question, raw: Any) -> dict[str, Any]:
    """Return the Answer field values for ``raw`` submitted to ``question``.

    Raises UnknownQuestionType when the question carries a tag outside the
    catalog and InvalidAnswerValue when ``raw`` cannot be stored for its type.
    """
    spec = get_type_spec(question.type)
    if raw is None:
        raise InvalidAnswerValue(
            f"Question {question.pk}: a value is required.", field="value"
        )
    encoder, _ = CODECS[spec.tag]
    try:
        return encoder(raw)
    except InvalidAnswerValue as exc:
        raise InvalidAnswerValue(
            f"Question {question.pk} ({spec.tag.value}): {exc.message}", field=exc.field
        ) from exc


def decode_answer(answer) -> Any:
    """Return the display value of a stored answer, or None if it can't be read."""
    try:
        spec = get_type_spec(answer.question.type)
        _, decoder = CODECS[spec.tag]
        return decoder(answer)
    except Exception as exc:
        logger.warning(
            "Could not decode answer %s for question %s: %s",
            answer.pk,
            answer.question_id,
            exc,
        )
        return None
