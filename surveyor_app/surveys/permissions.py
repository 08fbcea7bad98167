from __future__ import annotations

from django.core.exceptions import PermissionDenied

from .models import Survey


def owns(user, survey: Survey) -> bool:
    if user is None or not user.is_authenticated:
        return False
    return survey.owner_id == getattr(user, "id", None)


def can_view_survey(user, survey: Survey) -> bool:
    return owns(user, survey)


def can_edit_survey(user, survey: Survey) -> bool:
    return owns(user, survey)


def require_can_view(user, survey: Survey) -> None:
    if not can_view_survey(user, survey):
        raise PermissionDenied("You do not have permission to view this survey.")


def require_can_edit(user, survey: Survey) -> None:
    if not can_edit_survey(user, survey):
        raise PermissionDenied("You do not have permission to edit this survey.")
