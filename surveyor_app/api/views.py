import logging

from django.conf import settings
from rest_framework import mixins, permissions, status, viewsets
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.generics import get_object_or_404
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response

from surveyor_app.surveys import services
from surveyor_app.surveys.models import Question, Survey
from surveyor_app.surveys.permissions import (
    can_edit_survey,
    can_view_survey,
    require_can_edit,
    require_can_view,
)
from surveyor_app.surveys.question_types import question_type_catalog

from .serializers import (
    AnswerSerializer,
    QuestionSerializer,
    ReorderSerializer,
    ResponseSubmissionSerializer,
    SurveySerializer,
)

logger = logging.getLogger(__name__)

SURVEY_ORDERING_FIELDS = {"created_at", "title", "updated_at"}
DEFAULT_SURVEY_ORDERING = "-created_at"


class SurveyOwnerPermission(permissions.BasePermission):
    """Object-level permission backed by surveys.permissions.

    - SAFE methods require can_view_survey
    - Unsafe methods require can_edit_survey
    """

    def has_object_permission(self, request, view, obj):
        if request.method in permissions.SAFE_METHODS:
            return can_view_survey(request.user, obj)
        return can_edit_survey(request.user, obj)


class SurveyPagination(PageNumberPagination):
    page_size = getattr(settings, "SURVEY_PAGE_SIZE", 15)


def _ordering_param(raw: str | None) -> str:
    if raw and raw.lstrip("-") in SURVEY_ORDERING_FIELDS:
        return raw
    return DEFAULT_SURVEY_ORDERING


class SurveyViewSet(viewsets.ModelViewSet):
    serializer_class = SurveySerializer
    permission_classes = [permissions.IsAuthenticated, SurveyOwnerPermission]
    pagination_class = SurveyPagination
    public_actions = {"public", "public_questions", "submit_response"}

    def get_permissions(self):
        if self.action in self.public_actions:
            return [permissions.AllowAny()]
        return super().get_permissions()

    def get_queryset(self):
        qs = Survey.objects.filter(owner=self.request.user)
        params = self.request.query_params
        title = params.get("title")
        if title:
            qs = qs.filter(title__icontains=title)
        status_filter = params.get("status")
        if status_filter:
            qs = qs.filter(status=status_filter)
        ordering = _ordering_param(params.get("ordering"))
        return qs.order_by(ordering, "-id")

    def get_object(self):
        """Fetch the survey unscoped, then run object permissions.

        Authenticated users get 403 rather than 404 for surveys that exist
        but belong to someone else.
        """
        lookup_url_kwarg = self.lookup_url_kwarg or self.lookup_field
        obj = get_object_or_404(
            Survey.objects.all(), **{self.lookup_field: self.kwargs[lookup_url_kwarg]}
        )
        self.check_object_permissions(self.request, obj)
        return obj

    def get_serializer_context(self):
        context = super().get_serializer_context()
        include = self.request.query_params.get("include", "") if self.request else ""
        context["include_questions"] = "questions" in include.split(",")
        return context

    def perform_create(self, serializer):
        survey = serializer.save(owner=self.request.user)
        logger.info("User %s created survey %s", self.request.user.pk, survey.pk)

    def destroy(self, request, *args, **kwargs):
        survey = self.get_object()
        logger.info("User %s deleting survey %s", request.user.pk, survey.pk)
        survey.delete()
        return Response({"message": "Survey deleted successfully"})

    def _published_survey_or_404(self, pk):
        survey = get_object_or_404(Survey.objects.all(), pk=pk)
        if not survey.is_accepting_responses():
            return None
        return survey

    @action(detail=True, methods=["get"])
    def public(self, request, pk=None):
        survey = self._published_survey_or_404(pk)
        if survey is None:
            return Response(
                {"message": "Survey not found or not available"},
                status=status.HTTP_404_NOT_FOUND,
            )
        context = {**self.get_serializer_context(), "include_questions": True}
        return Response(SurveySerializer(survey, context=context).data)

    @action(detail=True, methods=["get", "post"])
    def questions(self, request, pk=None):
        survey = self.get_object()
        if request.method == "GET":
            questions = services.list_questions(survey)
            return Response(QuestionSerializer(questions, many=True).data)

        ser = QuestionSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        question = services.create_question(survey, **ser.validated_data)
        return Response(
            QuestionSerializer(question).data, status=status.HTTP_201_CREATED
        )

    @action(detail=True, methods=["get"], url_path="questions/public")
    def public_questions(self, request, pk=None):
        survey = self._published_survey_or_404(pk)
        if survey is None:
            return Response(
                {"message": "Survey not found or not available"},
                status=status.HTTP_404_NOT_FOUND,
            )
        questions = services.list_questions(survey)
        return Response(QuestionSerializer(questions, many=True).data)

    @action(detail=True, methods=["post"], url_path="questions/reorder")
    def reorder(self, request, pk=None):
        survey = self.get_object()
        ser = ReorderSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        updated = services.reorder_questions(survey, ser.validated_data["question_ids"])
        return Response(
            {"message": "Questions reordered successfully", "updated": updated}
        )

    @action(detail=True, methods=["get"])
    def responses(self, request, pk=None):
        survey = self.get_object()
        grouped = services.list_responses(survey)
        data = {
            respondent_id: AnswerSerializer(answers, many=True).data
            for respondent_id, answers in grouped.items()
        }
        return Response({"data": data, "message": "Responses retrieved successfully"})

    @responses.mapping.post
    def submit_response(self, request, pk=None):
        survey = get_object_or_404(Survey.objects.all(), pk=pk)
        # Closed and draft surveys are refused before the payload is looked at
        services.ensure_accepting_responses(survey)
        ser = ResponseSubmissionSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        pairs = [
            (item["question_id"], item["value"]) for item in ser.validated_data["answers"]
        ]
        respondent_id = services.record_response(
            survey, ser.validated_data["respondent_id"], pairs
        )
        return Response(
            {"message": "Response submitted successfully", "respondent_id": respondent_id},
            status=status.HTTP_201_CREATED,
        )


class QuestionViewSet(
    mixins.RetrieveModelMixin,
    mixins.UpdateModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = QuestionSerializer
    permission_classes = [permissions.IsAuthenticated]
    queryset = Question.objects.select_related("survey")

    def get_object(self):
        lookup_url_kwarg = self.lookup_url_kwarg or self.lookup_field
        question = get_object_or_404(
            self.get_queryset(), **{self.lookup_field: self.kwargs[lookup_url_kwarg]}
        )
        if self.request.method in permissions.SAFE_METHODS:
            require_can_view(self.request.user, question.survey)
        else:
            require_can_edit(self.request.user, question.survey)
        return question

    def perform_update(self, serializer):
        serializer.instance = services.update_question(
            serializer.instance, **serializer.validated_data
        )

    def destroy(self, request, *args, **kwargs):
        question = self.get_object()
        services.delete_question(question)
        return Response({"message": "Question deleted successfully"})


@api_view(["GET"])
@permission_classes([permissions.AllowAny])
def question_types(request):
    return Response([spec.as_dict() for spec in question_type_catalog()])


@api_view(["GET"])
@permission_classes([permissions.AllowAny])
def healthcheck(request):
    return Response({"status": "ok"})
