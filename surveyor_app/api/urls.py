from django.urls import include, path
from rest_framework.permissions import AllowAny
from rest_framework.routers import DefaultRouter
from rest_framework.schemas import get_schema_view
from rest_framework_simplejwt.views import (
    TokenObtainPairView,
    TokenRefreshView,
)

from . import views

router = DefaultRouter()
router.register(r"surveys", views.SurveyViewSet, basename="survey")
router.register(r"questions", views.QuestionViewSet, basename="question")

urlpatterns = [
    path("health", views.healthcheck, name="healthcheck"),
    path("question-types", views.question_types, name="question-types"),
    path("token", TokenObtainPairView.as_view(), name="token_obtain_pair"),
    path("token/refresh", TokenRefreshView.as_view(), name="token_refresh"),
    # OpenAPI schema (JSON)
    path(
        "schema",
        get_schema_view(
            title="Surveyor API",
            description="OpenAPI schema for the Surveyor API",
            version="1.0.0",
            permission_classes=[AllowAny],
        ),
        name="openapi-schema",
    ),
    path("", include(router.urls)),
]
