import pytest
from rest_framework.test import APIClient

from surveyor_app.surveys.models import Answer, Question, Survey


@pytest.fixture
def users(django_user_model):
    owner = django_user_model.objects.create_user(username="owner", password="x")
    outsider = django_user_model.objects.create_user(username="outsider", password="x")
    return owner, outsider


@pytest.fixture
def api(users):
    client = APIClient()
    client.force_authenticate(users[0])
    return client


@pytest.mark.django_db
def test_create_defaults_to_draft(api, users):
    resp = api.post("/api/surveys/", {"title": "Feedback", "description": "Tell us"}, format="json")
    assert resp.status_code == 201
    assert resp.data["status"] == "draft"
    assert resp.data["question_count"] == 0
    assert resp.data["response_count"] == 0
    assert "questions" not in resp.data
    assert Survey.objects.get(pk=resp.data["id"]).owner == users[0]


@pytest.mark.django_db
def test_create_requires_title(api):
    resp = api.post("/api/surveys/", {"description": "No title"}, format="json")
    assert resp.status_code == 422
    assert "title" in resp.data["errors"]


@pytest.mark.django_db
def test_list_shows_only_own_surveys(api, users):
    owner, outsider = users
    Survey.objects.create(owner=owner, title="Mine")
    Survey.objects.create(owner=outsider, title="Theirs")
    resp = api.get("/api/surveys/")
    assert resp.status_code == 200
    assert resp.data["count"] == 1
    assert [s["title"] for s in resp.data["results"]] == ["Mine"]


@pytest.mark.django_db
def test_list_filters_and_sorts(api, users):
    owner, _ = users
    Survey.objects.create(owner=owner, title="Beta customer", status="published")
    Survey.objects.create(owner=owner, title="Alpha customer", status="draft")
    Survey.objects.create(owner=owner, title="Staff", status="published")

    resp = api.get("/api/surveys/", {"title": "customer", "ordering": "title"})
    assert [s["title"] for s in resp.data["results"]] == ["Alpha customer", "Beta customer"]

    resp = api.get("/api/surveys/", {"status": "published", "ordering": "-title"})
    assert [s["title"] for s in resp.data["results"]] == ["Staff", "Beta customer"]


@pytest.mark.django_db
def test_list_is_paginated(api, users):
    owner, _ = users
    for i in range(17):
        Survey.objects.create(owner=owner, title=f"S{i}")
    resp = api.get("/api/surveys/")
    assert resp.data["count"] == 17
    assert len(resp.data["results"]) == 15
    resp = api.get("/api/surveys/", {"page": 2})
    assert len(resp.data["results"]) == 2


@pytest.mark.django_db
def test_retrieve_with_questions_included(api, users):
    survey = Survey.objects.create(owner=users[0], title="S")
    Question.objects.create(survey=survey, title="Second", type="text_short", order=2)
    Question.objects.create(survey=survey, title="First", type="yes_no", order=1)
    resp = api.get(f"/api/surveys/{survey.id}/", {"include": "questions"})
    assert resp.status_code == 200
    assert resp.data["question_count"] == 2
    assert [q["title"] for q in resp.data["questions"]] == ["First", "Second"]


@pytest.mark.django_db
def test_outsider_gets_403_not_404(users):
    owner, outsider = users
    survey = Survey.objects.create(owner=owner, title="S")
    client = APIClient()
    client.force_authenticate(outsider)
    assert client.get(f"/api/surveys/{survey.id}/").status_code == 403
    resp = client.patch(f"/api/surveys/{survey.id}/", {"title": "Hijack"}, format="json")
    assert resp.status_code == 403
    assert client.delete(f"/api/surveys/{survey.id}/").status_code == 403
    survey.refresh_from_db()
    assert survey.title == "S"


@pytest.mark.django_db
def test_missing_survey_is_404(api):
    assert api.get("/api/surveys/999999/").status_code == 404
    assert api.get("/api/surveys/not-a-number/").status_code == 404


@pytest.mark.django_db
def test_anonymous_is_401():
    client = APIClient()
    assert client.get("/api/surveys/").status_code == 401


@pytest.mark.django_db
def test_owner_updates_status(api, users):
    survey = Survey.objects.create(owner=users[0], title="S")
    resp = api.patch(f"/api/surveys/{survey.id}/", {"status": "published"}, format="json")
    assert resp.status_code == 200
    assert resp.data["status"] == "published"
    resp = api.patch(f"/api/surveys/{survey.id}/", {"status": "archived"}, format="json")
    assert resp.status_code == 422


@pytest.mark.django_db
def test_owner_delete_cascades(api, users):
    survey = Survey.objects.create(owner=users[0], title="S", status="published")
    q = Question.objects.create(survey=survey, title="Q", type="text_short", order=1)
    Answer.objects.create(question=q, survey=survey, respondent_id="r", text_answer="x")
    resp = api.delete(f"/api/surveys/{survey.id}/")
    assert resp.status_code == 200
    assert resp.data["message"] == "Survey deleted successfully"
    assert not Survey.objects.exists()
    assert not Question.objects.exists()
    assert not Answer.objects.exists()


@pytest.mark.django_db
def test_public_view_only_for_published(users):
    owner, _ = users
    draft = Survey.objects.create(owner=owner, title="Draft")
    live = Survey.objects.create(owner=owner, title="Live", status="published")
    Question.objects.create(survey=live, title="Q", type="text_short", order=1)
    client = APIClient()

    assert client.get(f"/api/surveys/{draft.id}/public/").status_code == 404
    resp = client.get(f"/api/surveys/{live.id}/public/")
    assert resp.status_code == 200
    assert resp.data["title"] == "Live"
    assert [q["title"] for q in resp.data["questions"]] == ["Q"]
