import pytest
from rest_framework.test import APIClient

from surveyor_app.surveys.models import Answer, Question, Survey


@pytest.fixture
def owner(django_user_model):
    return django_user_model.objects.create_user(username="owner", password="x")


@pytest.fixture
def survey(owner):
    return Survey.objects.create(owner=owner, title="Live", status=Survey.Status.PUBLISHED)


@pytest.fixture
def questions(survey):
    name = Question.objects.create(survey=survey, title="Name", type="text_short", order=1)
    happy = Question.objects.create(survey=survey, title="Happy?", type="yes_no", order=2)
    score = Question.objects.create(survey=survey, title="Score", type="rating_scale", order=3)
    return name, happy, score


def _submit(survey, payload):
    return APIClient().post(f"/api/surveys/{survey.id}/responses/", payload, format="json")


@pytest.mark.django_db
def test_anonymous_submission_is_recorded(survey, questions):
    name, happy, score = questions
    resp = _submit(
        survey,
        {
            "respondent_id": "r-1",
            "answers": [
                {"question_id": name.id, "value": "Ada"},
                {"question_id": happy.id, "value": "yes"},
                {"question_id": score.id, "value": 4},
            ],
        },
    )
    assert resp.status_code == 201
    assert resp.data == {"message": "Response submitted successfully", "respondent_id": "r-1"}
    assert Answer.objects.filter(survey=survey, respondent_id="r-1").count() == 3


@pytest.mark.django_db
@pytest.mark.parametrize("state", [Survey.Status.DRAFT, Survey.Status.CLOSED])
def test_submission_to_unpublished_survey_is_forbidden(survey, questions, state):
    survey.status = state
    survey.save()
    resp = _submit(
        survey, {"respondent_id": "r-1", "answers": [{"question_id": questions[0].id, "value": "x"}]}
    )
    assert resp.status_code == 403
    assert resp.data["message"] == "Survey is not available for responses"
    assert not Answer.objects.exists()


@pytest.mark.django_db
def test_submission_to_missing_survey_is_404():
    resp = APIClient().post(
        "/api/surveys/999999/responses/",
        {"respondent_id": "r", "answers": [{"question_id": 1, "value": "x"}]},
        format="json",
    )
    assert resp.status_code == 404


@pytest.mark.django_db
def test_foreign_question_rejects_batch(owner, survey, questions):
    other = Survey.objects.create(owner=owner, title="Other", status="published")
    foreign = Question.objects.create(survey=other, title="F", type="text_short", order=1)
    resp = _submit(
        survey,
        {
            "respondent_id": "r-1",
            "answers": [
                {"question_id": questions[0].id, "value": "ok"},
                {"question_id": foreign.id, "value": "nope"},
            ],
        },
    )
    assert resp.status_code == 422
    assert resp.data["question_ids"] == [foreign.id]
    assert not Answer.objects.exists()


@pytest.mark.django_db
def test_invalid_value_rejects_batch(survey, questions):
    name, _, score = questions
    resp = _submit(
        survey,
        {
            "respondent_id": "r-1",
            "answers": [
                {"question_id": name.id, "value": "Ada"},
                {"question_id": score.id, "value": "lots"},
            ],
        },
    )
    assert resp.status_code == 422
    assert not Answer.objects.exists()


@pytest.mark.django_db
def test_null_value_is_rejected(survey, questions):
    resp = _submit(
        survey, {"respondent_id": "r-1", "answers": [{"question_id": questions[0].id, "value": None}]}
    )
    assert resp.status_code == 422
    assert not Answer.objects.exists()


@pytest.mark.django_db
@pytest.mark.parametrize(
    "payload",
    [
        {"respondent_id": "r-1", "answers": []},
        {"respondent_id": "r-1"},
        {"answers": [{"question_id": 1, "value": "x"}]},
    ],
)
def test_malformed_payload_is_422(survey, payload):
    resp = _submit(survey, payload)
    assert resp.status_code == 422
    assert resp.data["message"] == "Validation failed"


@pytest.mark.django_db
def test_owner_lists_grouped_responses(owner, survey, questions):
    name, happy, _ = questions
    _submit(
        survey,
        {
            "respondent_id": "bob",
            "answers": [
                {"question_id": happy.id, "value": "maybe"},
                {"question_id": name.id, "value": "Bob"},
            ],
        },
    )
    _submit(survey, {"respondent_id": "alice", "answers": [{"question_id": name.id, "value": "Alice"}]})

    client = APIClient()
    client.force_authenticate(owner)
    resp = client.get(f"/api/surveys/{survey.id}/responses/")
    assert resp.status_code == 200
    data = resp.data["data"]
    assert list(data) == ["bob", "alice"]
    assert [a["value"] for a in data["bob"]] == ["No", "Bob"]
    assert data["bob"][0]["question"]["title"] == "Happy?"
    assert data["alice"][0]["question_id"] == name.id

    detail = client.get(f"/api/surveys/{survey.id}/").data
    assert detail["response_count"] == 2
    assert detail["question_count"] == 3


@pytest.mark.django_db
def test_responses_are_private_to_owner(django_user_model, survey):
    outsider = django_user_model.objects.create_user(username="outsider", password="x")
    client = APIClient()
    client.force_authenticate(outsider)
    assert client.get(f"/api/surveys/{survey.id}/responses/").status_code == 403
    assert APIClient().get(f"/api/surveys/{survey.id}/responses/").status_code == 401


@pytest.mark.django_db
def test_numeric_values_are_coerced_by_question_type(owner, survey, questions):
    name, _, score = questions
    resp = _submit(
        survey,
        {
            "respondent_id": "r-num",
            "answers": [
                {"question_id": name.id, "value": 42},
                {"question_id": score.id, "value": "4.0"},
            ],
        },
    )
    assert resp.status_code == 201
    assert Answer.objects.get(question=name).text_answer == "42"
    assert Answer.objects.get(question=score).rating_value == 4
