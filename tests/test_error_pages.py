"""Unknown routes answer with JSON instead of HTML pages."""

import pytest


@pytest.mark.django_db
def test_unknown_route_returns_json_404(client):
    resp = client.get("/no-such-page/")
    assert resp.status_code == 404
    assert resp["Content-Type"] == "application/json"
    assert resp.json() == {"message": "Not found"}


@pytest.mark.django_db
def test_missing_survey_returns_json_404(client, django_user_model):
    user = django_user_model.objects.create_user(username="u", password="x")
    client.force_login(user)
    resp = client.get("/api/surveys/424242/")
    assert resp.status_code == 404
    assert "detail" in resp.json()
