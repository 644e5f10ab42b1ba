import pytest
from django.contrib.auth import get_user_model

pytestmark = pytest.mark.integration

TOKEN_URL = "/api/v1/auth/token/"


@pytest.fixture()
def user():
    return get_user_model().objects.create_user(username="clerk", password="clerk-pass-123")


class TestJWTAuth:
    def test_obtain_and_use_token(self, api_client, user):
        response = api_client.post(
            TOKEN_URL, {"username": "clerk", "password": "clerk-pass-123"}, format="json"
        )
        assert response.status_code == 200
        access = response.json()["access"]

        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {access}")
        response = api_client.get("/api/v1/clients/")
        assert response.status_code == 200

    def test_wrong_password(self, api_client, user):
        response = api_client.post(
            TOKEN_URL, {"username": "clerk", "password": "nope"}, format="json"
        )

        assert response.status_code == 401
        assert response.json()["success"] is False

    def test_refresh(self, api_client, user):
        tokens = api_client.post(
            TOKEN_URL, {"username": "clerk", "password": "clerk-pass-123"}, format="json"
        ).json()

        response = api_client.post(
            "/api/v1/auth/token/refresh/", {"refresh": tokens["refresh"]}, format="json"
        )

        assert response.status_code == 200
        assert "access" in response.json()
