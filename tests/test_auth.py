from __future__ import annotations

import pytest
import requests

from coach_dashboard.auth import AuthClient
from coach_dashboard.errors import AuthError
from tests.conftest import make_response

BASE = "https://auth.example"


@pytest.fixture
def client(mock_session) -> AuthClient:
    return AuthClient(BASE + "/", session=mock_session, timeout=5)


class TestLogin:
    def test_success_returns_token(self, client, mock_session) -> None:
        mock_session.post.return_value = make_response(json_data={"token": "abc"})
        result = client.login("ops@example.com", "secret")
        assert result.token == "abc"
        assert result.email == "ops@example.com"
        mock_session.post.assert_called_once_with(
            BASE + "/api/auth/login",
            json={"email": "ops@example.com", "password": "secret"},
            timeout=5,
        )

    def test_success_without_token(self, client, mock_session) -> None:
        mock_session.post.return_value = make_response(json_error=True)
        assert client.login("a@b.c", "x").token is None

    def test_server_message_surfaces_verbatim(self, client, mock_session) -> None:
        mock_session.post.return_value = make_response(
            status_code=401, json_data={"message": "Invalid email or password"},
        )
        with pytest.raises(AuthError) as exc:
            client.login("a@b.c", "wrong")
        assert exc.value.message == "Invalid email or password"
        assert exc.value.status_code == 401

    def test_error_key(self, client, mock_session) -> None:
        mock_session.post.return_value = make_response(status_code=400, json_data={"error": "User not found"})
        with pytest.raises(AuthError, match="User not found"):
            client.login("a@b.c", "x")

    def test_falls_back_to_text_then_reason(self, client, mock_session) -> None:
        mock_session.post.return_value = make_response(status_code=500, json_error=True, text="Server exploded")
        with pytest.raises(AuthError, match="Server exploded"):
            client.login("a@b.c", "x")

        mock_session.post.return_value = make_response(status_code=502, json_error=True, reason="Bad Gateway")
        with pytest.raises(AuthError, match="Bad Gateway"):
            client.login("a@b.c", "x")

    def test_network_error(self, client, mock_session) -> None:
        mock_session.post.side_effect = requests.ConnectionError("refused")
        with pytest.raises(AuthError) as exc:
            client.login("a@b.c", "x")
        assert exc.value.status_code is None


class TestSignup:
    def test_posts_name_email_password(self, client, mock_session) -> None:
        mock_session.post.return_value = make_response(status_code=201, json_data={"message": "created"})
        client.signup("Asha", "asha@example.com", "pw")
        mock_session.post.assert_called_once_with(
            BASE + "/api/auth/signup",
            json={"name": "Asha", "email": "asha@example.com", "password": "pw"},
            timeout=5,
        )

    def test_rejected(self, client, mock_session) -> None:
        mock_session.post.return_value = make_response(status_code=409, json_data={"message": "User already exists"})
        with pytest.raises(AuthError, match="User already exists"):
            client.signup("Asha", "asha@example.com", "pw")
