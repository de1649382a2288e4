from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from fastapi import HTTPException

from studio.modules.auth.schemas import LoginRequest, RegisterRequest
from studio.modules.auth.service import AuthService, clear_auth_cache


@pytest.fixture(autouse=True)
def _clean_cache():
    clear_auth_cache()
    yield
    clear_auth_cache()


def _user(user_id="user-1", email="dev@example.com"):
    return SimpleNamespace(id=user_id, email=email, user_metadata={"full_name": "Dev"})


def test_get_current_user_is_cached():
    supabase = MagicMock()
    supabase.auth.get_user.return_value = SimpleNamespace(user=_user())
    service = AuthService(supabase)

    first = service.get_current_user("token-1")
    second = service.get_current_user("token-1")

    assert first == second == {"id": "user-1", "email": "dev@example.com", "user_metadata": {"full_name": "Dev"}}
    supabase.auth.get_user.assert_called_once_with(jwt="token-1")


def test_get_current_user_rejects_unknown_token():
    supabase = MagicMock()
    supabase.auth.get_user.return_value = SimpleNamespace(user=None)
    with pytest.raises(HTTPException) as exc:
        AuthService(supabase).get_current_user("bad")
    assert exc.value.status_code == 401


def test_get_current_user_maps_expired_jwt_to_401():
    supabase = MagicMock()
    supabase.auth.get_user.side_effect = Exception("JWT expired")
    with pytest.raises(HTTPException) as exc:
        AuthService(supabase).get_current_user("old")
    assert exc.value.detail == "Invalid or expired token"


def test_logout_evicts_cached_user():
    supabase = MagicMock()
    supabase.auth.get_user.return_value = SimpleNamespace(user=_user())
    service = AuthService(supabase)
    service.get_current_user("token-1")
    assert service.logout("token-1") is True
    service.get_current_user("token-1")
    assert supabase.auth.get_user.call_count == 2


def test_login_returns_token():
    supabase = MagicMock()
    supabase.auth.sign_in_with_password.return_value = SimpleNamespace(
        user=_user(), session=SimpleNamespace(access_token="jwt-abc")
    )
    token = AuthService(supabase).login(LoginRequest(email="dev@example.com", password="pw"))
    assert token.access_token == "jwt-abc"
    assert token.user_id == "user-1"


def test_login_invalid_credentials():
    supabase = MagicMock()
    supabase.auth.sign_in_with_password.side_effect = Exception("Invalid login credentials")
    with pytest.raises(HTTPException) as exc:
        AuthService(supabase).login(LoginRequest(email="dev@example.com", password="wrong"))
    assert exc.value.status_code == 401


def test_register_existing_user():
    supabase = MagicMock()
    supabase.auth.sign_up.side_effect = Exception("User already registered")
    with pytest.raises(HTTPException) as exc:
        AuthService(supabase).register(RegisterRequest(email="dev@example.com", password="pw"))
    assert exc.value.detail == "User already exists"


def test_register_passes_full_name():
    supabase = MagicMock()
    supabase.auth.sign_up.return_value = SimpleNamespace(user=_user())
    response = AuthService(supabase).register(
        RegisterRequest(email="dev@example.com", password="pw", full_name="Dev")
    )
    assert response.user_id == "user-1"
    payload = supabase.auth.sign_up.call_args.args[0]
    assert payload["options"]["data"] == {"full_name": "Dev"}
