from __future__ import annotations

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

import qrdine.api.routes.auth as auth_route
import qrdine.api.routes.carts as carts_route
from qrdine.api.main import app
from qrdine.application.dto.responses import (
    CartsResponse,
    LoginResponse,
    ProfileResponse,
    UserResponse,
)
from qrdine.application.use_cases.manage_users import InvalidCredentialsError
from qrdine.infrastructure.auth.tokens import JoseTokenService

SECRET = "route-test-secret"


class StubUseCase:
    def __init__(self, result=None, error: Exception | None = None) -> None:
        self.result = result
        self.error = error
        self.calls: list[tuple] = []

    def execute(self, *args, **kwargs):
        self.calls.append((args, kwargs))
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture(autouse=True)
def jwt_secret(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JWT_SECRET", SECRET)


def _token(role: str, user_id: str = "usr_1") -> str:
    return JoseTokenService(secret=SECRET).issue(
        {"sub": user_id, "email": f"{role}@example.com", "role": role}
    )


def test_login_sets_auth_cookie(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        auth_route,
        "_login_use_case",
        lambda: StubUseCase(LoginResponse(accessToken="jwt-value")),
    )

    client = TestClient(app)
    response = client.post(
        "/v1/auth/login",
        json={"email": "admin@example.com", "password": "rahasia123"},
    )

    assert response.status_code == 200
    assert response.json() == {"accessToken": "jwt-value"}
    cookie = response.headers["set-cookie"]
    assert cookie.startswith("Authorization=")
    assert "jwt-value" in cookie
    assert "HttpOnly" in cookie


def test_login_failure_uses_error_envelope(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        auth_route,
        "_login_use_case",
        lambda: StubUseCase(error=InvalidCredentialsError("invalid email or password")),
    )

    client = TestClient(app)
    response = client.post(
        "/v1/auth/login",
        json={"email": "admin@example.com", "password": "nope"},
        headers={"X-Request-Id": "req-42"},
    )

    assert response.status_code == 401
    assert response.json() == {
        "error": {
            "code": "INVALID_CREDENTIALS",
            "message": "invalid email or password",
            "details": {},
        },
        "requestId": "req-42",
    }


def test_invalid_body_is_a_400_with_details() -> None:
    client = TestClient(app)
    response = client.post("/v1/auth/login", json={"email": "admin@example.com"})

    assert response.status_code == 400
    body = response.json()
    assert body["error"]["code"] == "INVALID_REQUEST"
    assert body["error"]["details"]["errors"]


def test_profile_reads_token_from_header_or_cookie(monkeypatch: pytest.MonkeyPatch) -> None:
    stub = StubUseCase(
        ProfileResponse(
            user=UserResponse(
                userId="usr_7",
                username="kasir",
                email="staff@example.com",
                role="staff",
            )
        )
    )
    monkeypatch.setattr(auth_route, "_get_profile_use_case", lambda: stub)
    token = _token("staff", user_id="usr_7")

    client = TestClient(app)
    by_header = client.get("/v1/profile", headers={"Authorization": f"Bearer {token}"})
    client.cookies.set("Authorization", f'"Bearer {token}"')
    by_cookie = client.get("/v1/profile")

    assert by_header.status_code == 200
    assert by_cookie.status_code == 200
    assert by_header.json()["user"]["userId"] == "usr_7"
    assert stub.calls[0][1] == {"user_id": "usr_7"}


def test_missing_or_bad_token_is_unauthenticated() -> None:
    client = TestClient(app)

    missing = client.get("/v1/carts")
    forged = client.get(
        "/v1/carts",
        headers={"Authorization": f"Bearer {JoseTokenService(secret='other').issue({})}"},
    )

    assert missing.status_code == 401
    assert missing.json()["error"]["code"] == "UNAUTHENTICATED"
    assert forged.status_code == 401


def test_staff_cannot_use_admin_routes() -> None:
    client = TestClient(app)
    response = client.get(
        "/v1/users",
        headers={"Authorization": f"Bearer {_token('staff')}"},
    )

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "FORBIDDEN"


def test_staff_can_list_active_carts(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        carts_route,
        "_list_active_carts_use_case",
        lambda: StubUseCase(CartsResponse(carts=[])),
    )

    client = TestClient(app)
    response = client.get("/v1/carts", headers={"Authorization": f"Bearer {_token('staff')}"})

    assert response.status_code == 200
    assert response.json() == {"carts": []}


def test_logout_clears_cookie() -> None:
    client = TestClient(app)
    response = client.post("/v1/auth/logout")

    assert response.status_code == 200
    assert response.json() == {"message": "logged out"}
    assert 'Authorization=""' in response.headers["set-cookie"]
