"""JWT 认证单元测试。"""

from datetime import timedelta

import pytest
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials

from src.core.infrastructure.security.jwt import (
    create_access_token,
    decode_token,
    get_current_user_id,
)


class TestJwt:
    def test_round_trip_subject(self) -> None:
        token = create_access_token("user-42")

        payload = decode_token(token)

        assert payload.sub == "user-42"
        assert payload.exp > 0

    def test_expired_token_rejected(self) -> None:
        token = create_access_token("user-42", expires_delta=timedelta(seconds=-5))

        with pytest.raises(HTTPException) as exc_info:
            decode_token(token)

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Token has expired"

    def test_garbage_token_rejected(self) -> None:
        with pytest.raises(HTTPException) as exc_info:
            decode_token("not-a-jwt")

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Invalid token"

    @pytest.mark.anyio
    async def test_current_user_from_bearer(self) -> None:
        credentials = HTTPAuthorizationCredentials(
            scheme="Bearer", credentials=create_access_token("user-7")
        )

        assert await get_current_user_id(credentials) == "user-7"

    def test_main_wires_current_user_to_jwt(self) -> None:
        """Regression: the application-level stub must resolve to the JWT adapter."""
        from main import app
        from src.core.application import security as app_security
        from src.core.infrastructure.security import jwt as infra_jwt

        assert (
            app.dependency_overrides[app_security.get_current_user_id]
            is infra_jwt.get_current_user_id
        )


class TestPersonalizedRequiresAuth:
    @pytest.mark.anyio
    async def test_missing_bearer_rejected(self) -> None:
        from httpx import ASGITransport, AsyncClient

        from main import app

        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test"
        ) as client:
            response = await client.get("/api/v1/news/personalized")

        assert response.status_code in (401, 403)
