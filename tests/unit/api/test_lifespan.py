"""Unit tests for application startup and shutdown."""

from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI

import main
from core.config import Settings
from infrastructure.auth.jwt_provider import JWTTokenService


def _token_service(secret: str) -> JWTTokenService:
    return JWTTokenService(secret_key=secret, algorithm="HS256", expire_seconds=3600)


class TestLifespan:
    def test_secret_defaults_to_empty(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("JWT_SECRET_KEY", raising=False)

        assert Settings(_env_file=None).jwt_secret_key == ""

    @pytest.mark.asyncio
    async def test_startup_fails_without_secret(self, monkeypatch: pytest.MonkeyPatch):
        check_connection = AsyncMock()
        monkeypatch.setattr(main, "get_token_service", lambda: _token_service(""))
        monkeypatch.setattr(main, "check_connection", check_connection)

        with pytest.raises(RuntimeError, match="JWT_SECRET_KEY"):
            async with main.lifespan(FastAPI()):
                pass

        check_connection.assert_not_called()

    @pytest.mark.asyncio
    async def test_startup_fails_when_database_unreachable(
        self, monkeypatch: pytest.MonkeyPatch
    ):
        monkeypatch.setattr(main, "get_token_service", lambda: _token_service("s3cret"))
        monkeypatch.setattr(
            main, "check_connection", AsyncMock(side_effect=ConnectionRefusedError())
        )

        with pytest.raises(ConnectionRefusedError):
            async with main.lifespan(FastAPI()):
                pass

    @pytest.mark.asyncio
    async def test_starts_and_disposes_engine(self, monkeypatch: pytest.MonkeyPatch):
        dispose_engine = AsyncMock()
        monkeypatch.setattr(main, "get_token_service", lambda: _token_service("s3cret"))
        monkeypatch.setattr(main, "check_connection", AsyncMock())
        monkeypatch.setattr(main, "dispose_engine", dispose_engine)

        async with main.lifespan(FastAPI()):
            dispose_engine.assert_not_called()

        dispose_engine.assert_called_once()
