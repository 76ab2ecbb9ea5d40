"""
Unit tests for RequestPasswordResetUseCase
"""
from unittest.mock import AsyncMock, MagicMock

import pytest

from panel_service.app.use_cases.auth import RequestPasswordResetUseCase
from panel_service.domain.entities import PasswordResetStatus


@pytest.fixture
def broker():
    broker = MagicMock()
    broker.create_token = AsyncMock()
    return broker


@pytest.mark.asyncio
async def test_token_issued_and_committed(mock_uow, broker):
    broker.create_token.return_value = (PasswordResetStatus.reset_link_sent, "plain-token")

    result = await RequestPasswordResetUseCase(mock_uow, broker).execute("user@example.com")

    assert result.is_ok()
    assert result.value.status == "sent"
    broker.create_token.assert_called_once_with("user@example.com")
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_unknown_email_gets_same_response(mock_uow, broker):
    """No email enumeration"""
    broker.create_token.return_value = (PasswordResetStatus.reset_link_sent, "plain-token")
    known = await RequestPasswordResetUseCase(mock_uow, broker).execute("user@example.com")

    broker.create_token.return_value = (PasswordResetStatus.invalid_user, None)
    mock_uow.commit.reset_mock()
    unknown = await RequestPasswordResetUseCase(mock_uow, broker).execute("nobody@example.com")

    assert unknown.is_ok()
    assert unknown.value == known.value
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_throttled_request(mock_uow, broker):
    broker.create_token.return_value = (PasswordResetStatus.throttled, None)

    result = await RequestPasswordResetUseCase(mock_uow, broker).execute("user@example.com")

    assert result.is_err()
    assert result.error.code == "THROTTLED"
    assert result.error.message == "Please wait before retrying."
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_messages_use_injected_locale(mock_uow, broker):
    broker.create_token.return_value = (PasswordResetStatus.reset_link_sent, "plain-token")

    result = await RequestPasswordResetUseCase(mock_uow, broker, locale="zz").execute("user@example.com")

    # No catalog for "zz", so the key comes back untranslated
    assert result.value.message == "passwords.sent"
