"""
Unit tests for ActivityLogPruner
"""
from datetime import datetime, timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from panel_service.app.use_cases.activity import (
    ActivityConfigurationError,
    ActivityLogPruner,
    validate_prune_days,
)

NOW = datetime(2024, 6, 1, 12, 0, 0)


@pytest.fixture
def uow(mock_uow):
    mock_uow.activity_logs = MagicMock()
    mock_uow.activity_logs.delete_older_than = AsyncMock(return_value=4)
    return mock_uow


def test_missing_retention_is_a_configuration_error(uow):
    with pytest.raises(ActivityConfigurationError, match="ACTIVITY_PRUNE_DAYS"):
        ActivityLogPruner(uow, None)


@pytest.mark.parametrize("value", [0, -5, "30", 1.5, True])
def test_invalid_retention_values(value):
    with pytest.raises(ActivityConfigurationError):
        validate_prune_days(value)


def test_valid_retention():
    assert validate_prune_days(30) == 30


@pytest.mark.asyncio
async def test_prune_deletes_up_to_cutoff(uow):
    pruner = ActivityLogPruner(uow, 30)

    removed = await pruner.prune(NOW)

    assert removed == 4
    uow.activity_logs.delete_older_than.assert_called_once_with(NOW - timedelta(days=30))
    uow.commit.assert_called_once()
