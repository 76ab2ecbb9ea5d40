"""
Unit tests for InMemoryEventDispatcher
"""
from uuid import uuid4

import pytest

from panel_service.adapter.services.event_dispatcher import InMemoryEventDispatcher
from panel_service.domain.entities import User
from panel_service.domain.events import ActivityLogged, PasswordReset


def make_event() -> PasswordReset:
    user = User(id=uuid4(), email="user@example.com", username="user", password_hash="hash")
    return PasswordReset(user=user, ip="10.0.0.1")


@pytest.mark.asyncio
async def test_handlers_run_in_registration_order():
    dispatcher = InMemoryEventDispatcher()
    calls = []

    async def first(event):
        calls.append(("first", event))

    async def second(event):
        calls.append(("second", event))

    dispatcher.listen(PasswordReset, first)
    dispatcher.listen(PasswordReset, second)

    event = make_event()
    await dispatcher.dispatch(event)

    assert calls == [("first", event), ("second", event)]


@pytest.mark.asyncio
async def test_failing_handler_does_not_block_others():
    dispatcher = InMemoryEventDispatcher()
    received = []

    async def broken(event):
        raise RuntimeError("listener down")

    async def healthy(event):
        received.append(event)

    dispatcher.listen(PasswordReset, broken)
    dispatcher.listen(PasswordReset, healthy)

    event = make_event()
    await dispatcher.dispatch(event)

    assert received == [event]


@pytest.mark.asyncio
async def test_only_matching_event_type_is_delivered():
    dispatcher = InMemoryEventDispatcher()
    received = []

    async def on_logged(event):
        received.append(event)

    dispatcher.listen(ActivityLogged, on_logged)
    await dispatcher.dispatch(make_event())

    assert received == []
