"""
Unit tests for ActivityLogService

Uses a mocked UnitOfWork and a real in-process dispatcher.
"""
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from pydantic import ValidationError

from panel_service.adapter.services.event_dispatcher import InMemoryEventDispatcher
from panel_service.app.use_cases.activity import ActivityLogService
from panel_service.domain.entities import DISABLED_EVENTS, User
from panel_service.domain.events import ActivityLogged
from panel_service.domain.references import ActorReference

NOW = datetime(2024, 6, 1, 12, 0, 0)


@pytest.fixture
def uow(mock_uow):
    mock_uow.activity_logs = MagicMock()
    mock_uow.activity_logs.create = AsyncMock(side_effect=lambda activity, subjects: activity)
    mock_uow.activity_logs.get_by_actor_paginated = AsyncMock(return_value=([], None))
    mock_uow.activity_logs.get_subjects = AsyncMock(return_value={})
    return mock_uow


@pytest.fixture
def dispatcher():
    return InMemoryEventDispatcher()


@pytest.fixture
def logged(dispatcher):
    events = []

    async def capture(event):
        events.append(event)

    dispatcher.listen(ActivityLogged, capture)
    return events


@pytest.fixture
def service(uow, dispatcher):
    return ActivityLogService(uow, dispatcher, clock=lambda: NOW)


@pytest.mark.asyncio
async def test_record_assigns_timestamp_and_notifies_once(service, uow, logged):
    actor = ActorReference(type="user", id=str(uuid4()))
    server = ActorReference(type="user", id=str(uuid4()))

    activity = await service.record(
        "server:console.command",
        ip="10.0.0.1",
        actor=actor,
        properties={"command": "say hi"},
        subjects=[server],
    )

    assert activity.timestamp == NOW
    assert activity.actor == actor
    assert activity.properties == {"command": "say hi"}

    uow.activity_logs.create.assert_called_once()
    subjects = uow.activity_logs.create.call_args.args[1]
    assert [s.subject for s in subjects] == [server]
    uow.commit.assert_called_once()

    assert len(logged) == 1
    assert logged[0].activity is activity
    assert [s.subject for s in logged[0].subjects] == [server]


@pytest.mark.asyncio
async def test_system_activity_has_no_actor(service, logged):
    activity = await service.record("server:settings.reinstall", ip="127.0.0.1")

    assert activity.actor is None
    assert activity.actor_type is None
    assert activity.actor_id is None


@pytest.mark.asyncio
async def test_caller_timestamp_is_ignored(service):
    activity = await service.record_payload(
        {"event": "auth:success", "ip": "10.0.0.1", "timestamp": datetime(2001, 1, 1)}
    )

    assert activity.timestamp == NOW


@pytest.mark.asyncio
async def test_properties_keep_insertion_order(service):
    activity = await service.record(
        "server:file.rename", ip="10.0.0.1", properties={"directory": "/", "from": "a", "to": "b"}
    )

    assert list(activity.properties) == ["directory", "from", "to"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"event": "auth:success", "ip": "10.0.0.1", "properties": {"when": object()}},
        {"event": "auth:success", "ip": "10.0.0.1", "properties": ["not", "a", "mapping"]},
        {"event": "auth:success", "ip": "10.0.0.1", "batch": "not-a-uuid"},
        {"event": "", "ip": "10.0.0.1"},
        {"ip": "10.0.0.1"},
        {"event": "auth:success"},
    ],
    ids=["unserializable", "list-properties", "bad-batch", "empty-event", "no-event", "no-ip"],
)
async def test_invalid_payload_is_rejected_before_insert(service, uow, logged, payload):
    with pytest.raises(ValidationError):
        await service.record_payload(payload)

    uow.activity_logs.create.assert_not_called()
    uow.commit.assert_not_called()
    assert logged == []


@pytest.mark.asyncio
async def test_persistence_failure_propagates_without_notification(service, uow, logged):
    uow.activity_logs.create.side_effect = RuntimeError("constraint violation")

    with pytest.raises(RuntimeError):
        await service.record("auth:success", ip="10.0.0.1")

    uow.commit.assert_not_called()
    assert logged == []


@pytest.mark.asyncio
async def test_commit_failure_propagates_without_notification(service, uow, logged):
    uow.commit.side_effect = RuntimeError("disk I/O error")

    with pytest.raises(RuntimeError):
        await service.record("auth:success", ip="10.0.0.1")

    assert logged == []


@pytest.mark.asyncio
async def test_list_for_display_excludes_disabled_events(service, uow):
    actor = ActorReference(type="user", id=str(uuid4()))

    await service.list_for_display(actor, limit=10, cursor="abc")

    uow.activity_logs.get_by_actor_paginated.assert_called_once_with(
        actor, exclude_events=DISABLED_EVENTS, limit=10, cursor="abc"
    )


@pytest.mark.asyncio
async def test_resolve_actor_uses_reference(service, uow):
    user = User(email="ada@example.com", username="ada", password_hash="x")
    uow.actors = MagicMock()
    uow.actors.resolve = AsyncMock(return_value=user)
    activity = await service.record("auth:success", ip="10.0.0.1", actor=ActorReference.for_model(user))

    resolved = await service.resolve_actor(activity)

    assert resolved is user
    uow.actors.resolve.assert_called_once_with(ActorReference(type="user", id=str(user.id)))


@pytest.mark.asyncio
async def test_summarize_falls_back_to_system_user(service, uow):
    uow.actors = MagicMock()
    uow.actors.resolve = AsyncMock()
    activity = await service.record("auth:success", ip="10.0.0.1")

    html = await service.summarize(activity, now=NOW)

    uow.actors.resolve.assert_not_called()
    assert "system &mdash; auth:success" in html
    assert "Logged in" in html
