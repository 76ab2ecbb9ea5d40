"""
Integration tests for the activity log store against SQLite

- Records are queryable by event and by actor
- Each record produces exactly one notification carrying the stored row
- Soft-deleted actors keep their history and stay resolvable
- Age-based pruning
"""
from datetime import datetime, timedelta

import pytest
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from panel_service.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from panel_service.app.use_cases.activity import ActivityLogPruner
from panel_service.domain.entities import ActivityLog, ActivityLogSubject, User
from panel_service.domain.references import ActorReference
from tests.fixtures.factories import create_user, days_ago

NOW = datetime(2024, 6, 1, 12, 0, 0)


@pytest.mark.asyncio
async def test_record_then_query_by_event(db_session: AsyncSession, activity_service_factory, logged_events):
    user = await create_user(db_session)
    service = activity_service_factory(now=NOW)

    activity = await service.record(
        "server:console.command",
        ip="192.168.1.10",
        actor=ActorReference.for_model(user),
        properties={"command": "say hello"},
    )

    found = await service.query_by_event("server:console.command")
    assert [row.id for row in found] == [activity.id]
    assert found[0].timestamp == NOW
    assert found[0].properties == {"command": "say hello"}
    assert await service.query_by_event("server:console") == []

    assert len(logged_events) == 1
    assert logged_events[0].activity.id == activity.id
    assert logged_events[0].activity.event == found[0].event
    assert logged_events[0].activity.timestamp == found[0].timestamp


@pytest.mark.asyncio
async def test_caller_timestamp_is_ignored(db_session: AsyncSession, activity_service_factory):
    service = activity_service_factory(now=NOW)

    activity = await service.record_payload(
        {"event": "auth:fail", "ip": "10.0.0.1", "timestamp": "1999-01-01T00:00:00"}
    )

    result = await db_session.execute(select(ActivityLog).where(ActivityLog.id == activity.id))
    assert result.scalar_one().timestamp == NOW


@pytest.mark.asyncio
async def test_query_by_actor_survives_soft_delete(db_session: AsyncSession, activity_service_factory):
    user = await create_user(db_session)
    reference = ActorReference.for_model(user)
    service = activity_service_factory(now=NOW)
    await service.record("auth:success", ip="10.0.0.1", actor=reference)
    await service.record("user:account.password-changed", ip="10.0.0.1", actor=reference)
    await service.record("auth:success", ip="10.0.0.2")

    uow = SqlAlchemyUnitOfWork(db_session)
    async with uow:
        stored = await uow.users.get_by_id(user.id)
        await uow.users.soft_delete(stored)
        await uow.commit()

    async with uow:
        assert await uow.users.get_by_id(user.id) is None

    records = await service.query_by_actor(reference)
    assert sorted(row.event for row in records) == ["auth:success", "user:account.password-changed"]

    actor = await service.resolve_actor(records[0])
    assert isinstance(actor, User)
    assert actor.id == user.id
    assert actor.is_deleted


@pytest.mark.asyncio
async def test_disabled_event_is_recorded_rendered_and_hidden(
    db_session: AsyncSession, activity_service_factory
):
    user = await create_user(db_session, username="alice")
    reference = ActorReference.for_model(user)
    service = activity_service_factory(now=NOW)

    activity = await service.record("server:file.upload", ip="203.0.113.7", actor=reference)

    assert [row.id for row in await service.query_by_event("server:file.upload")] == [activity.id]

    html = await service.summarize(activity, now=NOW + timedelta(minutes=3))
    assert "203.0.113.7" in html
    assert "alice" in html
    assert "Began a file upload" in html
    assert "3 minutes ago" in html

    records, _, next_cursor = await service.list_for_display(reference)
    assert records == []
    assert next_cursor is None


@pytest.mark.asyncio
async def test_subjects_are_stored_with_record(db_session: AsyncSession, activity_service_factory):
    user = await create_user(db_session)
    reference = ActorReference.for_model(user)
    service = activity_service_factory(now=NOW)

    activity = await service.record("event:password-reset", ip="10.0.0.1", actor=reference, subjects=[reference])

    records, subjects, _ = await service.list_for_display(reference)
    assert [row.id for row in records] == [activity.id]
    assert [(s.subject_type, s.subject_id) for s in subjects[activity.id]] == [("user", str(user.id))]


@pytest.mark.asyncio
async def test_prune_removes_records_past_window(db_session: AsyncSession, activity_service_factory):
    user = await create_user(db_session)
    reference = ActorReference.for_model(user)

    old = await activity_service_factory(now=days_ago(NOW, 31)).record(
        "auth:success", ip="10.0.0.1", actor=reference, subjects=[reference]
    )
    recent = await activity_service_factory(now=days_ago(NOW, 29)).record(
        "auth:success", ip="10.0.0.1", actor=reference
    )

    pruner = ActivityLogPruner(SqlAlchemyUnitOfWork(db_session), prune_days=30)

    assert await pruner.prune(now=NOW) == 1
    assert await pruner.prune(now=NOW) == 0

    result = await db_session.execute(select(ActivityLog))
    assert [row.id for row in result.scalars().all()] == [recent.id]

    result = await db_session.execute(
        select(ActivityLogSubject).where(ActivityLogSubject.activity_log_id == old.id)
    )
    assert result.scalars().all() == []


@pytest.mark.asyncio
async def test_prune_boundary_is_inclusive(db_session: AsyncSession, activity_service_factory):
    await activity_service_factory(now=days_ago(NOW, 30)).record("auth:success", ip="10.0.0.1")

    pruner = ActivityLogPruner(SqlAlchemyUnitOfWork(db_session), prune_days=30)

    assert await pruner.prune(now=NOW) == 1


@pytest.mark.asyncio
async def test_pagination_keeps_records_sharing_a_timestamp(db_session: AsyncSession, activity_service_factory):
    user = await create_user(db_session)
    reference = ActorReference.for_model(user)
    service = activity_service_factory(now=NOW)

    recorded = {(await service.record("auth:success", ip="10.0.0.1", actor=reference)).id for _ in range(3)}

    seen = []
    cursor = None
    while True:
        records, _, cursor = await service.list_for_display(reference, limit=1, cursor=cursor)
        seen.extend(row.id for row in records)
        if cursor is None:
            break

    assert len(seen) == 3
    assert set(seen) == recorded


@pytest.mark.asyncio
async def test_malformed_cursor_restarts_from_newest(db_session: AsyncSession, activity_service_factory):
    user = await create_user(db_session)
    reference = ActorReference.for_model(user)
    await activity_service_factory(now=NOW).record("auth:success", ip="10.0.0.1", actor=reference)

    records, _, _ = await activity_service_factory().list_for_display(reference, cursor="not-a-cursor")

    assert len(records) == 1


@pytest.mark.asyncio
async def test_unregistered_actor_type_renders_as_system(db_session: AsyncSession, activity_service_factory):
    service = activity_service_factory(now=NOW)

    activity = await service.record(
        "auth:success", ip="10.0.0.1", actor=ActorReference(type="api_key", id="7")
    )

    assert await service.resolve_actor(activity) is None

    html = await service.summarize(activity, now=NOW)
    assert "system &mdash; auth:success" in html
    assert "10.0.0.1" in html
