"""Audit Service — verifies recording, filtering, stats and purge.

Invariants:
    - Category derives from the actor role
    - A failing audit write never propagates
    - purge(None) removes everything; purge(n) keeps recent entries
"""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import update

from aquatour.core.domain_types import Actor, EntityKind
from aquatour.core.errors import ValidationError
from aquatour.models import AuditLog
from aquatour.services.audit_service import AuditService

ADMIN = Actor(user_id=1, name="Root Admin", role="administrador")
ADVISOR = Actor(user_id=2, name="Ana Ruiz", role="empleado")


async def test_record_derives_category(audit):
    await audit.record(ADMIN, "create", EntityKind.CLIENT, 10, entity_name="Carlos")
    await audit.record(ADVISOR, "update", EntityKind.QUOTE, 11)

    admin_rows = await audit.list_entries(category="administrador")
    advisor_rows = await audit.list_entries(category="asesor")
    assert [r["entity_name"] for r in admin_rows] == ["Carlos"]
    assert [r["entity"] for r in advisor_rows] == ["Quote"]


async def test_record_serializes_details(audit):
    await audit.record(ADMIN, "delete", EntityKind.CLIENT, 3, details={"previous": {"id": 3}})
    (entry,) = await audit.list_entries(entity_id=3)
    assert entry["details"] == '{"previous": {"id": 3}}'


async def test_record_failure_is_swallowed():
    class _BrokenGateway:
        def transaction(self):
            raise RuntimeError("store down")

    await AuditService(_BrokenGateway()).record(ADMIN, "create", EntityKind.CLIENT, 1)


async def test_disabled_recorder_writes_nothing(gateway, audit):
    await AuditService(gateway, enabled=False).record(ADMIN, "create", EntityKind.CLIENT, 1)
    assert await audit.list_entries() == []


async def test_create_entry_validates_category(audit):
    entry = await audit.create_entry({"action": "export", "user_role": "administrador"})
    assert entry["category"] == "administrador"
    with pytest.raises(ValidationError):
        await audit.create_entry({"action": "export", "category": "gerente"})
    with pytest.raises(ValidationError):
        await audit.create_entry({"category": "asesor"})


async def test_filters_combine(audit):
    await audit.record(ADMIN, "create", EntityKind.CLIENT, 1)
    await audit.record(ADMIN, "create", EntityKind.PACKAGE, 1)
    await audit.record(ADVISOR, "create", EntityKind.CLIENT, 2)

    rows = await audit.list_entries(user_id=1, entity="Client")
    assert len(rows) == 1
    assert rows[0]["entity_id"] == 1


async def test_newest_first(audit):
    await audit.record(ADMIN, "first", EntityKind.CLIENT, 1)
    await audit.record(ADMIN, "second", EntityKind.CLIENT, 1)
    assert [r["action"] for r in await audit.list_entries()] == ["second", "first"]


async def test_stats(audit):
    await audit.record(ADMIN, "create", EntityKind.CLIENT, 1)
    await audit.record(ADMIN, "create", EntityKind.CLIENT, 2)
    await audit.record(ADVISOR, "delete", EntityKind.QUOTE, 3)

    stats = await audit.stats()
    assert stats["total"] == 3
    assert {r["category"]: r["count"] for r in stats["by_category"]} == {
        "administrador": 2, "asesor": 1,
    }
    assert stats["by_action"][0] == {"action": "create", "count": 2}
    assert stats["top_users"][0]["user_id"] == 1
    assert sum(d["count"] for d in stats["daily_activity"]) == 3


async def test_purge_older_than(audit, gateway):
    await audit.record(ADMIN, "old", EntityKind.CLIENT, 1)
    await audit.record(ADMIN, "new", EntityKind.CLIENT, 2)
    async with gateway.transaction():
        await gateway.execute(
            update(AuditLog)
            .where(AuditLog.action == "old")
            .values(created_at=datetime.now(timezone.utc) - timedelta(days=120)),
        )

    assert await audit.purge(older_than_days=90) == 1
    assert [r["action"] for r in await audit.list_entries()] == ["new"]


async def test_purge_all(audit):
    await audit.record(ADMIN, "a", EntityKind.CLIENT, 1)
    await audit.record(ADMIN, "b", EntityKind.CLIENT, 2)
    assert await audit.purge() == 2
    assert await audit.list_entries() == []


async def test_purge_rejects_negative_days(audit):
    with pytest.raises(ValidationError):
        await audit.purge(-1)
