"""Entity Repository — shared find/create/update/delete flow for every CRM entity.

Invariants:
    - Projection always carries every declared field; missing optional columns are None
    - create: required fields present and non-blank, uniqueness checked, insert, re-read
    - update: row must exist; only present fields are written; empty payload writes nothing
    - create: an explicit null on a non-nullable field falls back to its default
    - update: an explicit null on a non-nullable field fails with ValidationError
    - update: a required field explicitly set to blank fails; changed unique values are
      validated excluding the row itself
    - delete: row must exist; ReferentialGuard runs before the delete in the same transaction
    - Audit events are emitted only after the mutation committed

Design Decisions:
    - Template method: subclasses declare `kind`, `model`, `fields`, `unique_fields` and
      override small hooks (prepare_create, project, apply_children) instead of re-implementing
      the flow (ADR: one flow, nine entities)
    - Phone/document values are stored normalized so uniqueness is plain column equality
    - NotFoundError over returning None from mutations: callers map it to 404 uniformly
"""

import copy
import logging
from typing import Any

from sqlalchemy import delete, insert, select, update
from sqlalchemy.sql import Select

from aquatour.core.domain_types import Actor, EntityKind, EnumMappingMode, UniqueField
from aquatour.core.errors import NotFoundError, ValidationError
from aquatour.core.field_aliases import (
    FieldSpec, blank_required, null_fields, parse_values, require_fields,
    resolve_present, to_columns,
)
from aquatour.core.repository_protocols import AuditRecorder
from aquatour.core.uniqueness_rules import normalize_unique_value
from aquatour.infrastructure.database import DataGateway
from aquatour.services.referential_guard import ReferentialGuard
from aquatour.services.uniqueness_validator import UniquenessValidator

logger = logging.getLogger(__name__)


class EntityRepository:
    """Base repository. Subclasses fill in the class attributes below."""

    kind: EntityKind
    model: type
    fields: tuple[FieldSpec, ...] = ()
    unique_fields: tuple[tuple[UniqueField, str], ...] = ()
    read_only_columns: tuple[str, ...] = ()
    defaults: dict[str, Any] = {}
    references: dict[str, type] = {}

    def __init__(
        self,
        gateway: DataGateway,
        audit: AuditRecorder | None = None,
        enum_mode: EnumMappingMode = EnumMappingMode.STRICT,
    ):
        self.gateway = gateway
        self.audit = audit
        self.enum_mode = enum_mode
        self.validator = UniquenessValidator(gateway)
        self.guard = ReferentialGuard(gateway)

    @property
    def updatable_fields(self) -> tuple[FieldSpec, ...]:
        return tuple(spec for spec in self.fields if spec.updatable)

    # ─── Projection ──────────────────────────────────────────────

    def base_query(self) -> Select:
        return select(*self.model.__table__.c)

    def order_by(self) -> tuple:
        return (self.model.id,)

    def project(self, row: dict) -> dict:
        out: dict[str, Any] = {"id": row["id"]}
        for spec in self.fields:
            if spec.projected:
                out[spec.name] = row.get(spec.column_name)
        for column in self.read_only_columns:
            out[column] = row.get(column)
        return out

    async def project_rows(self, rows: list[dict]) -> list[dict]:
        """Hook for projections that need extra queries (e.g. child collections)."""
        return [self.project(row) for row in rows]

    def display_name(self, record: dict) -> str | None:
        """Human label stored with audit events."""
        return record.get("name")

    # ─── Reads ───────────────────────────────────────────────────

    async def find_all(self) -> list[dict]:
        rows = await self.gateway.query(self.base_query().order_by(*self.order_by()))
        return await self.project_rows(rows)

    async def find_where(self, *criteria) -> list[dict]:
        stmt = self.base_query().where(*criteria).order_by(*self.order_by())
        return await self.project_rows(await self.gateway.query(stmt))

    async def find_by_id(self, entity_id: int) -> dict | None:
        row = await self.gateway.query_one(
            self.base_query().where(self.model.id == entity_id),
        )
        if row is None:
            return None
        return (await self.project_rows([row]))[0]

    async def get(self, entity_id: int) -> dict:
        record = await self.find_by_id(entity_id)
        if record is None:
            raise NotFoundError(self.kind.display_name, entity_id)
        return record

    # ─── Hooks ───────────────────────────────────────────────────

    def prepare_create(self, values: dict[str, Any]) -> dict[str, Any]:
        for name, default in self.defaults.items():
            if values.get(name) is None:
                values[name] = copy.copy(default)
        return values

    def prepare_update(
        self, values: dict[str, Any], existing: dict,
    ) -> dict[str, Any]:
        return values

    def validate_record(self, values: dict[str, Any], existing: dict | None) -> None:
        """Cross-field checks; `existing` is None on create."""

    def child_updates(self, payload: dict) -> Any:
        """Extract a child collection update from the payload; None means untouched."""
        return None

    async def apply_children(self, entity_id: int, children: Any) -> None:
        pass

    def check_delete_allowed(self, record: dict) -> None:
        pass

    # ─── Mutations ───────────────────────────────────────────────

    def _normalize_unique(self, values: dict[str, Any]) -> dict[str, Any]:
        for field, name in self.unique_fields:
            if name in values:
                values[name] = normalize_unique_value(values[name], field)
        return values

    async def _check_references(self, values: dict[str, Any]) -> None:
        for name, model in self.references.items():
            ref_id = values.get(name)
            if ref_id is None:
                continue
            found = await self.gateway.scalar(select(model.id).where(model.id == ref_id))
            if found is None:
                raise ValidationError(
                    f"Referenced {name} '{ref_id}' does not exist", fields=[name],
                )

    async def _validate_unique(
        self, values: dict[str, Any], existing: dict | None = None,
    ) -> None:
        for field, name in self.unique_fields:
            value = values.get(name)
            if value is None:
                continue
            if existing is None:
                await self.validator.validate_unique(value, field)
            elif value != existing.get(name):
                await self.validator.validate_unique(
                    value, field,
                    exclude_table=self.model.__tablename__,
                    exclude_id=existing["id"],
                )

    async def create(self, payload: dict, *, actor: Actor | None = None) -> dict:
        values = resolve_present(payload, self.fields)
        values = parse_values(values, self.fields)
        values = self._normalize_unique(values)
        require_fields(values, self.fields)
        values = self.prepare_create(values)
        for name in null_fields(values, self.fields):
            del values[name]
        self.validate_record(values, None)
        children = self.child_updates(payload)

        async with self.gateway.transaction():
            await self._check_references(values)
            await self._validate_unique(values)
            result = await self.gateway.execute(
                insert(self.model).values(**to_columns(values, self.fields)),
            )
            entity_id = result.inserted_primary_key[0]
            if children is not None:
                await self.apply_children(entity_id, children)
            created = await self.get(entity_id)

        logger.info(
            f"Created {self.kind.label} {entity_id}",
            extra={"entity": self.kind.label, "entity_id": entity_id,
                   "actor_id": actor.user_id if actor else None},
        )
        await self._record(actor, "create", entity_id, created, {"new": created})
        return created

    async def update(
        self, entity_id: int, payload: dict, *, actor: Actor | None = None,
    ) -> dict:
        existing = await self.get(entity_id)

        values = resolve_present(payload, self.updatable_fields)
        values = parse_values(values, self.updatable_fields)
        values = self._normalize_unique(values)
        blank = blank_required(values, self.updatable_fields)
        if blank:
            raise ValidationError(
                f"Required fields cannot be empty: {', '.join(blank)}", fields=blank,
            )
        nulls = null_fields(values, self.updatable_fields)
        if nulls:
            raise ValidationError(
                f"Fields cannot be null: {', '.join(nulls)}", fields=nulls,
            )
        children = self.child_updates(payload)
        if not values and children is None:
            return existing

        values = self.prepare_update(values, existing)
        self.validate_record(values, existing)

        async with self.gateway.transaction():
            await self._check_references(values)
            await self._validate_unique(values, existing)
            if values:
                await self.gateway.execute(
                    update(self.model)
                    .where(self.model.id == entity_id)
                    .values(**to_columns(values, self.fields)),
                )
            if children is not None:
                await self.apply_children(entity_id, children)
            updated = await self.get(entity_id)

        await self._record(
            actor, "update", entity_id, updated,
            {"previous": existing, "changes": sorted(values)},
        )
        return updated

    async def delete(self, entity_id: int, *, actor: Actor | None = None) -> bool:
        async with self.gateway.transaction():
            existing = await self.get(entity_id)
            self.check_delete_allowed(existing)
            await self.guard.assert_deletable(self.kind, entity_id)
            result = await self.gateway.execute(
                delete(self.model).where(self.model.id == entity_id),
            )
            deleted = result.rowcount > 0

        if deleted:
            await self._record(actor, "delete", entity_id, existing, {"previous": existing})
        return deleted

    async def _record(
        self, actor: Actor | None, action: str, entity_id: int,
        record: dict, details: dict | None = None,
    ) -> None:
        if self.audit is None:
            return
        await self.audit.record(
            actor, action, self.kind, entity_id,
            entity_name=self.display_name(record), details=details,
        )
