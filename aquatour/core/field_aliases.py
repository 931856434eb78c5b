"""Field Alias Tables — explicit, ordered mapping from payload keys to columns.

Invariants:
    - Each FieldSpec accepts its snake_case name, its camelCase form, then any extra aliases, in that order
    - The first accepted key PRESENT in the payload wins (an explicit null counts as present)
    - Only present fields are returned: absent fields are never written
    - Required means present and non-blank; blank is None or whitespace-only text
    - A non-nullable field may be omitted but never explicitly set to null on update

Design Decisions:
    - Static per-entity tables over ad hoc `payload.a or payload.b` fallbacks (ADR: auditable mapping)
    - Pure functions: repositories call these before touching the gateway
"""

from dataclasses import dataclass
from typing import Any, Callable

from aquatour.core.errors import ValidationError


@dataclass(frozen=True)
class FieldSpec:
    """One public field of an entity payload."""
    name: str
    column: str | None = None
    aliases: tuple[str, ...] = ()
    required: bool = False
    parse: Callable[[Any], Any] | None = None
    updatable: bool = True
    projected: bool = True
    nullable: bool = True

    @property
    def column_name(self) -> str:
        return self.column or self.name

    @property
    def keys(self) -> tuple[str, ...]:
        ordered = [self.name, to_camel_case(self.name), *self.aliases]
        return tuple(dict.fromkeys(ordered))


def to_camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def resolve_present(payload: dict, specs: tuple[FieldSpec, ...]) -> dict[str, Any]:
    """Return {field name: raw value} for every field present under any accepted key."""
    present: dict[str, Any] = {}
    for spec in specs:
        for key in spec.keys:
            if key in payload:
                present[spec.name] = payload[key]
                break
    return present


def missing_required(
    values: dict[str, Any], specs: tuple[FieldSpec, ...],
) -> list[str]:
    return [
        spec.name for spec in specs
        if spec.required and is_blank(values.get(spec.name))
    ]


def blank_required(
    values: dict[str, Any], specs: tuple[FieldSpec, ...],
) -> list[str]:
    """Required fields explicitly present but blank (update path)."""
    return [
        spec.name for spec in specs
        if spec.required and spec.name in values and is_blank(values[spec.name])
    ]


def null_fields(
    values: dict[str, Any], specs: tuple[FieldSpec, ...],
) -> list[str]:
    """Non-nullable fields present with a None value (after parsing)."""
    return [
        spec.name for spec in specs
        if not spec.nullable and spec.name in values and values[spec.name] is None
    ]


def parse_values(
    values: dict[str, Any], specs: tuple[FieldSpec, ...],
) -> dict[str, Any]:
    """Apply each spec's parser; blank text becomes None for typed fields."""
    by_name = {spec.name: spec for spec in specs}
    parsed: dict[str, Any] = {}
    for name, value in values.items():
        spec = by_name[name]
        if spec.parse is None or value is None:
            parsed[name] = value
            continue
        if isinstance(value, str) and not value.strip():
            parsed[name] = None
            continue
        try:
            parsed[name] = spec.parse(value)
        except (TypeError, ValueError) as e:
            raise ValidationError(
                f"Invalid value for field '{name}': {e}", fields=[name],
            ) from e
    return parsed


def to_columns(
    values: dict[str, Any], specs: tuple[FieldSpec, ...],
) -> dict[str, Any]:
    by_name = {spec.name: spec for spec in specs}
    return {by_name[name].column_name: value for name, value in values.items()}


def require_fields(values: dict[str, Any], specs: tuple[FieldSpec, ...]) -> None:
    missing = missing_required(values, specs)
    if missing:
        raise ValidationError(
            f"Missing required fields: {', '.join(missing)}", fields=missing,
        )
