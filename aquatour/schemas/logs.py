"""Log Schemas — request bodies for manual audit entries and access log sessions.

Invariants:
    - Both snake_case and camelCase keys accepted (alias_generator=to_camel)
    - AuditLogCreate.category limited to administrador | asesor when given
"""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AuditLogCreate(_CamelModel):
    user_id: int | None = None
    user_name: str | None = Field(None, max_length=200)
    user_role: str | None = Field(None, max_length=50)
    action: str = Field(min_length=1, max_length=100)
    category: Literal["administrador", "asesor"] | None = None
    entity: str | None = Field(None, max_length=50)
    entity_id: int | None = None
    entity_name: str | None = Field(None, max_length=255)
    details: dict[str, Any] | str | None = None


class AccessLogCreate(_CamelModel):
    user_id: int | None = None
    user_name: str | None = Field(None, max_length=200)
    user_role: str | None = Field(None, max_length=50)
    logged_in_at: datetime | None = None
    ip_address: str | None = Field(None, max_length=64)
    browser: str | None = Field(None, max_length=100)
    operating_system: str | None = Field(None, max_length=100)
