"""Auth Schemas — login request body.

Design Decisions:
    - email/password optional at the schema level: AuthService reports missing
      credentials with the same 400 envelope as every other missing field
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class LoginRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    email: str | None = Field(None, max_length=255)
    password: str | None = Field(None, max_length=255)
    browser: str | None = Field(None, max_length=100)
    operating_system: str | None = Field(None, max_length=100)
