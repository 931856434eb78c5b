"""Quote Schemas — request body for the companion replacement endpoint."""

from pydantic import BaseModel, Field


class CompanionsReplace(BaseModel):
    """Full companion set for a quote. Each item is validated by the repository."""
    companions: list[dict] = Field(default_factory=list)
