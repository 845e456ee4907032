"""
schemas/company.py
------------------
Pydantic request/response models for Company.

Naming convention:
  CompanyCreate  → inbound request body
  CompanyRead    → outbound response body
"""

from datetime import datetime

from pydantic import Field, field_validator

from inventory_app.schemas.base import CamelModel


class CompanyCreate(CamelModel):
    name: str = Field(
        ...,
        min_length=2,
        max_length=255,
        examples=["Acme Distribution"],
        description="Unique company name",
    )

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip()


class CompanyRead(CamelModel):
    id: str
    name: str
    created_at: datetime
