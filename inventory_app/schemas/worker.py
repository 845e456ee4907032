"""
schemas/worker.py
-----------------
Pydantic models for distribution recipients.
"""

from pydantic import Field

from inventory_app.models.worker import Gender
from inventory_app.schemas.base import CamelModel


class WorkerCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255, examples=["Ravi Kumar"])
    gender: Gender = Gender.male
    mobile: str = Field(default="", max_length=32)


class WorkerRead(CamelModel):
    id: str
    company_id: str
    name: str
    gender: str
    mobile: str
