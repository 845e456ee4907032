"""
schemas/base.py
---------------
Shared pydantic base for request/response bodies.

The API speaks camelCase JSON (workerId, totalStock, pricePerUnit);
Python code uses snake_case attributes. Inbound bodies accept either form.
"""

from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel

# Decimal internally, plain JSON number on the wire
MoneyOut = Annotated[
    Decimal,
    PlainSerializer(lambda v: float(v), return_type=float, when_used="json"),
]


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
