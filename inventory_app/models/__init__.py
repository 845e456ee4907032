"""
models/__init__.py
------------------
Re-export all models so create_tables.py can import Base and discover
all tables via a single import:

    from inventory_app.models import Base
"""

from inventory_app.db.base import Base
from inventory_app.models.company import Company
from inventory_app.models.user import User, UserRole
from inventory_app.models.worker import Gender, Worker
from inventory_app.models.product import Product
from inventory_app.models.distribution import Distribution

__all__ = [
    "Base",
    "Company",
    "User",
    "UserRole",
    "Worker",
    "Gender",
    "Product",
    "Distribution",
]
