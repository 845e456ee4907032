"""
core/exceptions.py
------------------
Domain errors raised by the service layer.

Services never build HTTP responses. Each error carries the status code
and machine-readable code it maps to, and main.py renders every
InventoryError with a single exception handler.
"""

from typing import Any, Dict, Optional


class InventoryError(Exception):
    """Base exception for all inventory service failures."""

    status_code: int = 400
    code: str = "error"

    def __init__(self, message: str, **extra: Any) -> None:
        super().__init__(message)
        self.message = message
        self.extra: Dict[str, Any] = extra

    def to_dict(self) -> Dict[str, Any]:
        return {"detail": self.message, "code": self.code, **self.extra}


class NotFoundError(InventoryError):
    status_code = 404
    code = "not_found"


class CompanyNotFound(NotFoundError):
    def __init__(self, company_id: str) -> None:
        super().__init__(f"Company '{company_id}' not found", company_id=company_id)


class ProductNotFound(NotFoundError):
    def __init__(self, product_id: str) -> None:
        super().__init__(
            f"Product identity error for ID: {product_id}", product_id=product_id
        )


class WorkerNotFound(NotFoundError):
    def __init__(self, worker_id: str) -> None:
        super().__init__(f"Worker '{worker_id}' not found", worker_id=worker_id)


class UnauthorizedError(InventoryError):
    status_code = 401
    code = "unauthorized"


class PermissionDeniedError(InventoryError):
    status_code = 403
    code = "forbidden"


class ConflictError(InventoryError):
    status_code = 409
    code = "conflict"


class InsufficientStockError(InventoryError):
    """Raised when a line item asks for more than the product has on hand."""

    status_code = 409
    code = "insufficient_stock"

    def __init__(
        self,
        product_id: str,
        product_name: str,
        requested: int,
        available: int,
    ) -> None:
        super().__init__(
            f"Insufficient stock for {product_name}. "
            f"Requested: {requested}, Available: {available}",
            product_id=product_id,
            product_name=product_name,
            requested=requested,
            available=available,
        )
        self.product_id = product_id
        self.requested = requested
        self.available = available


class ValidationError(InventoryError):
    status_code = 422
    code = "validation_error"

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        if field is None:
            super().__init__(message)
        else:
            super().__init__(message, field=field)


class LedgerImmutableError(InventoryError):
    """Raised when code tries to change or remove a recorded distribution."""

    status_code = 500
    code = "ledger_immutable"
