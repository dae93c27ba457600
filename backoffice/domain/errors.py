# backoffice/domain/errors.py
"""
Bledy domenowe silnika zamowien.

Kazdy blad dziedziczy po OrderError i dodatkowo po wbudowanym wyjatku
(ValueError / LookupError / PermissionError), tak jak wczesniej serwisy
rzucaly ValueError i PermissionError - warstwa HTTP mapuje je na kody.
"""


class OrderError(Exception):
    """Baza dla wszystkich bledow domenowych."""


class NotFoundError(OrderError, LookupError):
    def __init__(self, entity: str, entity_id=None):
        self.entity = entity
        self.entity_id = entity_id
        if entity_id is None:
            message = f"{entity.capitalize()} not found"
        else:
            message = f"{entity.capitalize()} with id {entity_id} not found"
        super().__init__(message)


class InvalidRequestError(OrderError, ValueError):
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class DuplicateError(InvalidRequestError):
    def __init__(self, entity: str, field: str):
        self.entity = entity
        self.field = field
        super().__init__(f"{entity.capitalize()} with this {field} already exists")


class NotCancellableError(InvalidRequestError):
    def __init__(self, order_id: int, status: str):
        self.order_id = order_id
        self.status = status
        super().__init__(
            f"Order {order_id} is {status}; only pending or processing orders can be cancelled"
        )


class ProductUnavailableError(OrderError, ValueError):
    def __init__(self, product_id: int, name: str | None = None):
        self.product_id = product_id
        self.name = name
        super().__init__(f'Product "{name or product_id}" is not available')


class InsufficientStockError(OrderError, ValueError):
    def __init__(self, product_id: int, available: int, requested: int, name: str | None = None):
        self.product_id = product_id
        self.available = available
        self.requested = requested
        self.name = name
        super().__init__(
            f'Insufficient stock for "{name or product_id}". '
            f"Available: {available}, requested: {requested}"
        )


class InvalidStatusError(OrderError, ValueError):
    def __init__(self, value, message: str | None = None):
        self.value = value
        super().__init__(message or f"Invalid order status: {value!r}")


class InvalidTransitionError(InvalidStatusError):
    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__(target, f"Cannot change order status from {current} to {target}")


class ForbiddenError(OrderError, PermissionError):
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class StoreFailure(OrderError):
    """
    Blad bazy (timeout, deadlock, brak polaczenia, przegrany wyscig).
    retryable=True -> wywolujacy moze sprobowac ponownie, core sam nie ponawia.
    """

    def __init__(self, cause, retryable: bool = False):
        self.cause = cause
        self.retryable = retryable
        super().__init__(f"Store failure: {cause}")
