# backoffice/services/order_service.py
from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Sequence

from sqlalchemy.orm import Session

from backoffice.data.database import atomic
from backoffice.data.models.order import OrderModel
from backoffice.data.models.order_item import OrderItemModel
from backoffice.domain.errors import (
    InsufficientStockError,
    InvalidRequestError,
    NotFoundError,
    ProductUnavailableError,
)
from backoffice.domain.status import OrderStatus, parse_status
from backoffice.repos.order_repo import OrderRepo
from backoffice.repos.product_repo import ProductRepo
from backoffice.repos.user_repo import UserRepo
from backoffice.services.notification_service import NotificationService
from backoffice.utils.pagination import Page, Pagination
from backoffice.utils.logging import get_logger

logger = get_logger(__name__)

CENT = Decimal("0.01")


def _field(item: Any, name: str):
    if isinstance(item, Mapping):
        return item.get(name)
    return getattr(item, name, None)


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def normalize_items(items: Sequence[Any] | None) -> list[tuple[int, int]]:
    """Zamienia pozycje (dict albo obiekt z product_id/quantity) na pary (product_id, quantity)."""
    if not items:
        raise InvalidRequestError("Order must contain at least one item")

    lines = []
    for item in items:
        product_id = _field(item, "product_id")
        quantity = _field(item, "quantity")

        if not _is_int(product_id) or product_id <= 0:
            raise InvalidRequestError("Each item must have a valid product_id")
        if not _is_int(quantity) or quantity <= 0:
            raise InvalidRequestError("Quantity must be greater than 0")

        lines.append((product_id, quantity))
    return lines


class OrderService:
    """
    Orkiestrator skladania zamowien: walidacja pozycji, rezerwacja stanu i zapis.

    create_order to jedna transakcja: walidacja wszystkich pozycji
    (bez zmian stanow), potem zapis zamowienia, pozycji i zdjecie
    towaru ze stanu. Dowolny blad = rollback calosci.
    """

    def __init__(self, db: Session, notification_service: NotificationService | None = None):
        self.db = db
        self.repo = OrderRepo(db)
        self.products = ProductRepo(db)
        self.users = UserRepo(db)
        self.notification_service = notification_service or NotificationService()

    def create_order(self, user_id: int, items: Sequence[Any]) -> int:
        """
        Use Case: Tworzenie zamówienia.

        1. Waliduje pozycje (niepuste, quantity > 0)
        2. Sprawdza, czy użytkownik istnieje
        3. Dla kazdej pozycji: produkt istnieje, jest aktywny, stan >= quantity;
           liczy total z cen odczytanych w tym samym przebiegu
        4. Zapisuje zamówienie (pending), pozycje ze snapshotem ceny i zdejmuje stan
        5. Po commit wysyła powiadomienie (async)
        """
        lines = normalize_items(items)

        with atomic(self.db):
            if self.users.get_user(user_id) is None:
                raise NotFoundError("user", user_id)

            # przebieg walidacyjny - nic nie zmienia w bazie
            total = Decimal("0.00")
            priced = []
            for product_id, quantity in lines:
                product = self.products.get_product(product_id)

                if product is None:
                    raise NotFoundError("product", product_id)

                if not product.is_purchasable():
                    raise ProductUnavailableError(product.id, product.name)

                if product.stock < quantity:
                    raise InsufficientStockError(
                        product_id=product.id,
                        available=product.stock,
                        requested=quantity,
                        name=product.name,
                    )

                price = Decimal(product.price)
                total += price * quantity
                priced.append((product_id, quantity, price))

            # przebieg zapisu
            order = self.repo.add_order(
                OrderModel(
                    user_id=user_id,
                    total=total.quantize(CENT),
                    status=OrderStatus.PENDING.value,
                )
            )

            for product_id, quantity, price in priced:
                self.repo.add_item(
                    OrderItemModel(
                        order_id=order.id,
                        product_id=product_id,
                        quantity=quantity,
                        price=price,
                    )
                )
                # warunkowy UPDATE - moze sie nie udac przy wyscigu albo powtorzonym produkcie
                self.products.adjust_stock(product_id, -quantity)

        logger.info(f"Order {order.id} created for user {user_id} with {len(lines)} item(s), total {order.total}")

        self.notification_service.send_order_notification(user_id, order.id)

        return order.id

    def get_order(self, order_id: int) -> OrderModel:
        order = self.repo.get_order(order_id)

        if not order:
            raise NotFoundError("order", order_id)

        return order

    def get_order_with_items(self, order_id: int) -> tuple[OrderModel, list[OrderItemModel]]:
        order = self.get_order(order_id)
        return order, self.repo.get_items(order_id)

    def list_orders(self, pagination: Pagination) -> Page:
        return self.repo.page(pagination)

    def list_orders_by_user(self, user_id: int, pagination: Pagination) -> Page:
        return self.repo.page_by_user(user_id, pagination)

    def list_orders_by_status(self, status: str, pagination: Pagination) -> Page:
        return self.repo.page_by_status(parse_status(status).value, pagination)
