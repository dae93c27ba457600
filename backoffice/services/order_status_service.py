# backoffice/services/order_status_service.py
from sqlalchemy.orm import Session

from backoffice.data.database import atomic
from backoffice.data.models.order import OrderModel
from backoffice.domain.errors import (
    ForbiddenError,
    InvalidTransitionError,
    NotCancellableError,
    NotFoundError,
    StoreFailure,
)
from backoffice.domain.status import RESTOCKABLE, OrderStatus, can_transition, parse_status
from backoffice.repos.order_repo import OrderRepo
from backoffice.repos.product_repo import ProductRepo
from backoffice.services.notification_service import NotificationService
from backoffice.utils.logging import get_logger

logger = get_logger(__name__)


class OrderStatusService:
    """
    Maszyna stanow zamowienia.

    pending -> processing | cancelled
    processing -> shipped | cancelled
    shipped -> delivered
    delivered, cancelled - koncowe

    override=True (admin) pozwala na dowolny skok poza wyjsciem z cancelled.
    Anulowanie z pending/processing oddaje towar na stan w tej samej transakcji.
    """

    def __init__(self, db: Session, notification_service: NotificationService | None = None):
        self.db = db
        self.repo = OrderRepo(db)
        self.products = ProductRepo(db)
        self.notification_service = notification_service or NotificationService()

    def set_status(self, order_id: int, new_status, override: bool = False) -> OrderModel:
        target = parse_status(new_status)
        restocked = False

        with atomic(self.db):
            order = self.repo.get_order(order_id)
            if order is None:
                raise NotFoundError("order", order_id)

            current = parse_status(order.status)

            # ten sam status - nic do zrobienia (np. drugie anulowanie)
            if current == target:
                logger.info(f"Order {order_id} already {target.value}, nothing to do")
                return order

            if current == OrderStatus.CANCELLED or not (override or can_transition(current, target)):
                raise InvalidTransitionError(current.value, target.value)

            rowcount = self.repo.update_status(order_id, current.value, target.value)

            if rowcount == 0:
                # ktos zmienil status miedzy odczytem a zapisem
                if order.status == target.value:
                    logger.info(f"Order {order_id} concurrently moved to {target.value}")
                    return order
                raise StoreFailure(
                    f"Order {order_id} was modified concurrently",
                    retryable=True,
                )

            if target == OrderStatus.CANCELLED and current in RESTOCKABLE:
                for item in self.repo.get_items(order_id):
                    self.products.adjust_stock(item.product_id, item.quantity)
                restocked = True

        logger.info(
            f"Order {order_id} status {current.value} -> {target.value}"
            + (" (override)" if override and not can_transition(current, target) else "")
            + (", stock restored" if restocked else "")
        )

        if target == OrderStatus.CANCELLED:
            self.notification_service.send_order_cancelled_notification(order.user_id, order_id)

        return order

    def cancel_order(self, order_id: int) -> OrderModel:
        return self.set_status(order_id, OrderStatus.CANCELLED)

    def cancel_order_as_owner(self, order_id: int, user_id: int) -> OrderModel:
        """
        Anulowanie przez klienta: tylko wlasne zamowienie
        i tylko w statusie pending albo processing.
        """
        order = self.repo.get_order(order_id)

        if not order:
            raise NotFoundError("order", order_id)

        if order.user_id != user_id:
            raise ForbiddenError("You are not allowed to cancel this order")

        if parse_status(order.status) not in RESTOCKABLE:
            raise NotCancellableError(order_id, order.status)

        return self.cancel_order(order_id)
