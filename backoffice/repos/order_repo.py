# backoffice/repos/order_repo.py
from sqlalchemy import select, update
from sqlalchemy.orm import Session

from backoffice.data.models.order import OrderModel
from backoffice.data.models.order_item import OrderItemModel
from backoffice.utils.pagination import Page, Pagination, fetch_page


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_order(self, order_id: int) -> OrderModel | None:
        return self.db.get(OrderModel, order_id, populate_existing=True)

    def add_order(self, order: OrderModel) -> OrderModel:
        self.db.add(order)
        self.db.flush()
        return order

    def add_item(self, item: OrderItemModel) -> OrderItemModel:
        self.db.add(item)
        self.db.flush()
        return item

    def get_items(self, order_id: int) -> list[OrderItemModel]:
        return list(
            self.db.execute(
                select(OrderItemModel)
                .where(OrderItemModel.order_id == order_id)
                .order_by(OrderItemModel.id)
            ).scalars().all()
        )

    def update_status(self, order_id: int, expected: str, status: str) -> int:
        # warunek na poprzedni status, np update set status=cancelled where id=1 and status=pending
        result = self.db.execute(
            update(OrderModel)
            .where(OrderModel.id == order_id, OrderModel.status == expected)
            .values(status=status)
            .execution_options(synchronize_session=False)
        )
        self.db.get(OrderModel, order_id, populate_existing=True)
        return result.rowcount

    def page(self, pagination: Pagination, *criteria) -> Page:
        return fetch_page(
            self.db,
            OrderModel,
            *criteria,
            pagination=pagination,
            order_by=(OrderModel.created_at.desc(), OrderModel.id.desc()),
        )

    def page_by_user(self, user_id: int, pagination: Pagination) -> Page:
        return self.page(pagination, OrderModel.user_id == user_id)

    def page_by_status(self, status: str, pagination: Pagination) -> Page:
        return self.page(pagination, OrderModel.status == status)
