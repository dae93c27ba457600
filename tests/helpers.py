"""Small query helpers shared by the tests."""

from sqlalchemy import select

from backoffice.data.models import OrderItemModel, OrderModel, ProductModel
from backoffice.utils.pagination import count_matching


def stock_of(db, product_id: int) -> int:
    return db.execute(
        select(ProductModel.stock).where(ProductModel.id == product_id)
    ).scalar_one()


def order_count(db) -> int:
    return count_matching(db, OrderModel)


def order_item_count(db) -> int:
    return count_matching(db, OrderItemModel)
