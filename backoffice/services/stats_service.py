# backoffice/services/stats_service.py
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy import and_, case, func, select
from sqlalchemy.orm import Session

from backoffice.data.models.order import OrderModel
from backoffice.data.models.product import ProductModel
from backoffice.domain.status import REVENUE_STATUSES, OrderStatus
from backoffice.utils.settings import LOW_STOCK_THRESHOLD


def round2(value) -> Decimal:
    if value is None:
        return Decimal("0.00")
    return Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def _count_if(condition):
    return func.coalesce(func.sum(case((condition, 1), else_=0)), 0)


class StatsService:
    """
    Statystyki tylko do odczytu. Kazda liczona jednym zapytaniem
    agregujacym, zaokraglenie do 2 miejsc dopiero na wyjsciu.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_order_stats(self) -> dict:
        in_revenue = OrderModel.status.in_([s.value for s in REVENUE_STATUSES])
        statuses = list(OrderStatus)

        row = self.db.execute(
            select(
                func.count(OrderModel.id),
                *[_count_if(OrderModel.status == s.value) for s in statuses],
                func.sum(case((in_revenue, OrderModel.total))),
                func.avg(case((in_revenue, OrderModel.total))),
            )
        ).one()

        total, *counts, revenue, average = tuple(row)

        stats = {"total": int(total or 0)}
        stats.update({s.value: int(c) for s, c in zip(statuses, counts)})
        stats["total_revenue"] = round2(revenue)
        stats["average_order_value"] = round2(average)
        return stats

    def get_product_stats(self, low_stock_threshold: int = LOW_STOCK_THRESHOLD) -> dict:
        active = ProductModel.is_active.is_(True)
        has_category = and_(
            active,
            ProductModel.category.is_not(None),
            ProductModel.category != "",
        )

        row = self.db.execute(
            select(
                func.count(ProductModel.id),
                _count_if(active),
                _count_if(ProductModel.is_active.is_(False)),
                _count_if(and_(active, ProductModel.stock <= low_stock_threshold)),
                func.count(func.distinct(case((has_category, ProductModel.category)))),
                func.avg(case((active, ProductModel.price))),
            )
        ).one()

        total, active_count, inactive_count, low_stock, categories, average_price = row

        return {
            "total": int(total or 0),
            "active": int(active_count),
            "inactive": int(inactive_count),
            "low_stock": int(low_stock),
            "categories": int(categories or 0),
            "average_price": round2(average_price),
        }
