#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from backoffice.data.models.user import UserModel
from backoffice.data.models.product import ProductModel
from backoffice.data.models.order import OrderModel
from backoffice.data.models.order_item import OrderItemModel

__all__ = ["UserModel", "ProductModel", "OrderModel", "OrderItemModel"]
