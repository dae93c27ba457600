# backoffice/services/product_service.py
from decimal import Decimal

from sqlalchemy.orm import Session

from backoffice.data.database import atomic
from backoffice.data.models.product import ProductModel
from backoffice.domain.errors import DuplicateError, InvalidRequestError, NotFoundError
from backoffice.domain.schemas import ProductCreate, ProductUpdate
from backoffice.repos.product_repo import ProductRepo
from backoffice.utils.pagination import Page, Pagination
from backoffice.utils.settings import LOW_STOCK_THRESHOLD
from backoffice.utils.logging import get_logger

logger = get_logger(__name__)


def _check_price_and_stock(price: Decimal | None, stock: int | None) -> None:
    if price is not None and price <= 0:
        raise InvalidRequestError("Price must be greater than 0")
    if stock is not None and stock < 0:
        raise InvalidRequestError("Stock cannot be negative")


class ProductService:
    """
    Katalog produktow: nazwa unikalna wsrod aktywnych,
    cena > 0, stan >= 0, usuwanie tylko miekkie (is_active=False).
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = ProductRepo(db)

    def create_product(self, payload: ProductCreate) -> ProductModel:
        _check_price_and_stock(payload.price, payload.stock)

        with atomic(self.db):
            if self.repo.find_active_by_name(payload.name):
                raise DuplicateError("product", "name")

            product = self.repo.add_product(
                ProductModel(
                    name=payload.name,
                    description=payload.description,
                    price=payload.price,
                    stock=payload.stock,
                    category=payload.category,
                    is_active=True,
                )
            )

        logger.info(f"Product {product.id} ({product.name}) created with stock {product.stock}")
        return product

    def update_product(self, product_id: int, payload: ProductUpdate) -> ProductModel:
        # null dozwolony tylko dla pol opcjonalnych
        data = {
            key: value
            for key, value in payload.model_dump(exclude_unset=True).items()
            if value is not None or key in ("description", "category")
        }
        _check_price_and_stock(data.get("price"), None)

        with atomic(self.db):
            product = self.repo.get_product(product_id)
            if product is None:
                raise NotFoundError("product", product_id)

            if data.get("name") and self.repo.find_active_by_name(data["name"], exclude_id=product_id):
                raise DuplicateError("product", "name")

            self.repo.update_product(product_id, data)

        return product

    def adjust_stock(self, product_id: int, delta: int) -> ProductModel:
        """
        Reczna korekta stanu o delta, tym samym warunkowym UPDATE co przy
        zamowieniach - nie nadpisuje rezerwacji zrobionych w miedzyczasie.
        """
        if delta == 0:
            raise InvalidRequestError("Stock delta must not be 0")

        with atomic(self.db):
            self.repo.adjust_stock(product_id, delta)
            product = self.repo.get_product(product_id)

        return product

    def deactivate_product(self, product_id: int) -> ProductModel:
        with atomic(self.db):
            if self.repo.update_product(product_id, {"is_active": False}) == 0:
                raise NotFoundError("product", product_id)
            product = self.repo.get_product(product_id)

        logger.info(f"Product {product_id} deactivated")
        return product

    def get_product(self, product_id: int) -> ProductModel:
        product = self.repo.get_product(product_id)
        if product is None:
            raise NotFoundError("product", product_id)
        return product

    def list_products(self, pagination: Pagination, category: str | None = None) -> Page:
        return self.repo.list_active(pagination, category=category)

    def low_stock_products(self, threshold: int = LOW_STOCK_THRESHOLD) -> list[ProductModel]:
        return self.repo.low_stock(threshold)

    def categories(self) -> list[str]:
        return self.repo.categories()
