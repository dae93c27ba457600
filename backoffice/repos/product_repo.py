# backoffice/repos/product_repo.py
from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from backoffice.data.models.product import ProductModel
from backoffice.domain.errors import InsufficientStockError, NotFoundError
from backoffice.utils.pagination import Page, Pagination, fetch_page
from backoffice.utils.logging import get_logger

logger = get_logger(__name__)


class ProductRepo:
    """
    Dostep do produktow i stanow magazynowych.
    Repo nigdy nie robi commit - dziala w transakcji wywolujacego.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_product(self, product_id: int) -> ProductModel | None:
        # zawsze swiezy odczyt, obiekt w sesji moze byc z poprzedniej transakcji
        return self.db.get(ProductModel, product_id, populate_existing=True)

    def find_active_by_name(self, name: str, exclude_id: int | None = None) -> ProductModel | None:
        stmt = select(ProductModel).where(
            ProductModel.name == name,
            ProductModel.is_active.is_(True),
        )
        if exclude_id is not None:
            stmt = stmt.where(ProductModel.id != exclude_id)
        return self.db.execute(stmt.limit(1)).scalar_one_or_none()

    def add_product(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.db.flush()
        return product

    def update_product(self, product_id: int, data: dict) -> int:
        if not data:
            return 0
        result = self.db.execute(
            update(ProductModel)
            .where(ProductModel.id == product_id)
            .values(**data)
            .execution_options(synchronize_session=False)
        )
        self.db.get(ProductModel, product_id, populate_existing=True)
        return result.rowcount

    def adjust_stock(self, product_id: int, delta: int) -> int:
        """
        Zmiana stanu o delta jednym warunkowym UPDATE:
        UPDATE products SET stock = stock + :delta WHERE id = :id AND stock + :delta >= 0

        Baza blokuje wiersz na czas transakcji, wiec dwie rownolegle zmiany
        tego samego produktu nie nadpisuja sie (brak lost update).
        Zwraca nowy stan.
        """
        new_stock = ProductModel.stock + delta
        result = self.db.execute(
            update(ProductModel)
            .where(ProductModel.id == product_id, new_stock >= 0)
            .values(stock=new_stock)
            .execution_options(synchronize_session=False)
        )

        # odswiez obiekt w sesji, UPDATE poszedl obok ORM
        product = self.db.get(ProductModel, product_id, populate_existing=True)

        if result.rowcount == 0:
            if product is None:
                raise NotFoundError("product", product_id)
            raise InsufficientStockError(
                product_id=product_id,
                available=product.stock,
                requested=-delta,
                name=product.name,
            )

        logger.info(f"Stock of product {product_id} changed by {delta:+d}, now {product.stock}")
        return product.stock

    def list_active(self, pagination: Pagination, category: str | None = None) -> Page:
        criteria = [ProductModel.is_active.is_(True)]
        if category:
            criteria.append(ProductModel.category == category)
        return fetch_page(
            self.db,
            ProductModel,
            *criteria,
            pagination=pagination,
            order_by=(ProductModel.id,),
        )

    def low_stock(self, threshold: int) -> list[ProductModel]:
        return list(
            self.db.execute(
                select(ProductModel)
                .where(ProductModel.stock <= threshold, ProductModel.is_active.is_(True))
                .order_by(ProductModel.stock.asc(), ProductModel.id)
            ).scalars().all()
        )

    def categories(self) -> list[str]:
        return list(
            self.db.execute(
                select(func.distinct(ProductModel.category))
                .where(
                    ProductModel.category.is_not(None),
                    ProductModel.category != "",
                    ProductModel.is_active.is_(True),
                )
                .order_by(ProductModel.category)
            ).scalars().all()
        )
