# backoffice/api/routers/products.py
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from backoffice.api.errors import http_error
from backoffice.data.database import get_db
from backoffice.domain.errors import OrderError
from backoffice.domain.schemas import PageOut, ProductCreate, ProductOut, ProductStats, ProductUpdate, StockAdjust
from backoffice.services.product_service import ProductService
from backoffice.services.stats_service import StatsService
from backoffice.utils.pagination import paginate
from backoffice.utils.settings import LOW_STOCK_THRESHOLD

router = APIRouter(prefix="/products", tags=["products"])


def get_service(db: Session):
    return ProductService(db)


@router.get("/", response_model=PageOut[ProductOut])
def list_products(
    page: int | None = Query(None),
    limit: int | None = Query(None),
    category: str | None = Query(None),
    db: Session = Depends(get_db),
):
    result = get_service(db).list_products(paginate(page, limit), category=category)
    return PageOut[ProductOut].model_validate(result, from_attributes=True)


@router.get("/stats", response_model=ProductStats)
def product_stats(db: Session = Depends(get_db)):
    return StatsService(db).get_product_stats()


@router.get("/low-stock", response_model=List[ProductOut])
def low_stock(threshold: int = Query(LOW_STOCK_THRESHOLD, ge=0), db: Session = Depends(get_db)):
    return get_service(db).low_stock_products(threshold)


@router.get("/categories", response_model=List[str])
def categories(db: Session = Depends(get_db)):
    return get_service(db).categories()


@router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: int, db: Session = Depends(get_db)):
    try:
        return get_service(db).get_product(product_id)
    except OrderError as e:
        raise http_error(e)


@router.post("/", response_model=ProductOut, status_code=201)
def create_product(payload: ProductCreate, db: Session = Depends(get_db)):
    try:
        return get_service(db).create_product(payload)
    except OrderError as e:
        raise http_error(e)


@router.patch("/{product_id}", response_model=ProductOut)
def update_product(product_id: int, payload: ProductUpdate, db: Session = Depends(get_db)):
    try:
        return get_service(db).update_product(product_id, payload)
    except OrderError as e:
        raise http_error(e)


@router.patch("/{product_id}/stock", response_model=ProductOut)
def adjust_stock(product_id: int, payload: StockAdjust, db: Session = Depends(get_db)):
    try:
        return get_service(db).adjust_stock(product_id, payload.delta)
    except OrderError as e:
        raise http_error(e)


@router.delete("/{product_id}", response_model=ProductOut)
def deactivate_product(product_id: int, db: Session = Depends(get_db)):
    """Miekkie usuniecie - produkt zostaje w bazie jako nieaktywny."""
    try:
        return get_service(db).deactivate_product(product_id)
    except OrderError as e:
        raise http_error(e)
