# backoffice/api/routers/orders.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from backoffice.api.errors import http_error
from backoffice.data.database import get_db
from backoffice.domain.errors import OrderError
from backoffice.domain.schemas import (
    OrderCreate,
    OrderDetailsOut,
    OrderItemOut,
    OrderOut,
    OrderStats,
    OrderStatusUpdate,
    PageOut,
)
from backoffice.services.order_service import OrderService
from backoffice.services.order_status_service import OrderStatusService
from backoffice.services.stats_service import StatsService
from backoffice.utils.pagination import paginate

router = APIRouter(prefix="/orders", tags=["orders"])


def get_service(db: Session):
    return OrderService(db)


def get_status_service(db: Session):
    return OrderStatusService(db)


def _details(svc: OrderService, order_id: int) -> OrderDetailsOut:
    order, items = svc.get_order_with_items(order_id)
    return OrderDetailsOut(
        **OrderOut.model_validate(order).model_dump(),
        items=[OrderItemOut.model_validate(i) for i in items],
    )


def _page(result) -> PageOut[OrderOut]:
    return PageOut[OrderOut].model_validate(result, from_attributes=True)


@router.post("/", response_model=OrderDetailsOut, status_code=201)
def create_order(
    payload: OrderCreate,
    user_id: int = Query(...),
    db: Session = Depends(get_db),
):
    """
    Tworzy zamówienie zalogowanego użytkownika.
    Stan produktów jest zdejmowany w tej samej transakcji.
    """
    svc = get_service(db)
    try:
        order_id = svc.create_order(user_id, payload.items)
        return _details(svc, order_id)
    except OrderError as e:
        raise http_error(e)


@router.post("/user/{user_id}", response_model=OrderDetailsOut, status_code=201)
def create_order_for_user(
    user_id: int,
    payload: OrderCreate,
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        order_id = svc.create_order(user_id, payload.items)
        return _details(svc, order_id)
    except OrderError as e:
        raise http_error(e)


@router.get("/", response_model=PageOut[OrderOut])
def list_orders(
    page: int | None = Query(None),
    limit: int | None = Query(None),
    db: Session = Depends(get_db),
):
    return _page(get_service(db).list_orders(paginate(page, limit)))


@router.get("/my-orders", response_model=PageOut[OrderOut])
def my_orders(
    user_id: int = Query(...),
    page: int | None = Query(None),
    limit: int | None = Query(None),
    db: Session = Depends(get_db),
):
    return _page(get_service(db).list_orders_by_user(user_id, paginate(page, limit)))


@router.get("/stats", response_model=OrderStats)
def order_stats(db: Session = Depends(get_db)):
    return StatsService(db).get_order_stats()


@router.get("/status/{status}", response_model=PageOut[OrderOut])
def orders_by_status(
    status: str,
    page: int | None = Query(None),
    limit: int | None = Query(None),
    db: Session = Depends(get_db),
):
    try:
        return _page(get_service(db).list_orders_by_status(status, paginate(page, limit)))
    except OrderError as e:
        raise http_error(e)


@router.get("/user/{user_id}", response_model=PageOut[OrderOut])
def orders_by_user(
    user_id: int,
    page: int | None = Query(None),
    limit: int | None = Query(None),
    db: Session = Depends(get_db),
):
    return _page(get_service(db).list_orders_by_user(user_id, paginate(page, limit)))


@router.get("/{order_id}", response_model=OrderOut)
def get_order(order_id: int, db: Session = Depends(get_db)):
    try:
        return get_service(db).get_order(order_id)
    except OrderError as e:
        raise http_error(e)


@router.get("/{order_id}/details", response_model=OrderDetailsOut)
def get_order_details(order_id: int, db: Session = Depends(get_db)):
    try:
        return _details(get_service(db), order_id)
    except OrderError as e:
        raise http_error(e)


@router.patch("/{order_id}/status", response_model=OrderOut)
def update_order_status(
    order_id: int,
    payload: OrderStatusUpdate,
    db: Session = Depends(get_db),
):
    try:
        return get_status_service(db).set_status(order_id, payload.status, override=payload.override)
    except OrderError as e:
        raise http_error(e)


@router.patch("/{order_id}/cancel", response_model=OrderOut)
def cancel_my_order(
    order_id: int,
    user_id: int = Query(...),
    db: Session = Depends(get_db),
):
    """Anulowanie przez właściciela - tylko pending/processing."""
    try:
        return get_status_service(db).cancel_order_as_owner(order_id, user_id)
    except OrderError as e:
        raise http_error(e)


@router.patch("/{order_id}/cancel-admin", response_model=OrderOut)
def cancel_order(order_id: int, db: Session = Depends(get_db)):
    try:
        return get_status_service(db).cancel_order(order_id)
    except OrderError as e:
        raise http_error(e)
