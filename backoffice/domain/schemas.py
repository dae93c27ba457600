# backoffice/domain/schemas.py
from datetime import datetime
from decimal import Decimal
from typing import Generic, List, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from backoffice.domain.status import OrderStatus

T = TypeVar("T")


class UserCreate(BaseModel):
    """Schema dla tworzenia użytkownika."""

    email: str = Field(..., min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)


class UserRead(BaseModel):
    """Schema dla użytkownika (response)."""

    id: int
    email: str
    first_name: str
    last_name: str
    is_active: bool

    model_config = ConfigDict(from_attributes=True)


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    price: Decimal = Field(..., max_digits=10, decimal_places=2)
    stock: int = 0
    category: str | None = Field(None, max_length=100)


class ProductUpdate(BaseModel):
    # stan zmieniany tylko przez /products/{id}/stock (delta)
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    price: Decimal | None = Field(None, max_digits=10, decimal_places=2)
    category: str | None = Field(None, max_length=100)

    model_config = ConfigDict(extra="forbid")


class StockAdjust(BaseModel):
    """Zmiana stanu o delta (ujemna = zdjecie ze stanu)."""

    delta: int


class ProductOut(BaseModel):
    id: int
    name: str
    description: str | None = None
    price: Decimal
    stock: int
    category: str | None = None
    is_active: bool

    model_config = ConfigDict(from_attributes=True)


class ProductStats(BaseModel):
    total: int
    active: int
    inactive: int
    low_stock: int
    categories: int
    average_price: Decimal


class OrderItemIn(BaseModel):
    """Pozycja zamówienia (request)."""

    product_id: int = Field(..., gt=0, description="ID produktu (musi być > 0)")
    quantity: int = Field(..., gt=0, description="Ilość produktu (musi być > 0)")


class OrderCreate(BaseModel):
    """Schema dla tworzenia zamówienia."""

    items: List[OrderItemIn] = Field(..., min_length=1)


class OrderStatusUpdate(BaseModel):
    status: str
    # admin: pozwala na przejscie spoza tabeli przejsc
    override: bool = False


class OrderItemOut(BaseModel):
    id: int
    product_id: int
    quantity: int
    price: Decimal

    model_config = ConfigDict(from_attributes=True)


class OrderOut(BaseModel):
    """Schema dla zamówienia (response)."""

    id: int
    user_id: int
    status: OrderStatus
    total: Decimal
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class OrderDetailsOut(OrderOut):
    items: List[OrderItemOut]


class OrderStats(BaseModel):
    total: int
    pending: int
    processing: int
    shipped: int
    delivered: int
    cancelled: int
    total_revenue: Decimal
    average_order_value: Decimal


class PageOut(BaseModel, Generic[T]):
    items: List[T]
    page: int
    limit: int
    total: int
    total_pages: int

    model_config = ConfigDict(from_attributes=True)
