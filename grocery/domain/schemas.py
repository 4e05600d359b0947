# grocery/domain/schemas.py
import re
from pydantic import BaseModel, Field, ConfigDict, EmailStr, field_validator
from typing import List, Literal
from decimal import Decimal
from datetime import datetime

from grocery.domain.enums import DeliveryType, OrderStatus


# =====================================================
# AUTH
# =====================================================
class LoginIn(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1, description="Hasło")


class RegisterIn(BaseModel):
    """Rejestracja - wymagane silne hasło."""

    email: EmailStr
    password: str = Field(..., min_length=12, description="Min. 12 znaków")

    @field_validator("password")
    @classmethod
    def strong_password(cls, value: str) -> str:
        return validate_password_strength(value)


class ChangePasswordIn(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=12)

    @field_validator("new_password")
    @classmethod
    def strong_password(cls, value: str) -> str:
        return validate_password_strength(value)


def validate_password_strength(value: str) -> str:
    if len(value.encode("utf-8")) > 72:
        raise ValueError("Password must be at most 72 bytes")
    if not re.search(r"[A-Z]", value):
        raise ValueError("Must include uppercase letter")
    if not re.search(r"[a-z]", value):
        raise ValueError("Must include lowercase letter")
    if not re.search(r"[0-9]", value):
        raise ValueError("Must include number")
    if not re.search(r"[^A-Za-z0-9]", value):
        raise ValueError("Must include special character")
    return value


class TokenOut(BaseModel):
    message: str
    token: str


class UserRead(BaseModel):
    id: int
    email: str
    name: str | None = None

    model_config = ConfigDict(from_attributes=True)


# =====================================================
# PRODUCTS
# =====================================================
class ProductOut(BaseModel):
    id: int
    name: str
    price: Decimal
    image_url: str | None = None
    in_stock: bool
    category: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


# =====================================================
# CART
# =====================================================
class ItemIn(BaseModel):
    """Dodanie produktu do koszyka."""

    product_id: int = Field(..., gt=0, description="ID produktu (musi być > 0)")
    quantity: int = Field(..., gt=0, description="Ilość produktu (musi być > 0)")


class QuantityIn(BaseModel):
    # <= 0 usuwa pozycje
    quantity: int


class CartItemOut(BaseModel):
    id: int
    product_id: int
    quantity: int
    product: ProductOut

    model_config = ConfigDict(from_attributes=True)


class CartOut(BaseModel):
    id: int | None = None
    user_id: int
    items: List[CartItemOut]

    model_config = ConfigDict(from_attributes=True)


class DeletedOut(BaseModel):
    message: str
    id: int


# =====================================================
# ADDRESSES
# =====================================================
class AddressCreate(BaseModel):
    street: str = Field(..., min_length=1, max_length=200)
    city: str = Field(..., min_length=1, max_length=100)
    state: str = Field(..., min_length=1, max_length=100)
    zip_code: str = Field(..., min_length=1, max_length=20)
    is_default: bool = False


class AddressUpdate(BaseModel):
    street: str | None = Field(None, min_length=1, max_length=200)
    city: str | None = Field(None, min_length=1, max_length=100)
    state: str | None = Field(None, min_length=1, max_length=100)
    zip_code: str | None = Field(None, min_length=1, max_length=20)
    is_default: bool | None = None


class AddressOut(BaseModel):
    id: int
    user_id: int
    street: str
    city: str
    state: str
    zip_code: str
    is_default: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


# =====================================================
# DISCOUNTS
# =====================================================
class DiscountValidateIn(BaseModel):
    code: str | None = None


class DiscountValidateOut(BaseModel):
    valid: bool
    amount: int | None = None
    code: str | None = None


class DiscountCodeOut(BaseModel):
    id: int
    code: str
    percentage: int

    model_config = ConfigDict(from_attributes=True)


# =====================================================
# ORDERS / CHECKOUT
# =====================================================
class LineItemIn(BaseModel):
    """Pozycja przeslana przez klienta zamiast koszyka z bazy."""

    product_id: int = Field(..., gt=0)
    quantity: int = Field(..., gt=0)


class OrderCreate(BaseModel):
    delivery_type: DeliveryType
    shipping_address_id: int | None = None
    discount_code: str | None = None
    # None -> zamowienie z koszyka uzytkownika
    items: List[LineItemIn] | None = None


class OrderItemOut(BaseModel):
    id: int
    product_id: int
    quantity: int
    price_at_purchase: Decimal
    product: ProductOut

    model_config = ConfigDict(from_attributes=True)


class OrderOut(BaseModel):
    id: int
    user_id: int
    order_date: datetime
    subtotal_amount: Decimal
    tax_amount: Decimal
    discount_amount: Decimal
    total_amount: Decimal
    delivery_type: DeliveryType
    status: OrderStatus
    shipping_address_id: int | None = None
    shipping_address: AddressOut | None = None
    discount_code: DiscountCodeOut | None = None
    items: List[OrderItemOut]

    model_config = ConfigDict(from_attributes=True)


class CheckoutOut(BaseModel):
    url: str
    order_id: int


class WebhookOut(BaseModel):
    received: bool
    status: Literal["processed", "duplicate", "ignored"]
