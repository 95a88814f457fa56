"""
API Schemas for the Shopfront client

Each Pydantic model mirrors one backend resource or request body.
Attributes are snake_case in Python and camelCase on the wire:
- Product.shop_id <-> "shopId"
- Order.payment_status <-> "paymentStatus"

Create* requests carry the full payload, Update* requests are partial
patches: only the fields a caller sets are sent.
"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

Role = Literal["CUSTOMER", "SELLER", "ADMIN"]
OrderStatus = Literal["PENDING", "CONFIRMED", "SHIPPED", "DELIVERED", "CANCELLED"]
PaymentStatus = Literal["PENDING", "PAID", "FAILED", "REFUNDED"]


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ----------------------------------------------------------------------------
# Users
# ----------------------------------------------------------------------------

class User(ApiModel):
    id: int
    name: str = Field(..., description="Full name")
    email: str = Field(..., description="Email address")
    # Only present when the backend chooses to echo it
    password: Optional[str] = None
    role: Role
    created_at: datetime
    updated_at: datetime


class LoginRequest(ApiModel):
    email: EmailStr
    password: str


class LoginResponse(ApiModel):
    user: User
    token: str


class RegisterRequest(ApiModel):
    name: str
    email: EmailStr
    password: str
    role: Optional[Literal["CUSTOMER", "SELLER"]] = None


class CreateUserRequest(ApiModel):
    name: str
    email: EmailStr
    password: str
    role: Role


class UpdateUserRequest(ApiModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    password: Optional[str] = None


# ----------------------------------------------------------------------------
# Profiles
# ----------------------------------------------------------------------------

class Profile(ApiModel):
    """
    One profile per user, looked up by user_id
    """
    id: int
    user_id: int
    first_name: str
    last_name: str
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = None
    avatar: Optional[str] = Field(None, description="Avatar image URL")
    created_at: datetime
    updated_at: datetime


class CreateProfileRequest(ApiModel):
    user_id: int
    first_name: str
    last_name: str
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = None
    avatar: Optional[str] = None


class UpdateProfileRequest(ApiModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = None
    avatar: Optional[str] = None


# ----------------------------------------------------------------------------
# Shops
# ----------------------------------------------------------------------------

class Shop(ApiModel):
    """
    Shops are owned by a user (owner_id)
    """
    id: int
    name: str
    description: str
    owner_id: int
    address: str
    city: str
    state: str
    zip_code: str
    country: str
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    logo: Optional[str] = Field(None, description="Logo image URL")
    is_active: bool = Field(..., description="Whether the shop is listed")
    created_at: datetime
    updated_at: datetime


class CreateShopRequest(ApiModel):
    name: str
    description: str
    owner_id: int
    address: str
    city: str
    state: str
    zip_code: str
    country: str
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    logo: Optional[str] = None


class UpdateShopRequest(ApiModel):
    name: Optional[str] = None
    description: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    logo: Optional[str] = None
    is_active: Optional[bool] = None


# ----------------------------------------------------------------------------
# Products
# ----------------------------------------------------------------------------

class Product(ApiModel):
    id: int
    name: str = Field(..., description="Product name")
    description: str
    price: float = Field(..., description="Unit price in rupees")
    stock: int = Field(..., description="Available inventory")
    category: str
    brand: Optional[str] = None
    sku: Optional[str] = None
    images: List[str] = Field(default_factory=list, description="Image URLs, in display order")
    shop_id: int
    is_active: bool
    created_at: datetime
    updated_at: datetime


class CreateProductRequest(ApiModel):
    name: str
    description: str
    price: float
    stock: int
    category: str
    brand: Optional[str] = None
    sku: Optional[str] = None
    images: List[str]
    shop_id: int


class UpdateProductRequest(ApiModel):
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    stock: Optional[int] = None
    category: Optional[str] = None
    brand: Optional[str] = None
    sku: Optional[str] = None
    images: Optional[List[str]] = None
    is_active: Optional[bool] = None


# ----------------------------------------------------------------------------
# Carts & Cart Items
# ----------------------------------------------------------------------------

class Cart(ApiModel):
    """
    One cart per (user, shop) by convention; totals are computed server-side
    """
    id: int
    user_id: int
    shop_id: int
    total_amount: float
    item_count: int
    created_at: datetime
    updated_at: datetime


class CartItem(ApiModel):
    id: int
    cart_id: int
    product_id: int
    quantity: int
    price: float = Field(..., description="Unit price when added")
    created_at: datetime
    updated_at: datetime


class CreateCartRequest(ApiModel):
    user_id: int
    shop_id: int


class UpdateCartRequest(ApiModel):
    total_amount: Optional[float] = None
    item_count: Optional[int] = None


class CreateCartItemRequest(ApiModel):
    product_id: int
    quantity: int


class UpdateCartItemRequest(ApiModel):
    quantity: int


class UpdateCartItemFullRequest(ApiModel):
    """
    Body of PUT /api/cart-items/{id}; the backend replaces the whole item
    """
    cart_id: int
    product_id: int
    quantity: int


# ----------------------------------------------------------------------------
# Orders & Order Items
# ----------------------------------------------------------------------------

class Order(ApiModel):
    """
    Snapshot of a checked-out cart
    """
    id: int
    user_id: int
    shop_id: int
    total_amount: float
    status: OrderStatus
    shipping_address: str
    payment_method: str
    payment_status: PaymentStatus
    created_at: datetime
    updated_at: datetime


class OrderItem(ApiModel):
    id: int
    order_id: int
    product_id: int
    quantity: int
    price: float
    created_at: datetime
    updated_at: datetime


class CreateOrderRequest(ApiModel):
    user_id: int
    shop_id: int
    total_amount: float
    shipping_address: str
    payment_method: str


class UpdateOrderRequest(ApiModel):
    status: Optional[OrderStatus] = None
    payment_status: Optional[PaymentStatus] = None


class CreateOrderItemRequest(ApiModel):
    product_id: int
    quantity: int
    price: float
