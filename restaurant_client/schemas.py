"""
Pydantic Schemas for the Ordering Data Layer

Records exchanged between the client, the remote API and the mock store.
Attributes are snake_case in Python and camelCase on the wire, so every
model accepts both spellings and dumps camelCase with `by_alias=True`.

Covers:
- Restaurants, menu items and their customization definitions
- Carts and cart line items
- Orders with independent status / payment-status axes
- Restaurant and dish ratings
- Inbox messages
- Users and the persisted auth state

Author: Khalil Bannouri
Version: 1.0.0
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel


def utcnow() -> datetime:
    """Timezone-aware current time used for every timestamp."""
    return datetime.now(timezone.utc)


class CamelModel(BaseModel):
    """Base model: snake_case attributes, camelCase JSON."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_wire(self) -> dict:
        """Serialize for the REST API."""
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)


# Chosen customization value: one option / free text, or a set of options
CustomizationValue = Union[str, list[str]]


# =============================================================================
# ENUMS
# =============================================================================

class UserRole(str, Enum):
    EMPLOYEE = "employee"
    ADMIN = "admin"
    STAFF = "staff"


class CustomizationKind(str, Enum):
    SINGLE_CHOICE = "radio"
    MULTI_CHOICE = "checkbox"
    FREE_TEXT = "text"


class OrderStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    READY = "ready"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"


class DeliveryType(str, Enum):
    PICKUP = "pickup"
    DINE_IN = "dine-in"


class MessageType(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


# =============================================================================
# AUTH
# =============================================================================

class User(CamelModel):
    id: str
    email: str
    name: str
    role: UserRole
    phone: Optional[str] = None
    created_at: Optional[datetime] = None


class AuthState(CamelModel):
    """Persisted credential blob: `{ user, token, isAuthenticated }`."""
    user: Optional[User] = None
    token: Optional[str] = None
    is_authenticated: bool = False


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class LoginResponse(CamelModel):
    user: User
    token: str
    refresh_token: Optional[str] = None


# =============================================================================
# RESTAURANTS & MENU
# =============================================================================

class NutritionInfo(CamelModel):
    calories: float = Field(..., ge=0)
    protein: float = Field(..., ge=0)
    carbs: float = Field(..., ge=0)
    fat: float = Field(..., ge=0)


class Customization(CamelModel):
    """A customization a menu item offers (size, toppings, notes...)."""
    id: str
    name: str
    kind: CustomizationKind = Field(
        default=CustomizationKind.SINGLE_CHOICE,
        alias="type",
    )
    required: bool = False
    options: list[str] = Field(default_factory=list)


class MenuItemBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: str = ""
    price: float = Field(..., ge=0)
    category: str = "main"
    is_available: bool = True
    image_url: Optional[str] = None
    preparation_time: Optional[int] = Field(None, ge=0)
    allergens: list[str] = Field(default_factory=list)
    nutrition_info: Optional[NutritionInfo] = None
    customizations: list[Customization] = Field(default_factory=list)


class MenuItemCreate(MenuItemBase):
    """Request body for adding a menu item to a restaurant."""


class MenuItemUpdate(CamelModel):
    """Partial update; only the fields that are set are applied."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    category: Optional[str] = None
    is_available: Optional[bool] = None
    image_url: Optional[str] = None
    preparation_time: Optional[int] = Field(None, ge=0)
    allergens: Optional[list[str]] = None
    nutrition_info: Optional[NutritionInfo] = None
    customizations: Optional[list[Customization]] = None


class MenuItem(MenuItemBase):
    id: str
    restaurant_id: str


class RestaurantBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: str = ""
    cuisine: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    image_url: Optional[str] = None
    delivery_time: Optional[str] = None
    is_active: bool = True
    # Cached summary fed by restaurant management, not by rating creation
    rating: float = Field(default=0.0, ge=0, le=5)
    total_ratings: int = Field(default=0, ge=0)


class RestaurantCreate(RestaurantBase):
    """Request body for creating a restaurant."""


class RestaurantUpdate(CamelModel):
    """Partial update; only the fields that are set are applied."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    cuisine: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    image_url: Optional[str] = None
    delivery_time: Optional[str] = None
    is_active: Optional[bool] = None
    rating: Optional[float] = Field(None, ge=0, le=5)
    total_ratings: Optional[int] = Field(None, ge=0)


class Restaurant(RestaurantBase):
    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# =============================================================================
# CART
# =============================================================================

class CartItemCreate(CamelModel):
    """A line to add: menu item snapshot, quantity and chosen options."""
    menu_item: MenuItem
    quantity: int = Field(..., ge=1)
    customizations: dict[str, CustomizationValue] = Field(default_factory=dict)
    notes: Optional[str] = Field(None, max_length=500)


class CartItemUpdate(CamelModel):
    quantity: Optional[int] = Field(None, ge=1)
    customizations: Optional[dict[str, CustomizationValue]] = None
    notes: Optional[str] = Field(None, max_length=500)


class CartItem(CartItemCreate):
    id: str

    @property
    def line_total(self) -> float:
        return round(self.menu_item.price * self.quantity, 2)


class Cart(CamelModel):
    id: str
    user_id: str
    restaurant_id: str
    items: list[CartItem] = Field(default_factory=list)
    # Derived; recomputed after every mutation
    total_amount: float = 0.0

    @property
    def is_empty(self) -> bool:
        return not self.items


# =============================================================================
# ORDERS
# =============================================================================

class OrderItem(CamelModel):
    """Price/quantity/customization snapshot taken when the order is placed."""
    id: Optional[str] = None
    menu_item_id: str
    name: Optional[str] = None
    price: float = Field(..., ge=0)
    quantity: int = Field(..., ge=1)
    customizations: dict[str, CustomizationValue] = Field(default_factory=dict)
    special_instructions: Optional[str] = None

    @property
    def line_total(self) -> float:
        return round(self.price * self.quantity, 2)


class CreateOrderRequest(CamelModel):
    """Checkout payload. Status fields are never accepted from the caller."""
    restaurant_id: str
    restaurant_name: Optional[str] = None
    items: list[OrderItem] = Field(..., min_length=1)
    total_amount: Optional[float] = Field(None, ge=0)
    delivery_type: DeliveryType = DeliveryType.PICKUP
    delivery_address: Optional[str] = None
    payment_method: Optional[str] = None
    notes: Optional[str] = Field(None, max_length=500)


class Order(CamelModel):
    id: str
    user_id: str
    restaurant_id: str
    restaurant_name: str = "Unknown Restaurant"
    items: list[OrderItem]
    total_amount: float
    status: OrderStatus = OrderStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING
    delivery_type: DeliveryType = DeliveryType.PICKUP
    delivery_address: Optional[str] = None
    payment_method: Optional[str] = None
    notes: str = ""
    order_date: datetime = Field(default_factory=utcnow)
    estimated_ready_time: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


# =============================================================================
# RATINGS
# =============================================================================

class CreateRestaurantRatingRequest(CamelModel):
    order_id: str
    restaurant_id: str
    taste_rating: int = Field(..., ge=1, le=5)
    value_rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = Field(None, max_length=1000)


class UpdateRestaurantRatingRequest(CamelModel):
    taste_rating: Optional[int] = Field(None, ge=1, le=5)
    value_rating: Optional[int] = Field(None, ge=1, le=5)
    comment: Optional[str] = Field(None, max_length=1000)


class CreateDishRatingRequest(CamelModel):
    order_id: str
    dish_id: str
    restaurant_id: str
    rating: int = Field(..., ge=1, le=5)


class UpdateDishRatingRequest(CamelModel):
    rating: int = Field(..., ge=1, le=5)


class RestaurantRating(CamelModel):
    id: str
    type: Literal["restaurant"] = "restaurant"
    user_id: str
    order_id: str
    restaurant_id: str
    taste_rating: int = Field(..., ge=1, le=5)
    value_rating: int = Field(..., ge=1, le=5)
    overall_rating: float
    comment: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)


class DishRating(CamelModel):
    id: str
    type: Literal["dish"] = "dish"
    user_id: str
    order_id: str
    dish_id: str
    restaurant_id: str
    rating: int = Field(..., ge=1, le=5)
    created_at: datetime = Field(default_factory=utcnow)


class DishAverage(CamelModel):
    rating: float = 0.0
    count: int = 0


class RatingSummary(CamelModel):
    """Live averages over a restaurant's individual reviews."""
    restaurant_id: str
    count: int = 0
    average_taste: float = 0.0
    average_value: float = 0.0
    average_overall: float = 0.0


# =============================================================================
# INBOX
# =============================================================================

class InboxMessage(CamelModel):
    id: str
    user_id: str
    title: str
    message: str
    type: MessageType = MessageType.INFO
    is_read: bool = False
    created_at: datetime = Field(default_factory=utcnow)


class NotificationRequest(CamelModel):
    """Body of the broadcast endpoints."""
    title: str
    message: str
    type: MessageType = MessageType.INFO
