"""HTTP client for the Shopfront backend services.

One RequestDispatcher does the actual HTTP work; ShopApi groups one coroutine
per backend endpoint on top of it.
"""

import json
import logging
from functools import lru_cache
from typing import Any, Dict, List, Literal, Optional, Union

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from config import ClientConfig
from schemas import (
    Cart,
    CartItem,
    CreateCartItemRequest,
    CreateCartRequest,
    CreateOrderItemRequest,
    CreateOrderRequest,
    CreateProductRequest,
    CreateProfileRequest,
    CreateShopRequest,
    CreateUserRequest,
    LoginRequest,
    LoginResponse,
    Order,
    OrderItem,
    OrderStatus,
    Product,
    Profile,
    RegisterRequest,
    Shop,
    UpdateCartItemFullRequest,
    UpdateCartRequest,
    UpdateOrderRequest,
    UpdateProductRequest,
    UpdateProfileRequest,
    UpdateShopRequest,
    UpdateUserRequest,
    User,
)
from token_storage import AUTH_TOKEN_KEY

HttpMethod = Literal["GET", "POST", "PUT", "DELETE"]
Payload = Union[BaseModel, Dict[str, Any]]

logger = logging.getLogger(__name__)


# ----------------------------------------------------------------------------
# Errors
# ----------------------------------------------------------------------------

class ApiError(Exception):
    """Base class for errors raised by the client."""


class RequestFailed(ApiError):
    """The backend answered with a non-2xx status."""

    def __init__(self, method: str, path: str, status_code: int, text: str):
        self.method = method
        self.path = path
        self.status_code = status_code
        self.text = text
        super().__init__(f"{method} {path} -> {status_code}: {text}")


class MalformedResponse(ApiError, ValueError):
    """A 2xx body that is not JSON, or not the shape the endpoint promises."""

    def __init__(self, method: str, path: str, reason: str):
        self.method = method
        self.path = path
        super().__init__(f"{method} {path}: {reason}")


# ----------------------------------------------------------------------------
# Dispatcher
# ----------------------------------------------------------------------------

def to_body(payload: Any) -> Any:
    if isinstance(payload, BaseModel):
        return payload.model_dump(mode="json", by_alias=True, exclude_unset=True)
    return payload


@lru_cache(maxsize=None)
def _adapter(response_model) -> TypeAdapter:
    return TypeAdapter(response_model)


class RequestDispatcher:
    def __init__(self, config: Optional[ClientConfig] = None):
        self.config = config or ClientConfig()

    def build_headers(self, headers: Optional[Dict[str, str]] = None) -> httpx.Headers:
        # httpx.Headers is case-insensitive, so caller headers replace ours
        request_headers = httpx.Headers({"Content-Type": "application/json"})
        request_headers.update(headers or {})
        token = self.config.storage.get_item(AUTH_TOKEN_KEY)
        if token:
            request_headers["Authorization"] = f"Bearer {token}"
        return request_headers

    async def request(
        self,
        path: str,
        method: HttpMethod,
        body: Any = None,
        headers: Optional[Dict[str, str]] = None,
        response_model: Any = None,
    ) -> Any:
        """
        Send one request and return the decoded JSON body.

        An empty 2xx body gives None. With response_model set (and
        validate_responses on) the JSON is validated into that type.

        Raises:
            RequestFailed on a non-2xx status.
            MalformedResponse when a 2xx body can't be decoded.
            httpx.HTTPError on connection failures, passed through untouched.
        """
        url = f"{self.config.base_url}{path}"
        content = json.dumps(to_body(body)) if body is not None else None

        logger.debug("%s %s", method, url)
        async with httpx.AsyncClient(transport=self.config.transport, timeout=None) as client:
            resp = await client.request(method, url, headers=self.build_headers(headers), content=content)

        text = resp.text
        if not resp.is_success:
            logger.warning("%s %s failed with %s", method, path, resp.status_code)
            raise RequestFailed(method, path, resp.status_code, text)

        logger.debug("%s %s -> %s", method, path, resp.status_code)
        if not text:
            return None

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise MalformedResponse(method, path, f"invalid JSON: {e}") from e

        if response_model is None or not self.config.validate_responses:
            return data
        try:
            return _adapter(response_model).validate_python(data)
        except ValidationError as e:
            raise MalformedResponse(method, path, str(e)) from e


# ----------------------------------------------------------------------------
# Service groups
# ----------------------------------------------------------------------------

class _Service:
    def __init__(self, dispatcher: RequestDispatcher):
        self._request = dispatcher.request


class UserService(_Service):
    async def get_all(self) -> List[User]:
        return await self._request("/api/users", "GET", response_model=List[User])

    async def get_by_id(self, id: int) -> User:
        return await self._request(f"/api/users/{id}", "GET", response_model=User)

    async def create(self, user: Union[CreateUserRequest, Payload]) -> User:
        return await self._request("/api/users", "POST", user, response_model=User)

    async def update(self, id: int, user: Union[UpdateUserRequest, Payload]) -> User:
        return await self._request(f"/api/users/{id}", "PUT", user, response_model=User)

    async def login(self, credentials: Union[LoginRequest, Payload]) -> LoginResponse:
        return await self._request("/api/users/login", "POST", credentials, response_model=LoginResponse)

    async def register(self, user: Union[RegisterRequest, Payload]) -> User:
        return await self._request("/api/users/register", "POST", user, response_model=User)


class ProfileService(_Service):
    async def get_by_user_id(self, user_id: int) -> Profile:
        return await self._request(f"/api/profiles/user/{user_id}", "GET", response_model=Profile)

    async def create(self, profile: Union[CreateProfileRequest, Payload]) -> Profile:
        return await self._request("/api/profiles", "POST", profile, response_model=Profile)

    async def update(self, id: int, profile: Union[UpdateProfileRequest, Payload]) -> Profile:
        return await self._request(f"/api/profiles/{id}", "PUT", profile, response_model=Profile)


class ShopService(_Service):
    async def get_all(self) -> List[Shop]:
        return await self._request("/api/shops", "GET", response_model=List[Shop])

    async def get_by_id(self, id: int) -> Shop:
        return await self._request(f"/api/shops/{id}", "GET", response_model=Shop)

    async def get_by_owner_id(self, owner_id: int) -> List[Shop]:
        return await self._request(f"/api/shops/owner/{owner_id}", "GET", response_model=List[Shop])

    async def create(self, shop: Union[CreateShopRequest, Payload]) -> Shop:
        return await self._request("/api/shops", "POST", shop, response_model=Shop)

    async def update(self, id: int, shop: Union[UpdateShopRequest, Payload]) -> Shop:
        return await self._request(f"/api/shops/{id}", "PUT", shop, response_model=Shop)


class ProductService(_Service):
    async def get_all(self) -> List[Product]:
        return await self._request("/api/products", "GET", response_model=List[Product])

    async def get_by_id(self, id: int) -> Product:
        return await self._request(f"/api/products/{id}", "GET", response_model=Product)

    async def get_by_shop_id(self, shop_id: int) -> List[Product]:
        return await self._request(f"/api/products/shop/{shop_id}", "GET", response_model=List[Product])

    async def create(self, product: Union[CreateProductRequest, Payload]) -> Product:
        return await self._request("/api/products", "POST", product, response_model=Product)

    async def update(self, id: int, product: Union[UpdateProductRequest, Payload]) -> Product:
        return await self._request(f"/api/products/{id}", "PUT", product, response_model=Product)

    async def delete(self, id: int) -> None:
        return await self._request(f"/api/products/{id}", "DELETE")

    async def update_stock(self, id: int, stock: int) -> Product:
        return await self._request(f"/api/products/{id}/stock", "PUT", {"stock": stock}, response_model=Product)


class CartService(_Service):
    async def get_by_user_id(self, user_id: int) -> List[Cart]:
        return await self._request(f"/api/carts/user/{user_id}", "GET", response_model=List[Cart])

    async def create(self, cart: Union[CreateCartRequest, Payload]) -> Cart:
        return await self._request("/api/carts", "POST", cart, response_model=Cart)

    async def get_by_id(self, id: int) -> Cart:
        return await self._request(f"/api/carts/{id}", "GET", response_model=Cart)

    async def update(self, id: int, cart: Union[UpdateCartRequest, Payload]) -> Cart:
        return await self._request(f"/api/carts/{id}", "PUT", cart, response_model=Cart)

    async def delete(self, id: int) -> None:
        return await self._request(f"/api/carts/{id}", "DELETE")

    async def add_item(self, cart_id: int, item: Union[CreateCartItemRequest, Payload]) -> CartItem:
        return await self._request(f"/api/carts/{cart_id}/items", "POST", item, response_model=CartItem)

    async def get_items(self, cart_id: int) -> List[CartItem]:
        return await self._request(f"/api/carts/{cart_id}/items", "GET", response_model=List[CartItem])


class CartItemService(_Service):
    async def get_by_cart_id(self, cart_id: int) -> List[CartItem]:
        return await self._request(f"/api/carts/{cart_id}/items", "GET", response_model=List[CartItem])

    async def add(self, cart_id: int, item: Union[CreateCartItemRequest, Payload]) -> CartItem:
        return await self._request(f"/api/carts/{cart_id}/items", "POST", item, response_model=CartItem)

    async def update(self, item_id: int, item: Union[UpdateCartItemFullRequest, Payload]) -> CartItem:
        # Backend expects the full item (cartId, productId, quantity), not a patch
        return await self._request(f"/api/cart-items/{item_id}", "PUT", item, response_model=CartItem)

    async def remove(self, item_id: int) -> None:
        return await self._request(f"/api/cart-items/{item_id}", "DELETE")


class OrderService(_Service):
    async def get_by_user_id(self, user_id: int) -> List[Order]:
        return await self._request(f"/api/orders/user/{user_id}", "GET", response_model=List[Order])

    async def get_by_shop_id(self, shop_id: int) -> List[Order]:
        return await self._request(f"/api/orders/shop/{shop_id}", "GET", response_model=List[Order])

    async def get_by_id(self, id: int) -> Order:
        return await self._request(f"/api/orders/{id}", "GET", response_model=Order)

    async def create(self, order: Union[CreateOrderRequest, Payload]) -> Order:
        return await self._request("/api/orders", "POST", order, response_model=Order)

    async def update(self, id: int, order: Union[UpdateOrderRequest, Payload]) -> Order:
        return await self._request(f"/api/orders/{id}", "PUT", order, response_model=Order)

    async def update_status(self, id: int, status: OrderStatus) -> Order:
        # Sent as a bare JSON string, e.g. "SHIPPED"
        return await self._request(f"/api/orders/{id}/status", "PUT", status, response_model=Order)


class OrderItemService(_Service):
    async def get_by_order_id(self, order_id: int) -> List[OrderItem]:
        return await self._request(f"/api/order-items/order/{order_id}", "GET", response_model=List[OrderItem])

    async def create(self, order_id: int, item: Union[CreateOrderItemRequest, Payload]) -> OrderItem:
        body = {**to_body(item), "orderId": order_id}
        return await self._request("/api/order-items", "POST", body, response_model=OrderItem)


class ShopApi:
    """
    Entry point: one attribute per backend resource.

        api = ShopApi.from_env()
        products = await api.products.get_by_shop_id(3)
    """

    def __init__(self, config: Optional[ClientConfig] = None):
        self.dispatcher = RequestDispatcher(config)
        self.users = UserService(self.dispatcher)
        self.profiles = ProfileService(self.dispatcher)
        self.shops = ShopService(self.dispatcher)
        self.products = ProductService(self.dispatcher)
        self.carts = CartService(self.dispatcher)
        self.cart_items = CartItemService(self.dispatcher)
        self.orders = OrderService(self.dispatcher)
        self.order_items = OrderItemService(self.dispatcher)

    @classmethod
    def from_env(cls, **overrides) -> "ShopApi":
        return cls(ClientConfig.from_env(**overrides))
