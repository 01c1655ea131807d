from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

ORDER_NUMBER_PATTERN = r"^ORD-\d{6}$"

class WireModel(BaseModel):
    """Snake_case in Python, camelCase on the wire (cart slot, ledger, API)."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class Restaurant(WireModel):
    id: str
    name: str
    category: str
    rating: float = Field(ge=0, le=5)
    reviews: int = Field(ge=0)
    delivery_time: str
    min_order: int = Field(ge=0)
    image: str


class MenuItem(WireModel):
    model_config = ConfigDict(frozen=True)

    id: str  # unique within one restaurant's menu
    name: str
    price: float = Field(ge=0)
    restaurant_name: str


class CartItem(MenuItem):
    quantity: int = Field(ge=1)

    @classmethod
    def from_menu_item(cls, item: MenuItem, quantity: int = 1) -> "CartItem":
        return cls(**item.model_dump(include=set(MenuItem.model_fields)), quantity=quantity)


class OrderDetails(WireModel):
    customer_name: str
    customer_phone: str
    delivery_address: str
    payment_method: str  # label only, no payment is taken
    order_notes: str | None = None


class ProcessedOrder(WireModel):
    order_number: str = Field(pattern=ORDER_NUMBER_PATTERN)
    estimated_delivery_time: str


class OrderLine(WireModel):
    model_config = ConfigDict(frozen=True)

    name: str
    quantity: int = Field(ge=1)


class ConfirmedOrder(OrderDetails):
    model_config = ConfigDict(frozen=True)

    order_number: str
    estimated_delivery_time: str
    items: tuple[OrderLine, ...]
    subtotal: float = Field(ge=0)
    shipping_fee: float = Field(ge=0)
    total: float

    @model_validator(mode="after")
    def _check_total(self):
        if abs(self.total - (self.subtotal + self.shipping_fee)) > 1e-9:
            raise ValueError("total must equal subtotal + shipping fee")
        return self


class LedgerResult(BaseModel):
    success: bool
    message: str = ""
