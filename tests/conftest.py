import asyncio

import pytest

from app.application.cart_store import CartStore
from app.application.orchestrator import CheckoutOrchestrator
from app.application.session import OrderingSession
from app.domain.models import LedgerResult, MenuItem, OrderDetails, ProcessedOrder
from app.infrastructure.cart_storage import CartStorage
from app.infrastructure.catalog_service import StaticCatalogProvider
from app.interfaces.IOrderLedger import IOrderLedger
from app.interfaces.IOrderProcessor import IOrderProcessor


class FakeProcessor(IOrderProcessor):
    def __init__(self, result=None, delay: float = 0, error: Exception | None = None):
        self.result = result or ProcessedOrder(order_number="ORD-123456", estimated_delivery_time="20-30 分鐘")
        self.delay = delay
        self.error = error
        self.calls = []

    async def process_order(self, details, cart):
        self.calls.append((details, list(cart)))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return self.result


class FakeLedger(IOrderLedger):
    def __init__(self, result=None, delay: float = 0, error: Exception | None = None):
        self.result = result or LedgerResult(success=True, message="saved")
        self.delay = delay
        self.error = error
        self.orders = []

    async def persist(self, order):
        self.orders.append(order)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return self.result


@pytest.fixture
def burger() -> MenuItem:
    return MenuItem(id="m1", name="經典漢堡", price=180, restaurant_name="熾熱鐵板燒")


@pytest.fixture
def fries() -> MenuItem:
    return MenuItem(id="m3", name="薯條", price=80, restaurant_name="熾熱鐵板燒")


@pytest.fixture
def details() -> OrderDetails:
    return OrderDetails(
        customer_name="王小明",
        customer_phone="0912345678",
        delivery_address="台北市信義區市府路1號",
        payment_method="貨到付款",
    )


@pytest.fixture
def storage() -> CartStorage:
    return CartStorage(redis_url=None, key="testCart")


@pytest.fixture
def cart(storage) -> CartStore:
    return CartStore(storage)


@pytest.fixture
def processor() -> FakeProcessor:
    return FakeProcessor()


@pytest.fixture
def ledger() -> FakeLedger:
    return FakeLedger()


@pytest.fixture
def orchestrator(processor, ledger, cart) -> CheckoutOrchestrator:
    return CheckoutOrchestrator(processor=processor, ledger=ledger, cart=cart, shipping_fee=30, timeout=0.2)


@pytest.fixture
def session(orchestrator, cart) -> OrderingSession:
    return OrderingSession(catalog=StaticCatalogProvider(), cart=cart, orchestrator=orchestrator)
