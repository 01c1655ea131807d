import json
from datetime import datetime

import httpx
import pytest

from app.domain.models import ConfirmedOrder, LedgerResult, OrderLine
from app.infrastructure.sheet_ledger import LOCAL_SAVE_MESSAGE, SheetOrderLedger, format_order_time

SCRIPT_URL = "https://script.example.com/macros/s/abc/exec"


@pytest.fixture
def order(details) -> ConfirmedOrder:
    return ConfirmedOrder(
        **details.model_dump(),
        order_number="ORD-123456",
        estimated_delivery_time="20-30 分鐘",
        items=(OrderLine(name="經典漢堡", quantity=2), OrderLine(name="薯條", quantity=1)),
        subtotal=440,
        shipping_fee=30,
        total=470,
    )


async def persist_with(handler, order: ConfirmedOrder, script_url: str = SCRIPT_URL) -> LedgerResult:
    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        return await SheetOrderLedger(script_url, http_client=client).persist(order)


@pytest.mark.asyncio
async def test_unconfigured_ledger_skips_network(order) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    got = await persist_with(handler, order, script_url="")
    assert got.success
    assert got.message == LOCAL_SAVE_MESSAGE


@pytest.mark.asyncio
async def test_posts_flattened_order(order) -> None:
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"success": True, "message": "Saved"})

    got = await persist_with(handler, order)

    assert got.success
    assert got.message == "Saved"
    request = seen[0]
    assert request.method == "POST"
    assert request.url.params["action"] == "saveOrder"
    assert request.headers["content-type"] == "text/plain;charset=utf-8"
    body = json.loads(request.content.decode("utf-8"))
    data = body["orderData"]
    assert data["items"] == "經典漢堡 x2, 薯條 x1"
    assert data["orderNumber"] == "ORD-123456"
    assert data["customerName"] == order.customer_name
    assert data["total"] == 470
    assert "orderTime" in data


@pytest.mark.asyncio
async def test_non_2xx_is_failure(order) -> None:
    got = await persist_with(lambda request: httpx.Response(500, text="oops"), order)
    assert not got.success
    assert "500" in got.message


@pytest.mark.asyncio
async def test_logical_failure_uses_error_field(order) -> None:
    got = await persist_with(lambda request: httpx.Response(200, json={"success": False, "error": "Sheet locked"}), order)
    assert not got.success
    assert got.message == "Sheet locked"


@pytest.mark.asyncio
async def test_logical_failure_without_error_field(order) -> None:
    got = await persist_with(lambda request: httpx.Response(200, json={"success": False}), order)
    assert not got.success
    assert got.message == "無法將訂單儲存至 Google Sheets"


@pytest.mark.asyncio
async def test_transport_error_is_failure(order) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    got = await persist_with(handler, order)
    assert not got.success
    assert got.message == "connection refused"


@pytest.mark.parametrize(
    "moment,expected",
    (
        (datetime(2024, 5, 3, 15, 4, 5), "2024/5/3 下午3:04:05"),
        (datetime(2024, 12, 25, 0, 30, 0), "2024/12/25 上午12:30:00"),
        (datetime(2024, 1, 9, 12, 0, 59), "2024/1/9 下午12:00:59"),
    ),
)
def test_format_order_time(moment: datetime, expected: str) -> None:
    assert format_order_time(moment) == expected
