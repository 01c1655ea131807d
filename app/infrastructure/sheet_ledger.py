import json
import logging
from datetime import datetime

import httpx
import pytz

from app.core.config import Settings
from app.domain.models import ConfirmedOrder, LedgerResult
from app.interfaces.IOrderLedger import IOrderLedger

logger = logging.getLogger(__name__)

LOCAL_SAVE_MESSAGE = "Order processed locally."


def format_order_time(moment: datetime) -> str:
    """Timestamp in the zh-TW locale style, e.g. 2024/5/3 下午3:04:05."""
    period = "上午" if moment.hour < 12 else "下午"
    hour = moment.hour % 12 or 12
    return f"{moment.year}/{moment.month}/{moment.day} {period}{hour}:{moment:%M:%S}"


def build_sheet_row(order: ConfirmedOrder, order_time: str) -> dict:
    """Flatten an order for a spreadsheet row: items become one display string."""
    row = order.to_wire()
    row["items"] = ", ".join(f"{line.name} x{line.quantity}" for line in order.items)
    row["orderTime"] = order_time
    return row


class SheetOrderLedger(IOrderLedger):
    """Posts confirmed orders to a Google Apps Script endpoint backed by a sheet."""

    def __init__(
        self,
        script_url: str = "",
        *,
        http_client: httpx.AsyncClient | None = None,
        timezone: str = "Asia/Taipei",
        http_timeout: float = 30.0,
    ):
        self.script_url = script_url
        self.http_client = http_client or httpx.AsyncClient(timeout=http_timeout, follow_redirects=True)
        self.timezone = pytz.timezone(timezone)

    @property
    def enabled(self) -> bool:
        return bool(self.script_url)

    async def persist(self, order: ConfirmedOrder) -> LedgerResult:
        if not self.enabled:
            logger.warning("⚠️ Google Sheets script URL is not configured. Skipping save order.")
            # do not block the checkout flow when no ledger is set up
            return LedgerResult(success=True, message=LOCAL_SAVE_MESSAGE)

        row = build_sheet_row(order, format_order_time(datetime.now(self.timezone)))
        try:
            response = await self.http_client.post(
                self.script_url,
                params={"action": "saveOrder"},
                headers={"Content-Type": "text/plain;charset=utf-8"},
                content=json.dumps({"orderData": row}, ensure_ascii=False).encode("utf-8"),
                follow_redirects=True,
            )
            if not response.is_success:
                raise RuntimeError(f"Google Sheets API 回應錯誤，狀態碼: {response.status_code}")

            result = response.json()
            if not result.get("success"):
                raise RuntimeError(result.get("error") or "無法將訂單儲存至 Google Sheets")

            logger.info(f"✅ Order {order.order_number} saved to Google Sheets")
            return LedgerResult(success=True, message=result.get("message") or "")
        except (httpx.HTTPError, RuntimeError, ValueError, AttributeError) as e:
            logger.error(f"❌ Failed to save order to Google Sheets: {e}")
            return LedgerResult(success=False, message=str(e) or "儲存訂單時發生未知錯誤")

    async def aclose(self):
        await self.http_client.aclose()


def build_order_ledger(settings: Settings, http_client: httpx.AsyncClient | None = None) -> SheetOrderLedger:
    return SheetOrderLedger(
        settings.GOOGLE_SHEETS_SCRIPT_URL,
        http_client=http_client,
        timezone=settings.ORDER_TIMEZONE,
        http_timeout=settings.LEDGER_HTTP_TIMEOUT_SECONDS,
    )
