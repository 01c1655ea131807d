import json
import logging
import random
from typing import Sequence

from app.core.config import Settings
from app.domain.models import CartItem, OrderDetails, ProcessedOrder
from app.domain.prompts import ORDER_PROMPT
from app.infrastructure.llm import build_llm, generate_json
from app.interfaces.IOrderProcessor import IOrderProcessor

logger = logging.getLogger(__name__)

DEFAULT_DELIVERY_ESTIMATE = "20-30 分鐘"


class StaticOrderProcessor(IOrderProcessor):
    def __init__(self, rng: random.Random | None = None):
        self.rng = rng or random.Random()

    async def process_order(self, details: OrderDetails, cart: Sequence[CartItem]) -> ProcessedOrder:
        return ProcessedOrder(
            order_number=f"ORD-{self.rng.randint(100000, 999999)}",
            estimated_delivery_time=DEFAULT_DELIVERY_ESTIMATE,
        )


class GeneratedOrderProcessor(IOrderProcessor):
    def __init__(self, llm, fallback: IOrderProcessor | None = None):
        self.llm = llm
        self.fallback = fallback or StaticOrderProcessor()

    async def process_order(self, details: OrderDetails, cart: Sequence[CartItem]) -> ProcessedOrder:
        prompt = ORDER_PROMPT.format(
            details=json.dumps(details.to_wire(), ensure_ascii=False),
            items=", ".join(f"{item.name} x{item.quantity}" for item in cart),
        )
        try:
            data = await generate_json(self.llm, prompt)
            # a malformed order number fails validation and falls back
            return ProcessedOrder.model_validate(data)
        except Exception as e:
            logger.error(f"❌ Order processing via AI failed: {e}")
            return await self.fallback.process_order(details, cart)


def build_order_processor(settings: Settings, llm=None) -> IOrderProcessor:
    llm = llm or build_llm(settings)
    if llm is None:
        return StaticOrderProcessor()
    return GeneratedOrderProcessor(llm)
