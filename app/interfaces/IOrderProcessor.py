from abc import ABC, abstractmethod
from typing import Sequence

from app.domain.models import CartItem, OrderDetails, ProcessedOrder

class IOrderProcessor(ABC):
    @abstractmethod
    async def process_order(self, details: OrderDetails, cart: Sequence[CartItem]) -> ProcessedOrder:
        """Assign an order number and a delivery estimate."""
        pass
