from abc import ABC, abstractmethod

from app.domain.models import ConfirmedOrder, LedgerResult

class IOrderLedger(ABC):
    @abstractmethod
    async def persist(self, order: ConfirmedOrder) -> LedgerResult:
        """Record a confirmed order. Failures are reported in the result, not raised."""
        pass
